import pytest
from pydantic import ValidationError

from entrykit.config.target import DependencyTarget, parse_targets
from entrykit.error import EntrykitConfigError

pytestmark = [pytest.mark.unit]


class TestDependencyTarget:
    @pytest.mark.parametrize(
        "token,host,port",
        [
            pytest.param("db:5432", "db", 5432, id="simple"),
            pytest.param("db.internal.example.com:1", "db.internal.example.com", 1, id="fqdn-min-port"),
            pytest.param("10.0.0.5:65535", "10.0.0.5", 65535, id="ipv4-max-port"),
            pytest.param("  cache:6379 ", "cache", 6379, id="surrounding-whitespace"),
        ],
    )
    def test_parse_host_port(self, token, host, port):
        """Test parsing host:port tokens"""
        target = DependencyTarget.parse(token)
        assert target.host == host
        assert target.port == port
        assert target.url is None
        assert not target.is_http

    def test_parse_splits_at_last_colon(self):
        """Test the port is taken from after the last colon"""
        target = DependencyTarget.parse("::1:8080")
        assert target.host == "::1"
        assert target.port == 8080

    @pytest.mark.parametrize(
        "token,message",
        [
            pytest.param("db", "Expected host:port pair", id="no-colon"),
            pytest.param(":5432", "Missing host", id="no-host"),
            pytest.param("db:", "Invalid port", id="empty-port"),
            pytest.param("db:postgres", "Invalid port", id="named-port"),
            pytest.param("db:-1", "Invalid port", id="negative-port"),
            pytest.param("db:0", "out of range", id="zero-port"),
            pytest.param("db:65536", "out of range", id="large-port"),
        ],
    )
    def test_parse_invalid(self, token, message):
        """Test malformed tokens are rejected with a diagnostic"""
        with pytest.raises(EntrykitConfigError, match=message) as exc_info:
            DependencyTarget.parse(token)
        assert exc_info.value.value == token

    @pytest.mark.parametrize(
        "token,host,port",
        [
            pytest.param("http://api:8080/health", "api", 8080, id="explicit-port"),
            pytest.param("http://api/health", "api", 80, id="http-default-port"),
            pytest.param("https://api.example.com/ready", "api.example.com", 443, id="https-default-port"),
        ],
    )
    def test_parse_url(self, token, host, port):
        """Test parsing HTTP targets"""
        target = DependencyTarget.parse(token)
        assert target.host == host
        assert target.port == port
        assert target.url == token
        assert target.is_http
        assert str(target) == token

    @pytest.mark.parametrize(
        "token",
        [
            pytest.param("http://api:notaport/", id="bad-port"),
            pytest.param("http://api:0/", id="zero-port"),
            pytest.param("http:///health", id="no-host"),
        ],
    )
    def test_parse_invalid_url(self, token):
        """Test malformed URLs are rejected"""
        with pytest.raises(EntrykitConfigError):
            DependencyTarget.parse(token)

    def test_str(self):
        """Test string rendering of plain targets"""
        assert str(DependencyTarget(host="db", port=5432)) == "db:5432"

    def test_model_validates_port_range(self):
        """Test the model itself enforces the port range"""
        with pytest.raises(ValidationError):
            DependencyTarget(host="db", port=70000)

    def test_frozen(self):
        """Test targets are immutable and hashable"""
        target = DependencyTarget(host="db", port=5432)
        with pytest.raises(ValidationError):
            target.port = 1
        assert target == DependencyTarget.parse("db:5432")
        assert len({target, DependencyTarget.parse("db:5432")}) == 1


class TestParseTargets:
    @pytest.mark.parametrize("value", [None, "", "   ", "\n\t"])
    def test_empty(self, value):
        """Test missing or blank values yield no targets"""
        assert parse_targets(value) == []

    def test_order_preserved(self):
        """Test targets keep the order they are listed in"""
        targets = parse_targets("db:5432 cache:6379\n  http://api:8080/health")
        assert [str(t) for t in targets] == ["db:5432", "cache:6379", "http://api:8080/health"]

    def test_one_bad_token_fails_all(self):
        """Test a single malformed token fails the whole list"""
        with pytest.raises(EntrykitConfigError, match="broker"):
            parse_targets("db:5432 broker")
