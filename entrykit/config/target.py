from typing import Annotated
from urllib.parse import urlsplit

from pydantic import BaseModel, ConfigDict, Field

from entrykit.error import EntrykitConfigError

DEFAULT_HTTP_PORTS = {"http": 80, "https": 443}


class DependencyTarget(BaseModel):
    """A host and port that must accept connections before startup continues.

    HTTP targets additionally carry the full URL to request. Ordinary targets leave ``url`` unset and are checked
    with a plain TCP connect.
    """

    model_config = ConfigDict(frozen=True)

    host: Annotated[str, Field(min_length=1)]
    port: Annotated[int, Field(ge=1, le=65535)]
    url: Annotated[str | None, Field(default=None)]

    @property
    def is_http(self) -> bool:
        return self.url is not None

    def __str__(self) -> str:
        if self.url is not None:
            return self.url
        return f"{self.host}:{self.port}"

    @classmethod
    def parse(cls, token: str) -> "DependencyTarget":
        """Parse a single ``host:port`` or ``http(s)://`` token

        :param token: The token to parse, as found in the SERVICES variable
        :raises EntrykitConfigError: If the token is malformed
        """
        token = token.strip()
        if token.startswith(("http://", "https://")):
            return cls._parse_url(token)

        host, sep, port = token.rpartition(":")
        if not sep:
            raise EntrykitConfigError(f"Expected host:port pair, got '{token}'", value=token)
        if not host:
            raise EntrykitConfigError(f"Missing host in '{token}'", value=token)
        if not port.isdigit():
            raise EntrykitConfigError(f"Invalid port '{port}' in '{token}'", value=token)
        port_number = int(port)
        if not 1 <= port_number <= 65535:
            raise EntrykitConfigError(f"Port {port_number} in '{token}' is out of range 1-65535", value=token)

        return cls(host=host, port=port_number)

    @classmethod
    def _parse_url(cls, token: str) -> "DependencyTarget":
        parts = urlsplit(token)
        try:
            port = parts.port
        except ValueError:
            raise EntrykitConfigError(f"Invalid port in URL '{token}'", value=token)
        if not parts.hostname:
            raise EntrykitConfigError(f"Missing host in URL '{token}'", value=token)
        if port is None:
            port = DEFAULT_HTTP_PORTS[parts.scheme]
        elif port == 0:
            raise EntrykitConfigError(f"Port 0 in URL '{token}' is out of range 1-65535", value=token)

        return cls(host=parts.hostname, port=port, url=token)


def parse_targets(value: str | None) -> list[DependencyTarget]:
    """Parse a whitespace separated list of targets, keeping their order

    An empty or missing value yields no targets.
    """
    if not value:
        return []
    return [DependencyTarget.parse(token) for token in value.split()]
