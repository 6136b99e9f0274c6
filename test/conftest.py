import os
import socket
from pathlib import Path

import pytest

from test.helpers import FakeClock

TEST_DIRECTORY = Path(os.path.dirname(os.path.realpath(__file__)))


@pytest.fixture
def fake_clock():
    """Return a fake clock starting at a fixed time"""
    return FakeClock()


@pytest.fixture
def listening_port():
    """Return the port of a TCP listener on localhost that accepts connections"""
    server = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    server.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
    server.bind(("127.0.0.1", 0))
    server.listen(16)
    yield server.getsockname()[1]
    server.close()


@pytest.fixture
def closed_port():
    """Return a localhost port with nothing listening on it"""
    s = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return port


@pytest.fixture
def config_root(tmp_path):
    """Return a small configuration tree containing placeholders"""
    root = tmp_path / "home"
    (root / "conf" / "nested").mkdir(parents=True)
    (root / "conf" / "app.properties").write_text(
        "db.url=${db.connection.url}\ndb.user=${db.user}\nunmatched=${not.bound}\n"
    )
    (root / "conf" / "nested" / "logging.xml").write_text('<level value="${log.level}"/>\n')
    (root / "README").write_text("no placeholders here\n")
    return root
