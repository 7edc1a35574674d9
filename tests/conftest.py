"""
pytest configuration and fixtures.
"""

import socket
import threading
from typing import Generator
import pytest

# Add src to path for imports
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from spaserver import HTTPServer, ServerConfig


@pytest.fixture
def sample_get_request() -> bytes:
    """Sample HTTP GET request, as a browser would send it."""
    return (
        b"GET /index.html HTTP/1.1\r\n"
        b"Host: localhost:8080\r\n"
        b"User-Agent: pytest\r\n"
        b"Accept: text/html\r\n"
        b"\r\n"
    )


@pytest.fixture
def padded_buffer():
    """Pad a request to a 1024-byte buffer, like a single socket read."""
    def pad(data: bytes, size: int = 1024) -> bytes:
        return data + b"\x00" * (size - len(data))
    return pad


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """A small single-page application build directory."""
    (tmp_path / "index.html").write_text("<h1>hi</h1>")
    (tmp_path / "main.js").write_text("console.log('hi');")
    (tmp_path / "manifest.json").write_text('{"name": "app"}')
    (tmp_path / "styles.css").write_text("body { margin: 0; }")
    (tmp_path / "favicon.ico").write_bytes(b"\x00\x00\x01\x00\xff\xfe")
    (tmp_path / "notes.md").write_text("# notes")

    docs = tmp_path / "docs"
    docs.mkdir()
    (docs / "index.html").write_text("<h1>docs</h1>")

    (tmp_path / "empty").mkdir()
    return tmp_path


@pytest.fixture
def config(site_root: Path) -> ServerConfig:
    """Default test server configuration."""
    return ServerConfig(
        root_dir=str(site_root),
        host="127.0.0.1",
        port=0,  # Let OS pick a free port
        accept_poll_interval=0.1,
    )


@pytest.fixture
def free_port() -> int:
    """Get a free port for testing."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(('127.0.0.1', 0))
        return s.getsockname()[1]


class TestServer:
    """Test server helper that runs in a background thread."""

    def __init__(self, server: HTTPServer):
        self.server = server
        self._thread: threading.Thread = None

    @property
    def port(self) -> int:
        return self.server.config.port

    def start(self):
        """Start server in background thread."""
        self._thread = threading.Thread(target=self.server.run, daemon=True)
        self._thread.start()

        if not self.server.wait_until_ready(timeout=5.0):
            raise RuntimeError("Server failed to start")

    def stop(self):
        """Stop the server."""
        self.server.shutdown()

        if self._thread and self._thread.is_alive():
            self._thread.join(timeout=5.0)

    @property
    def is_alive(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def request(self, raw: bytes) -> bytes:
        """Send raw bytes and read the response until the server closes."""
        with socket.create_connection(("127.0.0.1", self.port), timeout=5.0) as s:
            s.sendall(raw)
            chunks = []
            while True:
                chunk = s.recv(4096)
                if not chunk:
                    break
                chunks.append(chunk)
        return b"".join(chunks)


@pytest.fixture
def server_factory(site_root: Path, free_port: int):
    """Build and start test servers; all of them are stopped afterwards."""
    started = []

    def make(**overrides) -> TestServer:
        options = dict(
            root_dir=str(site_root),
            host="127.0.0.1",
            port=free_port,
            accept_poll_interval=0.1,
        )
        options.update(overrides)
        test_srv = TestServer(HTTPServer(ServerConfig(**options)))
        test_srv.start()
        started.append(test_srv)
        return test_srv

    yield make

    for test_srv in started:
        test_srv.stop()


@pytest.fixture
def test_server(server_factory) -> Generator[TestServer, None, None]:
    """A running server serving the site_root fixture."""
    yield server_factory()
