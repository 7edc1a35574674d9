"""
Unit tests for client connections and the socket server.
"""

import socket
import threading

import pytest

from spaserver.config import ServerConfig
from spaserver.core import Connection, ConnectionState, SocketServer


@pytest.fixture
def socket_pair():
    """A connected (server side, client side) socket pair."""
    server_side, client_side = socket.socketpair()
    yield server_side, client_side
    for sock in (server_side, client_side):
        try:
            sock.close()
        except OSError:
            pass


class TestConnection:
    """Tests for Connection class."""

    def test_read_request_single_padded_read(self, socket_pair):
        """Test that one read fills a fixed buffer and pads the rest."""
        server_side, client_side = socket_pair
        client_side.sendall(b"GET / HTTP/1.1\r\n\r\n")

        conn = Connection(socket=server_side, address=("127.0.0.1", 50000))
        buffer = conn.read_request()

        assert len(buffer) == 1024
        assert buffer.startswith(b"GET / HTTP/1.1\r\n\r\n")
        assert buffer[18:] == b"\x00" * (1024 - 18)
        assert conn.state == ConnectionState.READING

    def test_read_request_truncates(self, socket_pair):
        """Test that bytes beyond the buffer capacity are not read."""
        server_side, client_side = socket_pair
        client_side.sendall(b"x" * 100)

        conn = Connection(socket=server_side, address=("127.0.0.1", 50000), buffer_size=16)
        assert conn.read_request() == b"x" * 16

    def test_send_response(self, socket_pair):
        server_side, client_side = socket_pair
        conn = Connection(socket=server_side, address=("127.0.0.1", 50000))

        conn.send_response(b"HTTP/1.1 200 OK\n\n")

        assert client_side.recv(1024) == b"HTTP/1.1 200 OK\n\n"
        assert conn.state == ConnectionState.WRITING

    def test_close_signals_end_of_response(self, socket_pair):
        """Test that the client sees EOF once the connection is closed."""
        server_side, client_side = socket_pair
        client_side.settimeout(5.0)

        with Connection(socket=server_side, address=("127.0.0.1", 50000)) as conn:
            conn.send_response(b"done")

        assert conn.state == ConnectionState.CLOSED
        assert client_side.recv(1024) == b"done"
        assert client_side.recv(1024) == b""

    def test_close_twice(self, socket_pair):
        server_side, _ = socket_pair
        conn = Connection(socket=server_side, address=("127.0.0.1", 50000))

        conn.close()
        conn.close()

        assert conn.state == ConnectionState.CLOSED

    def test_send_after_peer_closed_raises(self, socket_pair):
        """Test that write failures propagate to the caller."""
        server_side, client_side = socket_pair
        client_side.close()
        conn = Connection(socket=server_side, address=("127.0.0.1", 50000))

        with pytest.raises(OSError):
            for _ in range(100):
                conn.send_response(b"x" * 65536)

    def test_client_address(self, socket_pair):
        server_side, _ = socket_pair
        conn = Connection(socket=server_side, address=("10.0.0.7", 41234))

        assert conn.client_ip == "10.0.0.7"
        assert conn.client_port == 41234


class TestSocketServer:
    """Tests for SocketServer class."""

    def _run(self, server: SocketServer, handler):
        thread = threading.Thread(target=server.start, args=(handler,), daemon=True)
        thread.start()
        assert server.wait_until_ready(timeout=5.0)
        return thread

    @pytest.mark.parametrize("non_blocking", [False, True])
    def test_accepts_and_hands_off(self, non_blocking: bool):
        """Test that accepted sockets are wrapped and passed to the handler."""
        config = ServerConfig(
            root_dir="/srv/app",
            port=0,
            buffer_size=64,
            non_blocking=non_blocking,
            accept_poll_interval=0.1,
        )
        server = SocketServer(config)
        seen = []

        def handler(conn: Connection):
            with conn:
                seen.append((conn.buffer_size, conn.read_request()))
                conn.send_response(b"ok")

        thread = self._run(server, handler)
        try:
            with socket.create_connection(server.address, timeout=5.0) as client:
                client.sendall(b"ping")
                assert client.recv(16) == b"ok"
        finally:
            server.shutdown()
            thread.join(timeout=5.0)

        assert not thread.is_alive()
        assert seen[0][0] == 64
        assert seen[0][1].rstrip(b"\x00") == b"ping"

    def test_address_reports_bound_port(self):
        server = SocketServer(ServerConfig(root_dir="/srv/app", port=0, accept_poll_interval=0.1))
        thread = self._run(server, lambda conn: conn.close())
        try:
            host, port = server.address
            assert host == "127.0.0.1"
            assert port != 0
        finally:
            server.shutdown()
            thread.join(timeout=5.0)

    def test_bind_failure_raises(self, free_port: int):
        """Test that a port already in use is a startup error."""
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as blocker:
            blocker.bind(("127.0.0.1", free_port))
            blocker.listen(1)

            server = SocketServer(ServerConfig(root_dir="/srv/app", port=free_port))
            with pytest.raises(OSError):
                server.start(lambda conn: None)

        assert not server.is_running
