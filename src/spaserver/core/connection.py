"""
=============================================================================
CONNECTION MANAGEMENT
=============================================================================

Wraps one accepted client socket for the duration of a single request.

=============================================================================
ONE READ, ONE RESPONSE
=============================================================================

TCP is a byte stream: a single recv() may return only part of what the
client sent. A general-purpose server loops until it has seen the end of
the headers. This one does NOT:

    ┌─────────────────────────────────────────────────────────────────────┐
    │  buffer = bytearray(buffer_size)      fixed capacity (1024 bytes)   │
    │  socket.recv_into(buffer)             exactly one read              │
    │                                                                      │
    │  ┌──────────────────────────────┬─────────────────────────────────┐ │
    │  │ GET / HTTP/1.1\nHost: ...\n\n │ \0 \0 \0 \0 \0 \0 \0 \0 \0 \0  │ │
    │  └──────────────────────────────┴─────────────────────────────────┘ │
    │        bytes received                 unused capacity               │
    └─────────────────────────────────────────────────────────────────────┘

Anything the client sends beyond the buffer capacity, or after the first
read returns, is never seen. Requests longer than the buffer are
truncated.

After the response is written the connection is closed: there is no
keep-alive.

=============================================================================
KNOWN LIMITATIONS
=============================================================================

- close() drains leftover input until the client hangs up or stays silent
  for 0.5 s. A client that keeps its end open after reading the response
  holds the connection at least that long.
  Requests are handled one at a time on a single thread, so these stalls
  add up: a run of such clients delays everyone queued behind them.

=============================================================================
"""

import socket
import logging
from enum import Enum
from dataclasses import dataclass, field
import uuid

from ..config import DEFAULT_BUFFER_SIZE


logger = logging.getLogger(__name__)


class ConnectionState(Enum):
    """Connection lifecycle states."""
    NEW = "new"              # Just accepted, nothing read yet
    READING = "reading"      # Reading the request buffer
    WRITING = "writing"      # Sending the response
    CLOSED = "closed"        # Socket released


@dataclass
class Connection:
    """
    Represents a client connection.

    Attributes:
        socket: The client socket.
        address: Client's (ip, port) tuple.
        id: Short connection identifier (for logging).
        state: Current connection state.
        buffer_size: Capacity of the single request read.
    """

    socket: socket.socket
    address: tuple[str, int]

    id: str = field(default_factory=lambda: str(uuid.uuid4())[:8])
    state: ConnectionState = ConnectionState.NEW
    buffer_size: int = DEFAULT_BUFFER_SIZE

    def __post_init__(self):
        # A non-blocking listener may hand out non-blocking sockets
        self.socket.setblocking(True)

    @property
    def client_ip(self) -> str:
        return self.address[0]

    @property
    def client_port(self) -> int:
        return self.address[1]

    def read_request(self) -> bytes:
        """
        Read the request with a single recv into a fixed-size buffer.

        Returns:
            A buffer of exactly ``buffer_size`` bytes: the received bytes
            followed by zero padding.

        Raises:
            OSError: If the socket read fails.
        """
        self.state = ConnectionState.READING

        buffer = bytearray(self.buffer_size)
        received = self.socket.recv_into(buffer)

        logger.debug(f"[{self.id}] Read {received} bytes")
        return bytes(buffer)

    def send_response(self, data: bytes) -> None:
        """
        Send response bytes to the client.

        Uses sendall() so the whole response is written in one go.

        Raises:
            OSError: If the client is gone or the write fails. Callers
                     decide whether that is recoverable.
        """
        self.state = ConnectionState.WRITING
        self.socket.sendall(data)

    def close(self):
        """
        Close the connection.

        shutdown(SHUT_WR) sends FIN first so the client sees the end of
        the response, leftover input is drained, then the descriptor is
        released.
        """
        if self.state == ConnectionState.CLOSED:
            return

        try:
            self.socket.shutdown(socket.SHUT_WR)
        except OSError:
            pass  # Client already disconnected

        try:
            # Discard whatever did not fit in the buffer; closing with
            # unread data makes the kernel reset the connection
            self.socket.settimeout(0.5)
            while self.socket.recv(self.buffer_size):
                pass
        except OSError:
            pass

        try:
            self.socket.close()
        except OSError:
            pass

        self.state = ConnectionState.CLOSED
        logger.debug(f"[{self.id}] Connection closed")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Ensure the connection is closed."""
        self.close()
        return False  # Don't suppress exceptions
