"""
=============================================================================
SOCKET SERVER
=============================================================================

Low-level TCP listener: binds, listens and accepts connections one at a
time, handing each to a callback.

=============================================================================
THE ACCEPT LOOP
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │    start(handler)                                                    │
    │        │                                                             │
    │        ├──► socket()  bind()  listen()                               │
    │        │                                                             │
    │        └──► while running:                                           │
    │                 accept() ──┬── connection  → handler(conn)           │
    │                            ├── would block → try again               │
    │                            └── other error → FATAL, re-raised        │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The handler runs on the accepting thread: a slow client holds up every
other client until its request is done.

=============================================================================
BLOCKING VS NON-BLOCKING ACCEPT
=============================================================================

Blocking (default):
    accept() waits for a client. It is given a short timeout so the loop
    wakes up now and then to notice shutdown(); a timeout is an idle tick,
    not an error.

Non-blocking (non_blocking=True):
    accept() returns immediately. With no client waiting it raises
    BlockingIOError ("would block"), and the loop simply tries again.

=============================================================================
"""

import socket
import logging
import threading
from typing import Callable, Optional, Tuple

from ..config import ServerConfig
from .connection import Connection


logger = logging.getLogger(__name__)


class SocketServer:
    """
    Low-level TCP socket server.

    Usage:
        def handle_connection(conn: Connection):
            ...

        server = SocketServer(config)
        server.start(handle_connection)  # Blocks until shutdown
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the socket server.

        This does NOT create the socket; that happens in start().
        """
        self.config = config
        self._socket: Optional[socket.socket] = None
        self._running = False

        # Set once the listening socket is bound and listening
        self._ready_event = threading.Event()

    @property
    def is_running(self) -> bool:
        return self._running

    @property
    def address(self) -> Tuple[str, int]:
        """
        Get the bound address (IP, port).

        Reflects the real port when the config asked for port 0.
        """
        if self._socket is not None:
            return self._socket.getsockname()[:2]
        return (self.config.host, self.config.port)

    def _create_socket(self) -> socket.socket:
        sock = socket.socket(socket.AF_INET, socket.SOCK_STREAM)

        # Avoid "Address already in use" when restarting the server
        sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

        if self.config.non_blocking:
            sock.setblocking(False)
        else:
            sock.settimeout(self.config.accept_poll_interval)

        return sock

    def start(self, connection_handler: Callable[[Connection], None]):
        """
        Bind, listen and accept connections until shutdown() is called.

        Raises:
            OSError: If binding fails, or accept() fails for any reason
                     other than having no client waiting.
        """
        self._socket = self._create_socket()

        try:
            self._socket.bind((self.config.host, self.config.port))
        except OSError as e:
            logger.error(f"Could not bind {self.config.host}:{self.config.port}: {e}")
            self._cleanup()
            raise

        self._socket.listen(self.config.backlog)
        self._running = True
        self._ready_event.set()

        host, port = self.address
        logger.debug(f"Listening on {host}:{port}")
        logger.info("Ready to accept connections...")

        try:
            self._accept_loop(connection_handler)
        finally:
            self._cleanup()

    def _accept_loop(self, connection_handler: Callable[[Connection], None]):
        while self._running:
            try:
                client_socket, client_address = self._socket.accept()
            except (BlockingIOError, socket.timeout):
                # Nobody waiting: expected idle condition
                continue
            except OSError as e:
                if not self._running:
                    break  # Socket closed by shutdown()
                logger.critical(f"Ran into IO Error: {e}")
                raise

            conn = Connection(
                socket=client_socket,
                address=client_address,
                buffer_size=self.config.buffer_size,
            )
            connection_handler(conn)

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """
        Wait until the server socket is listening.

        Returns:
            True if the server is ready, False on timeout.
        """
        return self._ready_event.wait(timeout)

    def shutdown(self):
        """
        Stop the accept loop.

        Safe to call from another thread and more than once. The loop
        notices on its next idle tick.
        """
        logger.info("Shutting down socket server...")
        self._running = False

    def _cleanup(self):
        """Close the listening socket."""
        self._running = False
        if self._socket:
            try:
                self._socket.close()
            except OSError:
                pass  # Already closed
            self._socket = None
        logger.debug("Socket server stopped")
