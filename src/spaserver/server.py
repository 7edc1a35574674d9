"""
=============================================================================
HTTP SERVER
=============================================================================

Ties the pieces together: accept → read → parse → route → respond.

=============================================================================
REQUEST LIFECYCLE
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                                                                      │
    │   SocketServer.accept()                                              │
    │         │                                                            │
    │         ▼                                                            │
    │   _handle_connection(conn) ── failure here is logged as CRITICAL,    │
    │         │                     the accept loop carries on             │
    │         ▼                                                            │
    │   _respond(conn) ──────────── any exception → 500 response           │
    │         │                                                            │
    │         ├──► conn.read_request()        one fixed-size read          │
    │         ├──► RequestParser.parse()      InvalidEncoding, Malformed…  │
    │         ├──► StaticFileHandler.handle() UnsupportedMethod, 200, 404  │
    │         └──► conn.send_response()                                    │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Errors are never answered with a 4xx: everything that stops a request
before its response is written becomes the same 500. If even the 500
cannot be written, the failure escapes to _handle_connection, which logs
it and moves on to the next client.

=============================================================================
"""

import logging
from typing import Optional

from .config import ServerConfig
from .core import SocketServer, Connection
from .handlers import StaticFileHandler
from .http import RequestParser, HTTPResponse, internal_error


logger = logging.getLogger(__name__)


class HTTPServer:
    """
    Single-threaded static file server.

    Usage:
        config = ServerConfig.from_env(port=8080)
        server = HTTPServer(config)
        server.run()  # Blocks until Ctrl+C or shutdown()
    """

    def __init__(self, config: ServerConfig):
        """
        Initialize the HTTP server.

        Args:
            config: Server configuration. Validated here, once.
        """
        self.config = config
        self.config.validate()  # Fail-fast on invalid config

        self._socket_server = SocketServer(self.config)
        self._parser = RequestParser()
        self._handler = StaticFileHandler(self.config)

    # =========================================================================
    # SERVER LIFECYCLE
    # =========================================================================

    def run(self):
        """
        Start the server (blocking).

        Raises:
            OSError: If the listener cannot be bound, or accept() fails
                     with anything other than "would block".
        """
        logger.info(f"Starting web server on port {self.config.port}...")

        try:
            self._socket_server.start(self._handle_connection)
        except KeyboardInterrupt:
            logger.info("Received keyboard interrupt")
        finally:
            logger.info("Server stopped")

    def shutdown(self):
        """Ask the accept loop to stop."""
        self._socket_server.shutdown()

    def wait_until_ready(self, timeout: Optional[float] = None) -> bool:
        """Block until the server is accepting connections."""
        return self._socket_server.wait_until_ready(timeout)

    # =========================================================================
    # REQUEST HANDLING
    # =========================================================================

    def _handle_connection(self, conn: Connection):
        """
        Process one accepted connection, then close it.

        Never raises: a connection that cannot even be answered with a
        500 is logged and dropped so the server keeps accepting.
        """
        logger.info(f"Handling request from {conn.client_ip}:{conn.client_port}")

        with conn:  # Context manager ensures connection is closed
            try:
                self._respond(conn)
            except Exception as e:
                logger.critical(f"[{conn.id}] Could not send error response: {e}")

    def _respond(self, conn: Connection):
        """
        Answer the request, or the fixed 500 if answering fails.

        Raises:
            OSError: If writing the 500 response fails.
        """
        try:
            self._handle_request(conn)
        except Exception as e:
            logger.error(f"[{conn.id}] Request failed: {e}", exc_info=True)
            self._send(conn, internal_error())

    def _handle_request(self, conn: Connection):
        buffer = conn.read_request()
        request = self._parser.parse(buffer)
        logger.info(f"HTTP {request.method} {request.path}")

        response = self._handler.handle(request)
        self._send(conn, response)

    def _send(self, conn: Connection, response: HTTPResponse):
        logger.debug(f"[{conn.id}] {response.status_line}")
        conn.send_response(response.to_bytes())
