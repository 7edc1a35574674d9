"""
=============================================================================
CORE SERVER COMPONENTS
=============================================================================

The networking plumbing underneath the HTTP layer.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                         SOCKET SERVER                                │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Creates the TCP listening socket on 127.0.0.1:PORT               │
    │  • Runs the accept() loop, one connection at a time                 │
    │  • Treats "would block" as idle, any other accept error as fatal    │
    └─────────────────────────────────────────────────────────────────────┘
                                    │
                                    │ Hands each connection to the server
                                    ▼
    ┌─────────────────────────────────────────────────────────────────────┐
    │                          CONNECTION                                  │
    │  ─────────────────────────────────────────────────────────────────  │
    │  • Wraps a client socket                                            │
    │  • Performs the single fixed-size request read                      │
    │  • Writes the response and closes (no keep-alive)                   │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""

from .socket_server import SocketServer
from .connection import Connection, ConnectionState

__all__ = [
    "SocketServer",     # TCP listener - accepts connections
    "Connection",       # Client socket wrapper - one read, one write
    "ConnectionState",  # Connection lifecycle states
]
