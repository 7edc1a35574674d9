"""
=============================================================================
SPASERVER - Minimal Static File Server for Single-Page Applications
=============================================================================

A small HTTP/1.x server built on raw Python sockets. It serves the files
of one directory, and answers every path ending in "/" with that
directory's index.html.

=============================================================================
PROJECT OVERVIEW
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                      SPASERVER ARCHITECTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   core/socket_server.py   accept loop, one connection at a time     │
    │   core/connection.py      single fixed-size read, write, close      │
    │   http/request.py         buffer → HTTPRequest                      │
    │   handlers/static.py      path → file → HTTPResponse                │
    │   http/mime_types.py      extension → Content-Type                  │
    │   http/response.py        HTTPResponse → bytes                      │
    │   server.py               glues it together, turns failures into   │
    │                           a 500 response                            │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
QUICK START
=============================================================================

    APP_FOLDER=./dist python -m spaserver 8080

    curl http://127.0.0.1:8080/            # ./dist/index.html
    curl http://127.0.0.1:8080/main.js     # ./dist/main.js

What it does NOT do: keep-alive, chunked encoding, request bodies,
methods other than GET, TLS, concurrency, caching or ranges.

=============================================================================
"""

__version__ = "1.0.0"

from .server import HTTPServer
from .config import ServerConfig, ConfigError

__all__ = ["HTTPServer", "ServerConfig", "ConfigError", "__version__"]
