"""
=============================================================================
HANDLERS MODULE
=============================================================================

Request handlers turn a parsed HTTPRequest into an HTTPResponse.

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    REQUEST → HANDLER → RESPONSE                     │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    Request                 Handler                 Response         │
    │   ┌─────────┐           ┌─────────┐           ┌─────────┐          │
    │   │ GET     │           │ resolve │           │ 200 OK  │          │
    │   │ /app.js │ ────────▶ │ + read  │ ────────▶ │ (file)  │          │
    │   └─────────┘           └─────────┘           └─────────┘          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

The server has a single handler, StaticFileHandler, which serves files
from the configured root directory.

=============================================================================
"""

from .static import StaticFileHandler, UnsupportedMethod, resolve_path

__all__ = [
    "StaticFileHandler",
    "UnsupportedMethod",
    "resolve_path",
]
