"""
=============================================================================
HTTP MODULE
=============================================================================

Message model, parsing and serialization for the static file server.

    request.py       Header, HTTPRequest, RequestParser, parse errors
    response.py      HTTPResponse, ResponseBuilder, fixed responses
    status_codes.py  HTTPStatus enum with reason phrases
    mime_types.py    Extension → Content-Type table

=============================================================================
"""

from .request import (
    Header,
    HTTPRequest,
    RequestParser,
    HTTPParseError,
    InvalidEncoding,
    MalformedRequestLine,
    parse_request,
)
from .response import (
    HTTPResponse,
    ResponseBuilder,
    ok_file,
    not_found,
    internal_error,
)
from .status_codes import HTTPStatus
from .mime_types import get_content_type, get_extension

# Public API - what you get when you do:
# from spaserver.http import *
__all__ = [
    # Message model
    "Header",
    "HTTPRequest",
    "HTTPResponse",

    # Request parsing
    "RequestParser",
    "HTTPParseError",
    "InvalidEncoding",
    "MalformedRequestLine",
    "parse_request",

    # Response building
    "ResponseBuilder",
    "ok_file",
    "not_found",
    "internal_error",

    # Status codes
    "HTTPStatus",

    # Content types
    "get_content_type",
    "get_extension",
]
