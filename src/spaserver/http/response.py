"""
=============================================================================
HTTP RESPONSE BUILDER
=============================================================================

Builds responses and serializes them into the bytes written to the socket.

=============================================================================
HTTP RESPONSE ANATOMY
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                     HTTP RESPONSE STRUCTURE                         │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │    HTTP/1.1 200 OK\n                          ← status line         │
    │    Content-Type: text/html;charset=UTF-8\n    ← headers, in order   │
    │    Content-Length: 11\n                                              │
    │    \n                                         ← separator           │
    │    <h1>hi</h1>                                ← body bytes          │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

Lines end with a bare "\n" rather than the "\r\n" RFC 7230 asks for.
Browsers and common clients accept it.

=============================================================================
THE THREE RESPONSES
=============================================================================

    ok_file(body, content_type)  200 OK                     file contents
    not_found()                  404 NOT FOUND              "Could not find resource."
    internal_error()             500 Internal Server Error  "An error occured on the
                                                             server during the request."

Every one of them carries Content-Type and a Content-Length equal to the
byte length of the body.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import List, Optional, Union

from .request import Header
from .status_codes import HTTPStatus


HTTP_VERSION = "HTTP/1.1"

NOT_FOUND_BODY = "Could not find resource."
INTERNAL_ERROR_BODY = "An error occured on the server during the request."


@dataclass
class HTTPResponse:
    """
    Represents an HTTP response to be sent to the client.

    A plain data container. Use ResponseBuilder (or the ok_file /
    not_found / internal_error helpers) to construct one with the
    required headers filled in.

    Attributes:
        status:         Numeric status code (200, 404, 500)
        status_message: Reason phrase for the status line
        headers:        Headers in the order they will be written
        body:           Response body bytes
    """

    status: int = HTTPStatus.OK
    status_message: str = "OK"
    headers: List[Header] = field(default_factory=list)
    body: bytes = b""

    @property
    def status_line(self) -> str:
        """
        Get the HTTP status line.

        Example: "HTTP/1.1 404 NOT FOUND"
        """
        return f"{HTTP_VERSION} {int(self.status)} {self.status_message}"

    def get_header(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get the value of the first header with exactly this key."""
        for header in self.headers:
            if header.key == key:
                return header.value
        return default

    def to_bytes(self) -> bytes:
        """
        Serialize the response to bytes for sending over the socket.

        Headers are written exactly as stored: nothing is added, merged
        or reordered here.

        Returns:
            Complete response as one contiguous byte string.
        """
        lines = [self.status_line]
        for header in self.headers:
            lines.append(f"{header.key}: {header.value}")

        # Empty line separates headers from body
        head = "\n".join(lines) + "\n\n"
        return head.encode("utf-8") + self.body


class ResponseBuilder:
    """
    Fluent builder for constructing HTTP responses.

        response = (ResponseBuilder()
            .status(HTTPStatus.OK)
            .body(content, content_type="application/javascript")
            .build())

    body() records the Content-Type; build() appends Content-Length
    computed from the final body, so the two can never disagree.
    """

    def __init__(self):
        self._status = HTTPStatus.OK
        self._body: bytes = b""
        self._content_type: Optional[str] = None

    def status(self, status: HTTPStatus) -> "ResponseBuilder":
        """Set the status code (the reason phrase follows from it)."""
        self._status = status
        return self

    def body(self, body: Union[str, bytes], content_type: str) -> "ResponseBuilder":
        """
        Set the response body and its Content-Type.

        Args:
            body: Response body (strings are encoded as UTF-8)
            content_type: Value of the Content-Type header
        """
        self._body = body.encode("utf-8") if isinstance(body, str) else body
        self._content_type = content_type
        return self

    def text(self, text: str) -> "ResponseBuilder":
        """Set a text/plain body."""
        return self.body(text, content_type="text/plain")

    def build(self) -> HTTPResponse:
        """
        Build and return the HTTPResponse object.

        Content-Type is followed by Content-Length, the byte length of
        the body. A builder without a body produces no headers.
        """
        headers: List[Header] = []
        if self._content_type is not None:
            headers.append(Header("Content-Type", self._content_type))
            headers.append(Header("Content-Length", str(len(self._body))))

        return HTTPResponse(
            status=int(self._status),
            status_message=self._status.phrase,
            headers=headers,
            body=self._body,
        )


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def ok_file(content: bytes, content_type: str) -> HTTPResponse:
    """Create a 200 OK response carrying a file's contents."""
    return ResponseBuilder().status(HTTPStatus.OK).body(content, content_type).build()


def not_found() -> HTTPResponse:
    """Create the fixed 404 response for paths that do not resolve."""
    return ResponseBuilder().status(HTTPStatus.NOT_FOUND).text(NOT_FOUND_BODY).build()


def internal_error() -> HTTPResponse:
    """
    Create the fixed 500 response.

    Sent whenever handling a request failed before any response was
    written: unreadable buffer, malformed request line, unsupported
    method, socket errors.
    """
    return (ResponseBuilder()
        .status(HTTPStatus.INTERNAL_SERVER_ERROR)
        .text(INTERNAL_ERROR_BODY)
        .build())
