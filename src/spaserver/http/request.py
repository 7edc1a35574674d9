"""
=============================================================================
HTTP REQUEST PARSER
=============================================================================

Parses the bytes of ONE socket read into a structured HTTPRequest.

This is a small parser, not a full RFC 7230 implementation:
it reads the request line and the headers, and nothing else.

=============================================================================
INPUT: A FIXED-CAPACITY BUFFER
=============================================================================

The connection performs a single read of at most `buffer_size` bytes. A
request longer than that is simply cut off, which can leave a truncated
header or even a truncated request line behind.

    ┌─────────────────────────────────────────────────────────────────────┐
    │  GET /app.js HTTP/1.1\n                    ← request line           │
    │  Host: localhost\n                         ← header                 │
    │  Accept: */*\n                             ← header                 │
    │  \n                                        ← blank (skipped)        │
    │  \0\0\0\0\0\0\0\0\0\0\0\0\0\0\0\0\0\0\0    ← padding (ignored)     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
PARSING RULES
=============================================================================

1. Decode as UTF-8                     invalid bytes → InvalidEncoding
2. Split into lines on "\n"            a trailing "\r" is dropped
3. Request line: ASCII whitespace      fewer than 2 → MalformedRequestLine
      token 1 = method (as received, "get" stays "get")
      token 2 = path   (as received, no decoding)
4. Every other line containing ":" is a header, split on the FIRST colon:
      "X-Foo: a:b"  →  key "X-Foo", value " a:b"
   Keys and values are NOT trimmed or lower-cased.
5. Lines without a colon are skipped silently.

Repeated headers are all kept, in the order they arrived.

=============================================================================
"""

from dataclasses import dataclass, field
from typing import Optional, Tuple
import re


# Space, tab, LF, FF and CR only. str.split() would also split on
# Unicode separators such as U+00A0.
ASCII_WHITESPACE = " \t\n\x0c\r"
_ASCII_WHITESPACE_RE = re.compile(r"[ \t\n\x0c\r]+")


class HTTPParseError(Exception):
    """
    Raised when a buffer cannot be read as an HTTP request.

    Parse errors never produce a 4xx here: they abort the request, and the
    connection handler answers with the fixed 500 response.
    """


class InvalidEncoding(HTTPParseError):
    """The buffer is not valid UTF-8."""


class MalformedRequestLine(HTTPParseError):
    """The first line does not contain a method and a path."""


@dataclass(frozen=True)
class Header:
    """A single header line, kept exactly as received."""

    key: str
    value: str


@dataclass(frozen=True)
class HTTPRequest:
    """
    Represents a parsed HTTP request.

    Built once per connection from exactly one buffer read and never
    modified afterwards (frozen).

    Attributes:
        method:  HTTP method, case as received ("GET", "get", "DELETE", ...)
        path:    Request path as received, e.g. "/" or "/assets/app.js"
        headers: Headers in arrival order. Duplicate keys are preserved.
    """

    method: str
    path: str
    headers: Tuple[Header, ...] = field(default_factory=tuple)

    def get_header(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """
        Get the value of the first header with exactly this key.

        The lookup is case-sensitive, matching how headers are stored.
        """
        for header in self.headers:
            if header.key == key:
                return header.value
        return default

    def get_all(self, key: str) -> list[str]:
        """Get every value sent for this key, in arrival order."""
        return [header.value for header in self.headers if header.key == key]


class RequestParser:
    """
    Parses raw request buffers into HTTPRequest objects.

    Usage:
        parser = RequestParser()
        request = parser.parse(b"GET / HTTP/1.1\\nHost: localhost\\n\\n")
        request.method   # "GET"
        request.path     # "/"
    """

    def parse(self, buffer: bytes) -> HTTPRequest:
        """
        Parse a request buffer.

        Args:
            buffer: Bytes from one socket read, optionally zero-padded
                    up to the buffer capacity.

        Returns:
            Parsed HTTPRequest.

        Raises:
            InvalidEncoding: If the buffer is not valid UTF-8.
            MalformedRequestLine: If the request line lacks method or path.
        """
        # Zero padding fills the unused tail of a fixed-size buffer
        data = bytes(buffer).rstrip(b"\x00")

        try:
            text = data.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidEncoding(f"Request is not valid UTF-8: {e}") from e

        lines = [line[:-1] if line.endswith("\r") else line for line in text.split("\n")]

        method, path = self._parse_request_line(lines[0])
        headers = self._parse_headers(lines[1:])

        return HTTPRequest(method=method, path=path, headers=headers)

    def _parse_request_line(self, line: str) -> Tuple[str, str]:
        """
        Extract method and path from the request line.

        Only the first two tokens separated by ASCII whitespace are used;
        the HTTP version (if any) is ignored.
        """
        stripped = line.strip(ASCII_WHITESPACE)
        tokens = _ASCII_WHITESPACE_RE.split(stripped) if stripped else []
        if len(tokens) < 2:
            raise MalformedRequestLine(f"Invalid request line: {line!r}")
        return tokens[0], tokens[1]

    def _parse_headers(self, lines: list[str]) -> Tuple[Header, ...]:
        headers = []
        for line in lines:
            key, sep, value = line.partition(":")
            if not sep:
                continue  # Blank lines, padding, garbage
            headers.append(Header(key=key, value=value))
        return tuple(headers)


def parse_request(buffer: bytes) -> HTTPRequest:
    """
    Convenience function to parse an HTTP request.

    Creates a RequestParser instance and parses the buffer in one call.
    """
    return RequestParser().parse(buffer)
