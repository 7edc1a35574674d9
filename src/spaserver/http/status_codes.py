"""
=============================================================================
HTTP STATUS CODES
=============================================================================

The status codes this server can answer with, and the reason phrase sent
with each one on the status line:

    HTTP/1.1 404 NOT FOUND
             ─── ─────────
             code  phrase

A static file server only ever succeeds,
fails to find the file, or fails internally.

=============================================================================
"""

from enum import IntEnum


class HTTPStatus(IntEnum):
    """
    HTTP status codes and reason phrases.

    This enum extends IntEnum, so status codes can be used as integers:

        >>> HTTPStatus.OK == 200
        True
        >>> HTTPStatus.NOT_FOUND.phrase
        'NOT FOUND'
    """

    OK = 200                            # File served
    NOT_FOUND = 404                     # No such file under the root
    INTERNAL_SERVER_ERROR = 500         # Request could not be handled

    @property
    def phrase(self) -> str:
        """Get the reason phrase for this status code."""
        return _STATUS_PHRASES.get(self, "Unknown")


# Reason phrases are informational only (RFC 7230), clients ignore them.
# The 404 phrase is upper case on the wire.
_STATUS_PHRASES = {
    HTTPStatus.OK: "OK",
    HTTPStatus.NOT_FOUND: "NOT FOUND",
    HTTPStatus.INTERNAL_SERVER_ERROR: "Internal Server Error",
}
