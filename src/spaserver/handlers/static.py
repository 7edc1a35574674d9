"""
=============================================================================
STATIC FILE HANDLER
=============================================================================

Serves files from the configured root directory (APP_FOLDER), using the
directory-index convention expected by single-page applications.

=============================================================================
FLOW
=============================================================================

    Request: GET /assets/app.js

    1. Method check: anything but GET → UnsupportedMethod (→ 500)
    2. Resolve: "/srv/app" + "/assets/app.js"
               (a path ending in "/" gets "index.html" appended)
    3. Exists?  no  → 404 NOT FOUND
    4. Read:    fails → 404 NOT FOUND
               ok    → 200 OK, Content-Type from the extension table

=============================================================================
KNOWN LIMITATIONS
=============================================================================

- The request path is appended to the root as a plain string. Segments
  are not normalized and ".." is not rejected, so the handler must only
  be exposed on a trusted interface (the server binds to 127.0.0.1).
- Existence is checked before the file is read. A file removed in
  between is reported as 404 like any other failed read.

=============================================================================
"""

import logging
import os
from typing import Optional

from ..config import ServerConfig
from ..http.request import HTTPRequest
from ..http.response import HTTPResponse, ok_file, not_found
from ..http.mime_types import get_content_type


logger = logging.getLogger(__name__)

INDEX_FILE = "index.html"


class UnsupportedMethod(Exception):
    """
    Raised for any request method other than GET.

    Not turned into a 405: the request fails as a whole and the connection
    handler answers with the fixed 500 response.
    """

    def __init__(self, method: str):
        super().__init__(f"HTTP method {method} is not supported")
        self.method = method


def resolve_path(path: str, root_dir: str) -> Optional[str]:
    """
    Map a request path to an existing filesystem path under root_dir.

    Args:
        path: Request path, e.g. "/" or "/main.js"
        root_dir: Configured root directory, e.g. "/srv/app"

    Returns:
        "/srv/app/index.html" style path if it exists, otherwise None.

    Examples:
        resolve_path("/", "/srv/app")          # "/srv/app/index.html"
        resolve_path("/docs/", "/srv/app")     # "/srv/app/docs/index.html"
        resolve_path("/missing", "/srv/app")   # None
    """
    if path.endswith("/"):
        path += INDEX_FILE

    absolute_path = root_dir + path
    if os.path.exists(absolute_path):
        return absolute_path
    return None


class StaticFileHandler:
    """
    Handler for serving static files.

    Usage:
        handler = StaticFileHandler(config)
        response = handler.handle(request)
    """

    def __init__(self, config: ServerConfig):
        self.config = config

    @property
    def root_dir(self) -> str:
        return self.config.root_dir

    def handle(self, request: HTTPRequest) -> HTTPResponse:
        """
        Build the response for a request.

        Raises:
            UnsupportedMethod: If the method is not exactly "GET".
        """
        if request.method != "GET":
            raise UnsupportedMethod(request.method)

        path = resolve_path(request.path, self.root_dir)
        if path is None:
            logger.debug(f"No file for {request.path}")
            return not_found()

        return self._serve_file(path)

    def _serve_file(self, path: str) -> HTTPResponse:
        """Read a resolved file and wrap it in a 200 response."""
        try:
            with open(path, "rb") as f:
                content = f.read()
        except OSError as e:
            # Directories, permission errors, files removed after the check
            logger.warning(f"Could not read {path}: {e}")
            return not_found()

        return ok_file(content, get_content_type(path))
