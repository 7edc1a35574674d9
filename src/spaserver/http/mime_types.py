"""
=============================================================================
CONTENT-TYPE CLASSIFIER
=============================================================================

Maps a file's extension to the Content-Type it is served with.

The table covers what a bundled single-page application is made of:
the HTML shell, scripts, JSON assets, stylesheets and the favicon.
Everything else is served as text/plain. There is no content sniffing:
only the extension matters.

    ┌─────────────────────────────────────────────────────────────────────┐
    │  index.html       →  text/html;charset=UTF-8                        │
    │  main.js          →  application/javascript                         │
    │  manifest.json    →  application/json                               │
    │  favicon.ico      →  image/x-icon                                   │
    │  styles.css       →  text/css                                       │
    │  README, data.xyz →  text/plain                                     │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
"""


# Keys are extensions WITHOUT the dot, matched case-sensitively.
CONTENT_TYPES = {
    "html": "text/html;charset=UTF-8",
    "js": "application/javascript",
    "json": "application/json",
    "ico": "image/x-icon",
    "css": "text/css",
}

DEFAULT_CONTENT_TYPE = "text/plain"


def get_extension(path: str) -> str:
    """
    Get the text after the last "." in a path.

    Examples:
        >>> get_extension("/srv/app/main.js")
        'js'
        >>> get_extension("/srv/app/archive.tar.gz")
        'gz'
        >>> get_extension("/srv/app/LICENSE")
        ''
    """
    _, dot, extension = path.rpartition(".")
    return extension if dot else ""


def get_content_type(path: str) -> str:
    """
    Get the Content-Type header value for a file path.

    Examples:
        >>> get_content_type("/srv/app/index.html")
        'text/html;charset=UTF-8'
        >>> get_content_type("/srv/app/notes.md")
        'text/plain'
    """
    return CONTENT_TYPES.get(get_extension(path), DEFAULT_CONTENT_TYPE)
