"""
=============================================================================
SERVER CONFIGURATION
=============================================================================

Centralized configuration for the static file server.

The configuration is built ONCE at startup and handed to every component
that needs it (HTTPServer, SocketServer, StaticFileHandler). Nothing reads
the environment while requests are being served.

=============================================================================
CONFIGURATION SOURCES
=============================================================================

    ┌─────────────────────────────────────────────────────────────────────┐
    │                    CONFIGURATION HIERARCHY                          │
    ├─────────────────────────────────────────────────────────────────────┤
    │                                                                      │
    │   1. Command-line argument (port only)                              │
    │      └── python -m spaserver 8080                                   │
    │                                                                      │
    │   2. Environment variables                                          │
    │      └── APP_FOLDER=./dist LOG_TO_FILE=true ...                     │
    │                                                                      │
    │   3. .env file (loaded by the CLI, never overrides 2.)              │
    │                                                                      │
    │   4. Default values (in this dataclass)                             │
    │                                                                      │
    └─────────────────────────────────────────────────────────────────────┘

=============================================================================
ENVIRONMENT VARIABLES
=============================================================================

    APP_FOLDER           Root directory for static files (REQUIRED)
    LOG_TO_FILE          "true" mirrors log lines into LOG_FILE_PATH
    LOG_FILE_PATH        Log file (required when LOG_TO_FILE is "true")
    LOG_LEVEL            Logging level (default: INFO)
    NON_BLOCKING_ACCEPT  "true" switches the accept loop to busy-polling

=============================================================================
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional


DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 80

# Size of the single read performed per connection.
DEFAULT_BUFFER_SIZE = 1024


class ConfigError(Exception):
    """Raised when the server configuration is missing or invalid."""


def parse_port(value: Optional[str], default: int = DEFAULT_PORT) -> int:
    """
    Convert a port given on the command line into an integer.

    Missing or unparsable values fall back to ``default`` rather than
    failing, so ``python -m spaserver abc`` still starts on port 80.

    Examples:
        >>> parse_port("8080")
        8080
        >>> parse_port(None)
        80
        >>> parse_port("eighty")
        80
    """
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        return default


@dataclass
class ServerConfig:
    """
    Configuration for the static file server.

    =========================================================================
    CONFIGURATION GROUPS
    =========================================================================

    NETWORK SETTINGS
    - host, port, backlog, buffer_size, non_blocking, accept_poll_interval

    STATIC FILES
    - root_dir

    LOGGING
    - log_level, log_to_file, log_file_path

    =========================================================================
    """

    # ─────────────────────────────────────────────────────────────────────
    # STATIC FILES
    # ─────────────────────────────────────────────────────────────────────

    root_dir: str = ""
    """
    Directory static files are served from (APP_FOLDER).
    Request paths are appended to it verbatim, so it is normally given
    WITHOUT a trailing slash: "/srv/app" + "/index.html".
    """

    # ─────────────────────────────────────────────────────────────────────
    # NETWORK SETTINGS
    # ─────────────────────────────────────────────────────────────────────

    host: str = DEFAULT_HOST
    """The IP address to bind to. Localhost only."""

    port: int = DEFAULT_PORT
    """
    The port number to listen on.
    0 lets the OS pick a free port (used by the test suite).
    """

    backlog: int = 128
    """Maximum number of queued connections."""

    buffer_size: int = DEFAULT_BUFFER_SIZE
    """
    Capacity of the single read performed per connection.
    Requests (headers included) longer than this are truncated.
    """

    non_blocking: bool = False
    """
    Accept mode.
    False - accept() waits for a client (polling every accept_poll_interval
            seconds so shutdown() is noticed)
    True  - accept() never waits; "would block" is retried immediately
    """

    accept_poll_interval: float = 1.0
    """How long a blocking accept() waits before re-checking shutdown."""

    # ─────────────────────────────────────────────────────────────────────
    # LOGGING
    # ─────────────────────────────────────────────────────────────────────

    log_level: str = "INFO"
    """Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)."""

    log_to_file: bool = False
    """Mirror every log line into log_file_path."""

    log_file_path: Optional[str] = None
    """File the log is appended to when log_to_file is enabled."""

    @classmethod
    def from_env(
        cls,
        port: Optional[int] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "ServerConfig":
        """
        Create configuration from environment variables.

        Args:
            port: Port selected on the command line (default: 80).
            environ: Mapping to read instead of ``os.environ``.

        Raises:
            ConfigError: If APP_FOLDER is not set, or LOG_TO_FILE is
                         "true" without LOG_FILE_PATH.
        """
        env = os.environ if environ is None else environ

        root_dir = env.get("APP_FOLDER")
        if not root_dir:
            raise ConfigError("Please set environment variable APP_FOLDER (or add it to .env)")

        # Only the exact string "true" enables mirroring
        log_to_file = env.get("LOG_TO_FILE", "false") == "true"
        log_file_path = env.get("LOG_FILE_PATH")
        if log_to_file and not log_file_path:
            raise ConfigError("Please set LOG_FILE_PATH in your environment or .env file")

        config = cls(
            root_dir=root_dir,
            port=DEFAULT_PORT if port is None else port,
            log_level=env.get("LOG_LEVEL", "INFO"),
            log_to_file=log_to_file,
            log_file_path=log_file_path,
            non_blocking=env.get("NON_BLOCKING_ACCEPT", "false") == "true",
        )
        config.validate()
        return config

    def validate(self) -> None:
        """
        Validate configuration values.

        Called once at startup so a bad value fails immediately instead
        of on the first request.
        """
        if not 0 <= self.port < 65536:
            raise ConfigError(f"Invalid port: {self.port}. Must be 0-65535.")

        if not self.root_dir:
            raise ConfigError("root_dir must be set")

        if self.buffer_size < 1:
            raise ConfigError("buffer_size must be >= 1")

        if self.log_to_file and not self.log_file_path:
            raise ConfigError("log_file_path is required when log_to_file is set")
