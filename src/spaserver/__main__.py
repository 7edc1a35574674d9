"""
=============================================================================
SPASERVER CLI ENTRY POINT
=============================================================================

    # Serve ./dist on port 80 (the default)
    APP_FOLDER=./dist python -m spaserver

    # Custom port
    APP_FOLDER=./dist python -m spaserver 8080

    # Mirror the log into a file
    APP_FOLDER=./dist LOG_TO_FILE=true LOG_FILE_PATH=server.log python -m spaserver

    # Same settings kept in ./.env
    python -m spaserver 8080

The first argument is the port. Anything that is not a number falls back
to port 80, and any further arguments are ignored. There are no flags and
no help text.

Everything else comes from the environment (see spaserver.config). A .env
file in the working directory (or one of its parents) is loaded first;
variables already set in the environment win over it.

=============================================================================
"""

import sys
from typing import List, Optional

from dotenv import find_dotenv, load_dotenv

from .config import ServerConfig, ConfigError, parse_port
from .log import setup_logging
from .server import HTTPServer


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point.

    Args:
        argv: Command-line arguments without the program name
              (default: sys.argv[1:]).

    Returns:
        Process exit code.
    """
    if argv is None:
        argv = sys.argv[1:]
    port = parse_port(argv[0] if argv else None)

    # =========================================================================
    # CREATE CONFIGURATION
    # =========================================================================
    load_dotenv(find_dotenv(usecwd=True))

    try:
        config = ServerConfig.from_env(port=port)
        setup_logging(config)
    except (ConfigError, OSError) as e:
        # Missing APP_FOLDER, unwritable LOG_FILE_PATH
        print(f"Error: {e}", file=sys.stderr)
        return 1

    # =========================================================================
    # RUN SERVER
    # =========================================================================
    # Blocks until Ctrl+C
    try:
        HTTPServer(config).run()
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
