"""Process-wide logging setup shared by the CLI and the MCP server."""

from __future__ import annotations

import logging
import os

LOG_LEVEL_ENV = "FAKEADOG_LOG_LEVEL"


def configure_logging() -> None:
    """Configure a reasonable default logging setup.

    Logs go to stderr, which keeps stdout clean for decoded output and for
    the MCP stdio transport.
    """
    level_name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)
    if not isinstance(level, int):
        level = logging.INFO
    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
