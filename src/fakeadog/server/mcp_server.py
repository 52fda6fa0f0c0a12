"""MCP server entrypoint (stdio transport).

This module wires together:
- Tools: decode a datagram or a capture file
- Resources: wire code tables, error catalog, schemas
- Prompts: reusable conversation templates that clients can invoke

Run locally (stdio):
    python -m fakeadog.server.mcp_server
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Sequence
from typing import Any

from mcp.server.fastmcp import FastMCP

from fakeadog.logging_config import configure_logging
from fakeadog.prompts.registry import register_prompts
from fakeadog.resources.registry import register_resources
from fakeadog.tools.decode import decode_capture_file_impl, decode_datagram_impl

LOGGER = logging.getLogger(__name__)

mcp = FastMCP("fakeadog", json_response=True)

register_resources(mcp)
register_prompts(mcp)


@mcp.tool()
def decode_datagram(payload: str, strict: bool = False) -> dict[str, Any]:
    """Decode a StatsD/DogStatsD datagram, one result per newline-delimited line.

    Parameters
    ----------
    payload:
        Raw datagram text, e.g. "page.views:1|c|#env:dev\\n_sc|db|0".
        Empty lines are decoded too and fail with EMPTY_PAYLOAD.
    strict:
        When true, a pipe is required right before the tag section (or at
        the end of the line when there are no tags).

    Returns
    -------
    dict:
        {"count": int, "ok": int, "failed": int, "lines": list[dict]}
    """
    return decode_datagram_impl(payload=payload, strict=strict)


@mcp.tool()
async def decode_capture_file(
    path: str,
    strict: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Decode a capture file holding one wire line per line (plain or .gz).

    Parameters
    ----------
    path:
        File path, relative to FAKEADOG_BASE_DIR (default: working directory).
    strict:
        Same as for decode_datagram.
    limit:
        Maximum number of lines decoded (default 500, hard-capped at 5000).
    """
    return await decode_capture_file_impl(path=path, strict=strict, limit=limit)


def main(argv: Sequence[str] | None = None) -> None:
    """Start the MCP server over stdio."""
    configure_logging()
    LOGGER.debug("Starting MCP server (transport=stdio)")
    _ = argv or sys.argv[1:]
    mcp.run(transport="stdio")


if __name__ == "__main__":
    main()
