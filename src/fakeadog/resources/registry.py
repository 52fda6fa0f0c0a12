"""MCP resource registry.

Resources are addressable by URI and can be fetched by the MCP client on demand.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP

from fakeadog.core.formats import METRIC_TYPE_CODES, SERVICE_CHECK_CODES
from fakeadog.core.models import ParseError
from fakeadog.tools.decode import BASE_DIR_ENV, DecodeSummary, _base_dir

SAMPLE_DATAGRAM = (
    "page.views:1|c|#env:dev,region:eu\n"
    "fuel.level:0.5|g\n"
    "song.length:240|h|#genre:rock\n"
    "users.uniques:1234|s\n"
    "request.latency:320|ms|#route:/api/items\n"
    "_sc|db.connection|2|#env:dev\n"
    "_e{11,21}:deploy done|build 42 is now live|#env:dev\n"
)


def register_resources(mcp: FastMCP) -> None:
    """Register resource handlers on the MCP server."""

    @mcp.resource("app://fakeadog/help")
    def help_resource() -> str:
        """Return a short list of available resource URIs."""
        return (
            "Resources:\n"
            "- app://fakeadog/help\n"
            "- app://fakeadog/wire-codes\n"
            "- app://fakeadog/errors\n"
            "- app://fakeadog/examples/sample-datagram\n"
            "- app://fakeadog/schemas/decode-summary\n"
            "\nTools:\n"
            "- decode_datagram(payload, strict=False)\n"
            f"- decode_capture_file(path, strict=False, limit=None) (restricted to {BASE_DIR_ENV})\n"
            f"\nBase directory: {_base_dir()}\n"
        )

    @mcp.resource("app://fakeadog/wire-codes")
    def wire_codes() -> dict[str, dict[str, str]]:
        """Return the metric type and service check status codes."""
        return {
            "metric_types": {k.decode(): v.value for k, v in METRIC_TYPE_CODES.items()},
            "service_check_statuses": {k.decode(): v.value for k, v in SERVICE_CHECK_CODES.items()},
        }

    @mcp.resource("app://fakeadog/errors")
    def error_catalog() -> dict[str, str]:
        """Return every parse error name with its message."""
        return {e.name: e.message for e in ParseError}

    @mcp.resource("app://fakeadog/examples/sample-datagram")
    def sample_datagram() -> str:
        """Return a datagram covering every record kind."""
        return SAMPLE_DATAGRAM

    @mcp.resource("app://fakeadog/schemas/decode-summary")
    def decode_summary_schema() -> dict[str, Any]:
        """Return the JSON schema of decode tool results."""
        return DecodeSummary.model_json_schema()
