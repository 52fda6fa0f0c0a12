"""MCP prompt registry.

Prompts are predefined conversation/workflow templates that the client can invoke explicitly.
"""

from __future__ import annotations

from typing import Any

from mcp.server.fastmcp import FastMCP


def register_prompts(mcp: FastMCP) -> None:
    """Register prompt templates on the MCP server."""

    @mcp.prompt()
    def explain_datagram(payload: str, strict: bool = False) -> list[dict[str, Any]]:
        """Build a prompt that explains a DogStatsD datagram line by line."""
        return [
            {
                "role": "system",
                "content": (
                    "You are a precise assistant for StatsD/DogStatsD telemetry. Explain decoded "
                    "lines using tool output only; do not guess values the decoder did not return."
                ),
            },
            {
                "role": "user",
                "content": (
                    "Decode the datagram below with decode_datagram "
                    f"(strict={str(strict).lower()}) and then:\n"
                    "1) List each decoded record (kind, name, value, tags)\n"
                    "2) For every failed line, quote the line, give the error name and say how "
                    "to fix the sender\n"
                    "3) Mention empty lines separately; they usually come from a trailing newline\n\n"
                    f"Datagram:\n{payload}\n"
                ),
            },
            {
                "role": "user",
                "content": [
                    {"type": "text", "text": "Wire code reference:"},
                    {"type": "resource", "uri": "app://fakeadog/wire-codes"},
                ],
            },
        ]
