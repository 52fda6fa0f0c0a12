"""MCP tool implementations.

This module contains the *implementation* behind the exposed MCP tools.
Keep this layer thin: validate inputs, translate them into core calls, and
return JSON-serializable data structures.
"""

from __future__ import annotations

import os
from collections.abc import Iterable
from contextlib import aclosing
from pathlib import Path
from typing import Any

from pydantic import BaseModel, Field

from fakeadog.core.models import ParseResult
from fakeadog.core.parser import DatadogParser
from fakeadog.core.replay import iter_file_results

DEFAULT_LIMIT = 500
HARD_LIMIT = 5000
BASE_DIR_ENV = "FAKEADOG_BASE_DIR"


class DecodedLine(BaseModel):
    index: int = Field(description="0-based line index within the datagram or capture file.")
    ok: bool = Field(description="True when the line decoded into a record.")
    type: str | None = Field(default=None, description="Record kind, e.g. COUNT or SERVICE_CHECK.")
    name: str | None = None
    value: str | None = None
    tags: list[str] = Field(default_factory=list)
    error: str | None = Field(default=None, description="Error name when decoding failed.")
    message: str | None = Field(default=None, description="Static message for the error.")


class DecodeSummary(BaseModel):
    count: int
    ok: int
    failed: int
    lines: list[DecodedLine] = Field(default_factory=list)


def _result_to_line(r: ParseResult) -> DecodedLine:
    if r.metric is not None:
        return DecodedLine(
            index=r.index,
            ok=True,
            type=r.metric.type.value,
            name=r.metric.name,
            value=r.metric.value,
            tags=list(r.metric.tags),
        )
    return DecodedLine(
        index=r.index,
        ok=False,
        error=r.error.name if r.error else None,
        message=r.error.message if r.error else None,
    )


def _summarize(results: Iterable[ParseResult]) -> dict[str, Any]:
    lines = [_result_to_line(r) for r in results]
    ok = sum(1 for line in lines if line.ok)
    summary = DecodeSummary(count=len(lines), ok=ok, failed=len(lines) - ok, lines=lines)
    return summary.model_dump()


def _base_dir() -> Path:
    """Return the resolved base directory for capture files."""
    raw = os.getenv(BASE_DIR_ENV, os.getcwd())
    return Path(raw).resolve()


def _safe_resolve(path: str) -> Path:
    """Resolve a path under the configured base directory."""
    base = _base_dir()
    p = Path(path).expanduser()
    if not p.is_absolute():
        p = base / p
    p = p.resolve()
    if base not in p.parents and p != base:
        raise ValueError("Path escapes base dir")
    return p


def decode_datagram_impl(*, payload: str, strict: bool = False) -> dict[str, Any]:
    """Implementation for the `decode_datagram` MCP tool."""
    parser = DatadogParser(require_trailing_pipe=strict)
    return _summarize(parser.iter_results(payload.encode("utf-8")))


async def decode_capture_file_impl(
    *,
    path: str,
    strict: bool = False,
    limit: int | None = None,
) -> dict[str, Any]:
    """Implementation for the `decode_capture_file` MCP tool.

    Only the first ``limit`` lines are decoded (default 500, capped at 5000).
    """
    if limit is None:
        limit = DEFAULT_LIMIT
    if limit <= 0:
        raise ValueError("limit must be > 0")
    if limit > HARD_LIMIT:
        limit = HARD_LIMIT

    resolved = _safe_resolve(path)
    parser = DatadogParser(require_trailing_pipe=strict)

    results: list[ParseResult] = []
    async with aclosing(iter_file_results(resolved, parser=parser)) as it:
        async for r in it:
            results.append(r)
            if len(results) >= limit:
                break
    return _summarize(results)
