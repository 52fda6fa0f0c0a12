"""Capture-file replay.

A capture file holds one wire line per text line (plain or gzip-compressed),
e.g. the output of ``tcpdump -A`` trimmed to payloads, or a file written by a
test client. Each line is decoded exactly as if it had arrived on the socket.
"""

from __future__ import annotations

import gzip
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from pathlib import Path

import aiofiles
from aiofiles.threadpool import wrap

from .models import ParseError, ParseResult
from .parser import DatadogParser, default_parser


@asynccontextmanager
async def _open_binary(path: Path):
    """Open a capture file for async binary reading (plain or gzip)."""
    if path.suffix.lower() == ".gz":
        f = gzip.open(path, mode="rb")
        af = wrap(f)
        try:
            yield af
        finally:
            await af.close()
    else:
        async with aiofiles.open(path, mode="rb") as f:
            yield f


def _strip_terminator(raw: bytes) -> bytes:
    if raw.endswith(b"\n"):
        raw = raw[:-1]
        if raw.endswith(b"\r"):
            raw = raw[:-1]
    return raw


async def iter_file_results(
    path: str | Path,
    *,
    parser: DatadogParser | None = None,
) -> AsyncIterator[ParseResult]:
    """Yield one result per line of a capture file (index is 0-based)."""
    p = Path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Capture file not found: {p}")

    parser = parser or default_parser()

    async with _open_binary(p) as f:
        index = 0
        async for raw in f:
            out = parser.parse(_strip_terminator(raw))
            if isinstance(out, ParseError):
                yield ParseResult(index=index, error=out)
            else:
                yield ParseResult(index=index, metric=out)
            index += 1


async def get_file_results(path: str | Path, **iter_kwargs) -> list[ParseResult]:
    """Collect iter_file_results into a list."""
    return [r async for r in iter_file_results(path, **iter_kwargs)]
