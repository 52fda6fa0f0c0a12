from __future__ import annotations

import gzip
from collections.abc import Callable
from pathlib import Path

import pytest


@pytest.fixture
def sample_datagram() -> bytes:
    return b"foo:1|c|#baz,zap\n\nnotavalidmetric\nbar:2|c"


@pytest.fixture
def write_capture() -> Callable[[Path, list[bytes]], None]:
    def _write(path: Path, lines: list[bytes]) -> None:
        data = b"".join(line + b"\n" for line in lines)
        if path.suffix == ".gz":
            with gzip.open(path, "wb") as f:
                f.write(data)
        else:
            path.write_bytes(data)

    return _write
