"""Grammar interface and wire-level constants."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol

from ..models import DatadogMetric, ParseError

PREFIX_SERVICE_CHECK = b"_sc|"
PREFIX_EVENT = b"_e"

SEP_COLON = b":"
SEP_COMMA = b","
SEP_HASH = b"#"
SEP_PIPE = b"|"

TEXT_ENCODING = "utf-8"
TEXT_ERRORS = "replace"


class LineGrammar(Protocol):
    """Grammar interface: decode a tag-stripped body into a record or an error."""

    def parse(self, body: bytes, tags: Sequence[str]) -> DatadogMetric | ParseError:
        """Parse a body whose tag section (and trailing pipe) was already removed."""
        ...


def decode_text(raw: bytes) -> str:
    """Decode a wire span to text without ever raising."""
    return raw.decode(TEXT_ENCODING, errors=TEXT_ERRORS)
