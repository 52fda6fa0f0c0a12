"""Tag section extraction."""

from __future__ import annotations

from .base import SEP_COMMA, SEP_HASH, decode_text


def parse_tags(line: bytes) -> tuple[tuple[str, ...], int]:
    """Return the tags of a line and the offset where its tag section starts.

    Tags begin after the last ``#``; when there is none the offset is the
    line length. Tokens are kept verbatim, empty ones included.
    """
    tag_start = line.rfind(SEP_HASH)
    if tag_start == -1:
        return (), len(line)

    tags = tuple(decode_text(t) for t in line[tag_start + 1 :].split(SEP_COMMA))
    return tags, tag_start
