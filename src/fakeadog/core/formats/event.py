"""Event grammar: ``_e{title_len,text_len}:title|text``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import DatadogMetric, MetricType, ParseError
from .base import SEP_COLON, SEP_PIPE, decode_text


@dataclass(frozen=True, slots=True)
class EventParser:
    """Parse the part of an event that follows the ``_e`` prefix.

    The ``{len,len}`` header is informational and not checked against the
    actual title/text lengths.
    """

    def parse(self, body: bytes, tags: Sequence[str]) -> DatadogMetric | ParseError:
        if not body:
            return ParseError.EMPTY_PAYLOAD

        name_start = body.find(SEP_COLON)
        if name_start == -1:
            return ParseError.NO_VAL_SEP

        name_end = body.find(SEP_PIPE)
        if name_end == -1:
            return ParseError.NO_MSG_SEP

        return DatadogMetric(
            name=decode_text(body[name_start + 1 : name_end]),
            value=decode_text(body[name_end + 1 :]),
            type=MetricType.EVENT,
            tags=tuple(tags),
        )
