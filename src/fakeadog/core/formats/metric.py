"""Metric grammar: ``name:value|type``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import DatadogMetric, ParseError
from .base import SEP_COLON, SEP_PIPE, decode_text
from .lexicon import type_of_metric


@dataclass(frozen=True, slots=True)
class MetricParser:
    """Parse gauges, counts, histograms, sets and timings."""

    def parse(self, body: bytes, tags: Sequence[str]) -> DatadogMetric | ParseError:
        """Parse a metric body, assuming tags have already been stripped."""
        if not body:
            return ParseError.EMPTY_PAYLOAD

        # a trailing pipe here means no metric type is present
        if body.endswith(SEP_PIPE):
            return ParseError.INVALID_TRAILING_PIPE

        type_start = body.rfind(SEP_PIPE)
        if type_start == -1:
            return ParseError.NO_TYPE_SEP

        metric_type = type_of_metric(body[type_start + 1 :])
        if isinstance(metric_type, ParseError):
            return metric_type

        # The byte right before the type separator is never a value separator.
        sep_idx = body.rfind(SEP_COLON, 0, max(type_start - 1, 0))
        if sep_idx == -1:
            return ParseError.NO_VAL_SEP

        return DatadogMetric(
            name=decode_text(body[:sep_idx]),
            value=decode_text(body[sep_idx + 1 : type_start]),
            type=metric_type,
            tags=tuple(tags),
        )
