"""Service check grammar: ``_sc|name|status``."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from ..models import DatadogMetric, MetricType, ParseError
from .base import SEP_PIPE, decode_text
from .lexicon import type_of_service_check


@dataclass(frozen=True, slots=True)
class ServiceCheckParser:
    """Parse the part of a service check that follows the ``_sc|`` prefix."""

    def parse(self, body: bytes, tags: Sequence[str]) -> DatadogMetric | ParseError:
        if not body:
            return ParseError.EMPTY_PAYLOAD

        if body.endswith(SEP_PIPE):
            return ParseError.INVALID_TRAILING_PIPE

        type_start = body.rfind(SEP_PIPE)
        if type_start == -1:
            return ParseError.NO_TYPE_SEP

        status = type_of_service_check(body[type_start + 1 :])
        if isinstance(status, ParseError):
            return status

        return DatadogMetric(
            name=decode_text(body[:type_start]),
            value=status.value,
            type=MetricType.SERVICE_CHECK,
            tags=tuple(tags),
        )
