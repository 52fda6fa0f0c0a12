"""DogStatsD wire grammars.

Contains the tag extractor, the three line grammars (metric, service check,
event) and the wire code lexicons they share.
"""

from __future__ import annotations

from .base import LineGrammar
from .event import EventParser
from .lexicon import (
    METRIC_TYPE_CODES,
    SERVICE_CHECK_CODES,
    type_of_metric,
    type_of_service_check,
)
from .metric import MetricParser
from .service_check import ServiceCheckParser
from .tags import parse_tags

__all__ = [
    "EventParser",
    "LineGrammar",
    "METRIC_TYPE_CODES",
    "MetricParser",
    "SERVICE_CHECK_CODES",
    "ServiceCheckParser",
    "parse_tags",
    "type_of_metric",
    "type_of_service_check",
]
