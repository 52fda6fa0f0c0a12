"""Core data models for decoded DogStatsD telemetry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MetricType(str, Enum):
    """Kind of a decoded record."""

    GAUGE = "GAUGE"
    COUNT = "COUNT"
    HISTOGRAM = "HISTOGRAM"
    SET = "SET"
    TIMING = "TIMING"
    SERVICE_CHECK = "SERVICE_CHECK"
    EVENT = "EVENT"


class ServiceCheckStatus(str, Enum):
    """Canonical service check statuses."""

    OK = "OK"
    WARN = "WARN"
    CRITICAL = "CRITICAL"
    UNKNOWN = "UNKNOWN"


class ParseError(Enum):
    """Reasons a line can fail to decode.

    Members carry a static message only, so two failures for the same reason
    always compare equal.
    """

    EMPTY_PAYLOAD = "empty payload after stripping tags"
    INVALID_TRAILING_PIPE = "payload should have exactly one trailing pipe before tag start"
    NO_TRAILING_PIPE = "missing trailing pipe"
    NO_TYPE_SEP = "missing type separator"
    NO_VAL_SEP = "missing value separator"
    INVALID_METRIC_TYPE = "invalid metric type"
    INVALID_SERVICE_CHECK_TYPE = "invalid service check type"
    NO_MSG_SEP = "missing pipe between event name and body"

    @property
    def message(self) -> str:
        return self.value

    def __str__(self) -> str:
        return self.value


class DatadogParseError(ValueError):
    """Exception form of a ParseError for callers that prefer raising."""

    def __init__(self, error: ParseError, line: bytes | None = None) -> None:
        super().__init__(error.message)
        self.error = error
        self.line = line


@dataclass(frozen=True, slots=True)
class DatadogMetric:
    """A single decoded metric, service check or event."""

    name: str
    value: str
    type: MetricType
    tags: tuple[str, ...] = ()

    def __str__(self) -> str:
        return f"{self.type.value} {self.name} {self.value} [{' '.join(self.tags)}]"


@dataclass(frozen=True, slots=True)
class ParseResult:
    """Outcome for one line of a datagram (exactly one of metric/error is set)."""

    index: int
    metric: DatadogMetric | None = None
    error: ParseError | None = None

    @property
    def ok(self) -> bool:
        return self.metric is not None
