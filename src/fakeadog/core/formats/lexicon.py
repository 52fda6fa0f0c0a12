"""Wire code lookups for metric types and service check statuses."""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType

from ..models import MetricType, ParseError, ServiceCheckStatus

METRIC_TYPE_CODES: Mapping[bytes, MetricType] = MappingProxyType(
    {
        b"g": MetricType.GAUGE,
        b"c": MetricType.COUNT,
        b"h": MetricType.HISTOGRAM,
        b"s": MetricType.SET,
        b"ms": MetricType.TIMING,
    }
)

SERVICE_CHECK_CODES: Mapping[bytes, ServiceCheckStatus] = MappingProxyType(
    {
        b"0": ServiceCheckStatus.OK,
        b"1": ServiceCheckStatus.WARN,
        b"2": ServiceCheckStatus.CRITICAL,
        b"3": ServiceCheckStatus.UNKNOWN,
    }
)


def type_of_metric(code: bytes) -> MetricType | ParseError:
    """Resolve a metric type code (exact, case-sensitive match)."""
    return METRIC_TYPE_CODES.get(bytes(code), ParseError.INVALID_METRIC_TYPE)


def type_of_service_check(code: bytes) -> ServiceCheckStatus | ParseError:
    """Resolve a service check status code (exact match)."""
    return SERVICE_CHECK_CODES.get(bytes(code), ParseError.INVALID_SERVICE_CHECK_TYPE)
