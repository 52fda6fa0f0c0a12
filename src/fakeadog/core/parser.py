"""Line dispatch and datagram splitting.

This module is the main integration point: it turns raw datagram payloads
into ``ParseResult`` values, one per newline-delimited line.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field

from .formats import EventParser, LineGrammar, MetricParser, ServiceCheckParser, parse_tags
from .formats.base import PREFIX_EVENT, PREFIX_SERVICE_CHECK, SEP_PIPE
from .models import DatadogMetric, DatadogParseError, ParseError, ParseResult

LINE_SEP = b"\n"

# from datadog-go/statsd
MAX_DATAGRAM_SIZE = 65467


@dataclass(frozen=True, slots=True)
class DatadogParser:
    """Stateless DogStatsD line decoder.

    ``require_trailing_pipe`` makes the separator between the last field and
    the tag section mandatory; by default one trailing pipe is stripped when
    present and tolerated when absent.
    """

    require_trailing_pipe: bool = False
    metrics: LineGrammar = field(default_factory=MetricParser)
    service_checks: LineGrammar = field(default_factory=ServiceCheckParser)
    events: LineGrammar = field(default_factory=EventParser)

    def parse(self, line: bytes | bytearray | memoryview) -> DatadogMetric | ParseError:
        """Decode one line (no embedded newline) into a record or an error."""
        payload = bytes(line)
        tags, tag_start = parse_tags(payload)

        trimmed = payload[:tag_start]
        if not trimmed:
            return ParseError.EMPTY_PAYLOAD

        if trimmed.endswith(SEP_PIPE):
            trimmed = trimmed[: -len(SEP_PIPE)]
        elif self.require_trailing_pipe:
            return ParseError.NO_TRAILING_PIPE

        if trimmed.startswith(PREFIX_SERVICE_CHECK):
            return self.service_checks.parse(trimmed[len(PREFIX_SERVICE_CHECK) :], tags)
        if trimmed.startswith(PREFIX_EVENT):
            return self.events.parse(trimmed[len(PREFIX_EVENT) :], tags)
        return self.metrics.parse(trimmed, tags)

    def parse_or_raise(self, line: bytes | bytearray | memoryview) -> DatadogMetric:
        """Like ``parse`` but raise ``DatadogParseError`` on failure."""
        out = self.parse(line)
        if isinstance(out, ParseError):
            raise DatadogParseError(out, bytes(line))
        return out

    def iter_results(self, datagram: bytes | bytearray | memoryview) -> Iterator[ParseResult]:
        """Yield one result per newline-delimited line, empty lines included."""
        for index, line in enumerate(bytes(datagram).split(LINE_SEP)):
            out = self.parse(line)
            if isinstance(out, ParseError):
                yield ParseResult(index=index, error=out)
            else:
                yield ParseResult(index=index, metric=out)

    def parse_multi(self, datagram: bytes | bytearray | memoryview) -> list[ParseResult]:
        """Decode every line of a datagram; result ``i`` belongs to line ``i``."""
        return list(self.iter_results(datagram))


_DEFAULT_PARSER = DatadogParser()


def default_parser() -> DatadogParser:
    """Default lenient parser (shared; it holds no state)."""
    return _DEFAULT_PARSER


def parse_line(line: bytes | bytearray | memoryview) -> DatadogMetric | ParseError:
    """Decode a single line with the default parser."""
    return _DEFAULT_PARSER.parse(line)


def parse_datagram(datagram: bytes | bytearray | memoryview) -> list[ParseResult]:
    """Decode a whole datagram with the default parser."""
    return _DEFAULT_PARSER.parse_multi(datagram)
