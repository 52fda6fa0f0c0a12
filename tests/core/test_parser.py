from __future__ import annotations

import pytest

from fakeadog.core.models import DatadogMetric, DatadogParseError, MetricType, ParseError
from fakeadog.core.parser import DatadogParser, default_parser, parse_datagram, parse_line


def test_datadog_metric_str() -> None:
    m = DatadogMetric(name="foo", value="bar", type=MetricType.COUNT, tags=("baz",))
    assert m.name == "foo"
    assert m.value == "bar"
    assert m.type == MetricType.COUNT
    assert m.tags == ("baz",)
    assert str(m) == "COUNT foo bar [baz]"


def test_parse_empty() -> None:
    assert parse_line(b"") is ParseError.EMPTY_PAYLOAD


def test_parse_tags_only() -> None:
    assert parse_line(b"#foo,bar") is ParseError.EMPTY_PAYLOAD


def test_parse_plain_statsd_metric() -> None:
    m = parse_line(b"modprox-registry.heartbeat-accepted:1|c")
    assert isinstance(m, DatadogMetric)
    assert m.type == MetricType.COUNT
    assert m.name == "modprox-registry.heartbeat-accepted"
    assert m.value == "1"
    assert m.tags == ()


def test_parse_metric_valid_with_tags() -> None:
    assert parse_line(b"foo:bar|c|#baz,zap") == DatadogMetric(
        name="foo",
        value="bar",
        type=MetricType.COUNT,
        tags=("baz", "zap"),
    )


def test_parse_service_check_valid_with_tags() -> None:
    assert parse_line(b"_sc|foobar|0|#baz,zap") == DatadogMetric(
        name="foobar",
        value="OK",
        type=MetricType.SERVICE_CHECK,
        tags=("baz", "zap"),
    )


def test_parse_event_valid_with_tags() -> None:
    assert parse_line(b"_e{3,6}:foo|barbaz|#baz,zap") == DatadogMetric(
        name="foo",
        value="barbaz",
        type=MetricType.EVENT,
        tags=("baz", "zap"),
    )


@pytest.mark.parametrize(
    ("code", "kind"),
    [
        ("g", MetricType.GAUGE),
        ("c", MetricType.COUNT),
        ("h", MetricType.HISTOGRAM),
        ("s", MetricType.SET),
        ("ms", MetricType.TIMING),
    ],
)
def test_parse_every_metric_type(code: str, kind: MetricType) -> None:
    m = parse_line(f"app.metric:42|{code}|#env:dev".encode())
    assert m == DatadogMetric(name="app.metric", value="42", type=kind, tags=("env:dev",))


def test_parse_doubled_pipe_before_tags() -> None:
    assert parse_line(b"foo:bar|c||#baz") is ParseError.INVALID_TRAILING_PIPE


def test_parse_unknown_codes() -> None:
    assert parse_line(b"foo:1|x|#a") is ParseError.INVALID_METRIC_TYPE
    assert parse_line(b"_sc|db|5|#a") is ParseError.INVALID_SERVICE_CHECK_TYPE


def test_parse_lenient_tags_without_pipe() -> None:
    m = parse_line(b"foo:bar|c#baz")
    assert m == DatadogMetric(name="foo", value="bar", type=MetricType.COUNT, tags=("baz",))


def test_parse_strict_requires_trailing_pipe() -> None:
    p = DatadogParser(require_trailing_pipe=True)
    assert p.parse(b"foo:bar|c") is ParseError.NO_TRAILING_PIPE
    assert p.parse(b"foo:bar|c#baz") is ParseError.NO_TRAILING_PIPE
    assert p.parse(b"foo:bar|c|") == DatadogMetric(name="foo", value="bar", type=MetricType.COUNT)
    assert p.parse(b"foo:bar|c|#baz,zap") == DatadogMetric(
        name="foo",
        value="bar",
        type=MetricType.COUNT,
        tags=("baz", "zap"),
    )


def test_parse_accepts_bytearray_and_memoryview() -> None:
    buf = bytearray(b"foo:1|g|#a")
    m1 = parse_line(buf)
    m2 = parse_line(memoryview(buf))
    buf[:] = b"xxxxxxxxxx"
    assert m1 == m2 == DatadogMetric(name="foo", value="1", type=MetricType.GAUGE, tags=("a",))


def test_parse_is_deterministic() -> None:
    line = b"_e{3,6}:foo|barbaz|#baz,zap"
    assert parse_line(line) == parse_line(line)
    assert parse_line(b"nope") is parse_line(b"nope")


def test_parse_or_raise() -> None:
    p = default_parser()
    assert p.parse_or_raise(b"foo:1|c").value == "1"
    with pytest.raises(DatadogParseError) as exc_info:
        p.parse_or_raise(b"foo:1|q")
    assert exc_info.value.error is ParseError.INVALID_METRIC_TYPE
    assert exc_info.value.line == b"foo:1|q"
    assert str(exc_info.value) == "invalid metric type"


def test_parse_multi(sample_datagram: bytes) -> None:
    results = parse_datagram(sample_datagram)

    assert [r.index for r in results] == [0, 1, 2, 3]
    assert [r.ok for r in results] == [True, False, False, True]

    assert results[0].metric == DatadogMetric(
        name="foo",
        value="1",
        type=MetricType.COUNT,
        tags=("baz", "zap"),
    )
    assert results[0].error is None
    assert results[1].metric is None
    assert results[1].error is ParseError.EMPTY_PAYLOAD
    assert results[2].error is ParseError.NO_TYPE_SEP
    assert results[3].metric is not None
    assert (results[3].metric.name, results[3].metric.value) == ("bar", "2")


def test_parse_multi_keeps_empty_segments() -> None:
    results = parse_datagram(b"\nfoo:1|c\n")
    assert [r.error for r in results] == [ParseError.EMPTY_PAYLOAD, None, ParseError.EMPTY_PAYLOAD]


def test_parse_multi_empty_datagram() -> None:
    results = parse_datagram(b"")
    assert len(results) == 1
    assert results[0].error is ParseError.EMPTY_PAYLOAD


def test_iter_results_matches_parse_multi(sample_datagram: bytes) -> None:
    p = DatadogParser()
    assert list(p.iter_results(sample_datagram)) == p.parse_multi(sample_datagram)
