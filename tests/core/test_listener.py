from __future__ import annotations

import asyncio
import logging

import pytest

from fakeadog.core.config import ListenerConfig
from fakeadog.core.listener import DatagramDecoder, log_result, serve, start_listener
from fakeadog.core.models import DatadogMetric, MetricType, ParseError, ParseResult


@pytest.mark.asyncio
async def test_listener_decodes_datagram() -> None:
    received: list[tuple[ParseResult, bytes]] = []
    done = asyncio.Event()

    def sink(result: ParseResult, line: bytes) -> None:
        received.append((result, line))
        if len(received) == 3:
            done.set()

    transport, _ = await start_listener(ListenerConfig(host="127.0.0.1", port=0), sink=sink)
    try:
        host, port = transport.get_extra_info("sockname")[:2]
        loop = asyncio.get_running_loop()
        sender, _ = await loop.create_datagram_endpoint(asyncio.DatagramProtocol, remote_addr=(host, port))
        try:
            sender.sendto(b"foo:1|c|#a\n\n_sc|db|2")
            await asyncio.wait_for(done.wait(), timeout=5)
        finally:
            sender.close()
    finally:
        transport.close()

    results = [r for r, _ in received]
    lines = [line for _, line in received]
    assert results[0].metric == DatadogMetric(name="foo", value="1", type=MetricType.COUNT, tags=("a",))
    assert results[1].error is ParseError.EMPTY_PAYLOAD
    assert results[2].metric is not None
    assert results[2].metric.value == "CRITICAL"
    assert lines == [b"foo:1|c|#a", b"", b"_sc|db|2"]


@pytest.mark.asyncio
async def test_oversized_datagram_is_truncated(caplog: pytest.LogCaptureFixture) -> None:
    received: list[ParseResult] = []
    proto = DatagramDecoder(sink=lambda r, line: received.append(r), max_datagram_size=5)

    with caplog.at_level(logging.WARNING, logger="fakeadog.core.listener"):
        proto.datagram_received(b"foo:1|c", ("127.0.0.1", 1234))

    assert [r.error for r in received] == [ParseError.NO_TYPE_SEP]
    assert "truncated from 7 to 5 bytes" in caplog.text


@pytest.mark.asyncio
async def test_failing_sink_does_not_stop_decoding(caplog: pytest.LogCaptureFixture) -> None:
    seen: list[int] = []

    def sink(result: ParseResult, line: bytes) -> None:
        seen.append(result.index)
        if result.index == 0:
            raise RuntimeError("boom")

    proto = DatagramDecoder(sink=sink, max_datagram_size=1024)
    with caplog.at_level(logging.ERROR, logger="fakeadog.core.listener"):
        proto.datagram_received(b"a:1|c\nb:2|c", ("127.0.0.1", 1234))

    assert seen == [0, 1]
    assert "result sink failed" in caplog.text


def test_log_result_formats(caplog: pytest.LogCaptureFixture) -> None:
    ok = ParseResult(
        index=0,
        metric=DatadogMetric(name="foo", value="1", type=MetricType.COUNT, tags=("a", "b")),
    )
    bad = ParseResult(index=1, error=ParseError.NO_TYPE_SEP)

    with caplog.at_level(logging.INFO, logger="fakeadog.core.listener"):
        log_result(ok, b"foo:1|c|#a,b")
        log_result(bad, b"bad")

    assert "received datadog metric type=COUNT name=foo value=1 tags=[a b]" in caplog.text
    assert "parsing payload 'bad': missing type separator" in caplog.text


@pytest.mark.asyncio
async def test_serve_stops_on_cancel() -> None:
    task = asyncio.create_task(serve(ListenerConfig(host="127.0.0.1", port=0), sink=lambda r, line: None))
    await asyncio.sleep(0.05)
    task.cancel()
    with pytest.raises(asyncio.CancelledError):
        await task
