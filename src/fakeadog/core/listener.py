"""UDP listener that decodes every received datagram.

The decoder itself is synchronous and pure; this module owns the socket,
hands each payload to ``DatadogParser.parse_multi`` and forwards every
result to a sink (logging by default).
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from typing import Any

from .config import ListenerConfig
from .models import ParseResult
from .parser import DatadogParser, default_parser

LOGGER = logging.getLogger(__name__)

ResultSink = Callable[[ParseResult, bytes], None]


def log_result(result: ParseResult, line: bytes) -> None:
    """Default sink: log records at INFO and parse failures at ERROR."""
    if result.metric is not None:
        m = result.metric
        LOGGER.info(
            "received datadog metric type=%s name=%s value=%s tags=[%s]",
            m.type.value,
            m.name,
            m.value,
            " ".join(m.tags),
        )
    elif result.error is not None:
        LOGGER.error("parsing payload %r: %s", line.decode("utf-8", errors="replace"), result.error.message)


class DatagramDecoder(asyncio.DatagramProtocol):
    """asyncio protocol that decodes datagrams into ParseResults."""

    def __init__(
        self,
        *,
        parser: DatadogParser | None = None,
        sink: ResultSink | None = None,
        max_datagram_size: int,
    ) -> None:
        self.parser = parser or default_parser()
        self.sink = sink or log_result
        self.max_datagram_size = max_datagram_size
        self.closed: asyncio.Future[None] = asyncio.get_running_loop().create_future()

    def datagram_received(self, data: bytes, addr: Any) -> None:  # type: ignore[override]
        if len(data) > self.max_datagram_size:
            LOGGER.warning(
                "datagram from %s truncated from %d to %d bytes",
                addr,
                len(data),
                self.max_datagram_size,
            )
            data = data[: self.max_datagram_size]

        lines = data.split(b"\n")
        for result in self.parser.iter_results(data):
            try:
                self.sink(result, lines[result.index])
            except Exception:
                LOGGER.exception("result sink failed for datagram from %s", addr)

    def error_received(self, exc: Exception) -> None:
        LOGGER.error("reading from udp: %s", exc)

    def connection_lost(self, exc: Exception | None) -> None:
        if not self.closed.done():
            self.closed.set_result(None)


async def start_listener(
    config: ListenerConfig,
    *,
    parser: DatadogParser | None = None,
    sink: ResultSink | None = None,
) -> tuple[asyncio.DatagramTransport, DatagramDecoder]:
    """Bind a UDP endpoint for ``config`` and return (transport, protocol)."""
    loop = asyncio.get_running_loop()
    transport, protocol = await loop.create_datagram_endpoint(
        lambda: DatagramDecoder(
            parser=parser,
            sink=sink,
            max_datagram_size=config.max_datagram_size,
        ),
        local_addr=(config.host, config.port),
    )
    sockname = transport.get_extra_info("sockname")
    LOGGER.info("listening on %s:%s", sockname[0], sockname[1])
    return transport, protocol


async def serve(
    config: ListenerConfig,
    *,
    parser: DatadogParser | None = None,
    sink: ResultSink | None = None,
) -> None:
    """Run the listener until the task is cancelled or the transport closes."""
    transport, protocol = await start_listener(config, parser=parser, sink=sink)
    try:
        await protocol.closed
    finally:
        transport.close()
        LOGGER.info("listener on %s stopped", config.hostport)
