from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Iterable, Sequence
from pathlib import Path

from fakeadog.core.config import resolve_listener_config
from fakeadog.core.listener import serve
from fakeadog.core.models import ParseResult
from fakeadog.core.parser import DatadogParser
from fakeadog.core.replay import get_file_results
from fakeadog.logging_config import configure_logging

LOGGER = logging.getLogger(__name__)


def _positive_int(s: str) -> int:
    try:
        value = int(s)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"expected an integer, got {s!r}") from e
    if value < 1:
        raise argparse.ArgumentTypeError("must be >= 1")
    return value


def _format_result(r: ParseResult) -> str:
    if r.metric is not None:
        return f"{r.index} OK {r.metric}"
    err = r.error
    return f"{r.index} ERR {err.name}: {err.message}"


def _print_results(results: Iterable[ParseResult]) -> int:
    total = 0
    failed = 0
    for r in results:
        total += 1
        if not r.ok:
            failed += 1
        print(_format_result(r))
    print(f"\nDecoded {total} lines ({failed} failed).")
    return 1 if failed else 0


def _run_listen(args: argparse.Namespace) -> int:
    try:
        config = resolve_listener_config(
            host=args.host,
            port=args.port,
            max_datagram_size=args.max_datagram_size,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2

    parser = DatadogParser(require_trailing_pipe=args.strict)
    try:
        asyncio.run(serve(config, parser=parser))
    except KeyboardInterrupt:
        LOGGER.info("interrupted, shutting down")
    except OSError as e:
        print(f"could not listen on {config.hostport}: {e}", file=sys.stderr)
        return 2
    return 0


def _run_decode(args: argparse.Namespace) -> int:
    parser = DatadogParser(require_trailing_pipe=args.strict)

    if args.file:
        try:
            results = asyncio.run(get_file_results(Path(args.file), parser=parser))
        except FileNotFoundError as e:
            print(str(e), file=sys.stderr)
            return 2
        return _print_results(results)

    if args.payloads:
        results = []
        for payload in args.payloads:
            results.extend(parser.parse_multi(payload.encode("utf-8")))
        return _print_results(results)

    data = sys.stdin.buffer.read()
    # A trailing newline from a pipe or heredoc is not a line of its own.
    if data.endswith(b"\n"):
        data = data[:-1]
    return _print_results(parser.parse_multi(data))


def build_arg_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="fakeadog",
        description="Fake DogStatsD agent: decode StatsD/DogStatsD datagrams.",
    )
    sub = p.add_subparsers(dest="command")

    listen = sub.add_parser("listen", help="Listen on UDP and log every decoded line (default)")
    listen.add_argument("--host", default=None, help="Address to bind to (default: localhost; HOST env wins)")
    listen.add_argument("--port", type=int, default=None, help="Port to bind to (default: 8125; PORT env wins)")
    listen.add_argument(
        "--max-datagram-size",
        type=_positive_int,
        default=None,
        help="Bytes kept from each datagram (default: 65467)",
    )
    listen.add_argument("--strict", action="store_true", help="Require the pipe before the tag section")

    decode = sub.add_parser("decode", help="Decode payloads given as arguments, a capture file or stdin")
    decode.add_argument("payloads", nargs="*", help="Datagram payloads (one per argument)")
    decode.add_argument("--file", default=None, help="Capture file with one wire line per line (.gz ok)")
    decode.add_argument("--strict", action="store_true", help="Require the pipe before the tag section")
    return p


def main(argv: Sequence[str] | None = None) -> None:
    p = build_arg_parser()
    args = p.parse_args(argv)
    configure_logging()

    if args.command == "decode":
        raise SystemExit(_run_decode(args))

    if args.command is None:
        args = p.parse_args(["listen"])
    raise SystemExit(_run_listen(args))


if __name__ == "__main__":
    main()
