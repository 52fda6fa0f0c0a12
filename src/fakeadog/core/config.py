"""Listener configuration.

Resolution order, lowest to highest precedence: built-in defaults, explicit
arguments (CLI flags), then the ``HOST``/``PORT`` environment variables.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from .parser import MAX_DATAGRAM_SIZE

DEFAULT_HOST = "localhost"
DEFAULT_PORT = 8125
HOST_ENV = "HOST"
PORT_ENV = "PORT"


@dataclass(frozen=True, slots=True)
class ListenerConfig:
    """Where to bind and how much of each datagram to keep."""

    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    max_datagram_size: int = MAX_DATAGRAM_SIZE

    def __post_init__(self) -> None:
        if not 0 <= self.port <= 65535:
            raise ValueError(f"port must be within 0..65535, got {self.port}")
        if self.max_datagram_size < 1:
            raise ValueError("max_datagram_size must be >= 1")

    @property
    def hostport(self) -> str:
        return f"{self.host}:{self.port}"


def _env_port(env: Mapping[str, str]) -> int | None:
    raw = env.get(PORT_ENV)
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"PORT was not set to valid int: {raw!r}") from exc


def resolve_listener_config(
    *,
    host: str | None = None,
    port: int | None = None,
    max_datagram_size: int | None = None,
    env: Mapping[str, str] | None = None,
) -> ListenerConfig:
    """Build a ListenerConfig from arguments and environment overrides."""
    env = os.environ if env is None else env

    host_eff = env.get(HOST_ENV) or host or DEFAULT_HOST
    port_env = _env_port(env)
    if port_env is not None:
        port_eff = port_env
    elif port is not None:
        port_eff = port
    else:
        port_eff = DEFAULT_PORT

    return ListenerConfig(
        host=host_eff,
        port=port_eff,
        max_datagram_size=MAX_DATAGRAM_SIZE if max_datagram_size is None else max_datagram_size,
    )
