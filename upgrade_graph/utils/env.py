"""Environment-driven settings for release discovery.

A ``.env`` file in the working directory is read once; variables already set
in the process environment take precedence over it.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple, Union

from upgrade_graph.config import (DEFAULT_ARCH, DEFAULT_GRAPH_URL,
                                  DEFAULT_START_CHANNEL,
                                  REQUEST_TIMEOUT_SECONDS)
from upgrade_graph.errors import InputError

ENV_GRAPH_URL_KEY = "UPGRADE_GRAPH_URL"
ENV_ARCH_KEY = "UPGRADE_GRAPH_ARCH"
ENV_CHANNELS_KEY = "UPGRADE_GRAPH_CHANNELS"
ENV_ACCEPT_RISKS_KEY = "UPGRADE_GRAPH_ACCEPT_RISKS"
ENV_TIMEOUT_KEY = "UPGRADE_GRAPH_TIMEOUT"

_ENV_LOADED = False

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class GraphSettings:
    """Defaults the CLI falls back to when a flag is not given."""

    graph_url: str = DEFAULT_GRAPH_URL
    arch: str = DEFAULT_ARCH
    start_channels: Tuple[str, ...] = (DEFAULT_START_CHANNEL,)
    accepted_risks: Tuple[str, ...] = ()
    timeout: float = REQUEST_TIMEOUT_SECONDS


def load_dotenv(dotenv_path: Union[str, Path] = ".env") -> None:
    global _ENV_LOADED
    if _ENV_LOADED:
        return

    path = Path(dotenv_path)
    if path.is_file():
        loaded = 0
        for line in path.read_text(encoding="utf-8").splitlines():
            parsed = _parse_line(line)
            if parsed:
                key, value = parsed
                os.environ.setdefault(key, value)
                loaded += 1
        _LOGGER.debug("Read %d settings from %s", loaded, path)

    _ENV_LOADED = True


def _parse_line(line: str) -> Optional[Tuple[str, str]]:
    """Split ``KEY=value`` into a pair.

    Accepts an ``export`` prefix, strips matching quotes and drops trailing
    `` # comments`` from unquoted values.
    """
    stripped = line.strip()
    if stripped.startswith("export "):
        stripped = stripped[len("export "):].lstrip()
    if not stripped or stripped.startswith("#") or "=" not in stripped:
        return None

    key, value = (part.strip() for part in stripped.split("=", 1))
    if not key:
        return None
    if len(value) >= 2 and value[0] == value[-1] and value[0] in "\"'":
        return key, value[1:-1]
    return key, value.split(" #", 1)[0].rstrip()


def _read(key: str) -> str:
    return os.environ.get(key, "").strip()


def _read_list(key: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in _read(key).split(",") if item.strip())


def _read_timeout() -> float:
    raw = _read(ENV_TIMEOUT_KEY)
    if not raw:
        return REQUEST_TIMEOUT_SECONDS
    try:
        timeout = float(raw)
    except ValueError:
        timeout = 0.0
    if timeout <= 0:
        raise InputError(
            f"{ENV_TIMEOUT_KEY} must be a positive number of seconds, "
            f"got {raw!r}"
        )
    return timeout


def load_settings() -> GraphSettings:
    """Build :class:`GraphSettings` from the environment and ``.env``.

    Raises
    ------
    InputError
        When ``UPGRADE_GRAPH_TIMEOUT`` is not a positive number.
    """

    load_dotenv()
    return GraphSettings(
        graph_url=_read(ENV_GRAPH_URL_KEY) or DEFAULT_GRAPH_URL,
        arch=_read(ENV_ARCH_KEY) or DEFAULT_ARCH,
        start_channels=_read_list(ENV_CHANNELS_KEY) or (DEFAULT_START_CHANNEL,),
        accepted_risks=_read_list(ENV_ACCEPT_RISKS_KEY),
        timeout=_read_timeout(),
    )
