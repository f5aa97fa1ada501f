"""Process-wide logging setup for the CLI.

Levels follow ``LOG_LEVEL`` or the ``-v`` count: 0 is silent, 1 is INFO,
2 is DEBUG for this package and 3 also lets ``urllib3`` connection chatter
through.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

_CONFIGURED = False

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
TRANSPORT_LOGGERS = ("urllib3",)


def configure_logging(verbosity: Optional[int] = None) -> None:
    """Install handlers once per process.

    ``verbosity`` wins over ``LOG_LEVEL``. Records go to ``LOG_FILE`` when it
    is set; otherwise only an explicit ``verbosity`` logs, to stderr.
    """
    global _CONFIGURED
    if _CONFIGURED:
        return
    _CONFIGURED = True

    if verbosity is not None:
        level: Optional[int] = verbosity
    else:
        level = _read_level(os.getenv("LOG_LEVEL", "0"))
    if level is None or level <= 0:
        return

    handlers = _build_handlers(stderr_fallback=verbosity is not None)
    if not handlers:
        return

    logging.basicConfig(
        level=_map_level(level),
        handlers=handlers,
        format=LOG_FORMAT,
    )
    if level < 3:
        for name in TRANSPORT_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _build_handlers(*, stderr_fallback: bool) -> List[logging.Handler]:
    log_path = os.getenv("LOG_FILE", "").strip()
    if log_path:
        log_file = Path(log_path)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        return [logging.FileHandler(log_file, mode="a", encoding="utf-8")]
    if stderr_fallback:
        return [logging.StreamHandler(sys.stderr)]
    return []


def _read_level(raw: str) -> Optional[int]:
    try:
        return int(raw)
    except ValueError:
        return None


def _map_level(level: int) -> int:
    if level >= 2:
        return logging.DEBUG
    return logging.INFO
