"""Logging setup for the dais CLI and library.

Log records go to stderr through rich so that machine-readable output printed
on stdout (``--json-summary``) is never interleaved with log lines.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.logging import RichHandler

from dais.constants import DEFAULT_LOG_LEVEL, ENV_LOG_LEVEL

DEFAULT_LOG_FORMAT = "%(message)s"
DEFAULT_DATE_FORMAT = "%H:%M:%S"
DEFAULT_DEBUG_CLIP = 240

_active_level: int | None = None


def resolve_log_level(configured: str | None = None) -> str:
    """Pick the level: explicit value, then ``DAIS_LOG_LEVEL``, then the default."""
    for candidate in (configured, os.getenv(ENV_LOG_LEVEL)):
        if candidate and candidate.strip():
            return candidate.strip().upper()
    return DEFAULT_LOG_LEVEL


def _level_number(level: int | str | None) -> int:
    if isinstance(level, int):
        return level
    name = resolve_log_level(level)
    if name.isdigit():
        return int(name)
    value = logging.getLevelName(name)
    if not isinstance(value, int):
        raise ValueError(f"Unknown log level: {level}")
    return value


def setup_logging(level: int | str | None = None, *, force: bool = False) -> None:
    global _active_level

    target = _level_number(level)
    if _active_level == target and not force:
        return

    handler = RichHandler(
        console=Console(stderr=True),
        level=target,
        markup=True,
        rich_tracebacks=False,
        show_time=True,
        show_level=True,
        show_path=False,
        log_time_format=DEFAULT_DATE_FORMAT,
    )
    logging.basicConfig(
        level=max(target, logging.WARNING),
        format=DEFAULT_LOG_FORMAT,
        handlers=[handler],
        force=True,
    )
    logging.getLogger("dais").setLevel(target)
    # Slow-callback and selector chatter from the event loop.
    logging.getLogger("asyncio").setLevel(logging.WARNING)

    _active_level = target


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def _debug_value(value: Any) -> str:
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, Path):
        return json.dumps(str(value))
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=True)
    if is_dataclass(value) and not isinstance(value, type):
        inner = ",".join(f"{item.name}={_debug_value(getattr(value, item.name))}" for item in fields(value))
        return f"{type(value).__name__}({inner})"
    if isinstance(value, (list, tuple, set, frozenset)):
        return f"{type(value).__name__}({len(value)})"
    if isinstance(value, dict):
        return f"dict({len(value)})"
    return str(value)


def debug_event(logger: logging.Logger, event: str, **details: Any) -> None:
    """Log ``event`` with ``key=value`` details on one clipped line at DEBUG."""
    if not logger.isEnabledFor(logging.DEBUG):
        return
    line = " ".join(
        [f"event={event}"]
        + [f"{key}={_debug_value(value)}" for key, value in details.items() if value is not None]
    )
    line = " ".join(line.split())
    if len(line) > DEFAULT_DEBUG_CLIP:
        line = line[:DEFAULT_DEBUG_CLIP] + "..."
    logger.debug(line)
