"""Shared logging helpers for setsync.

Domain modules attach structured data to records through
``extra={"sync_context": {...}}``. The console handler ignores it; the optional
debug log file renders it as pretty-printed JSON below each message.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Final, override

CONTEXT_ATTRIBUTE: Final[str] = "sync_context"
DEBUG_LOG_SEPARATOR: Final[str] = "-" * 80

_LEVELS: Final[dict[str, int]] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


class DebugContextFormatter(logging.Formatter):
    """Formatter for the debug trace file: message, context, separator."""

    def __init__(self) -> None:
        super().__init__(
            fmt="[%(asctime)s] %(levelname)s [%(name)s] %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )

    @override
    def format(self, record: logging.LogRecord) -> str:
        text = super().format(record)
        context = getattr(record, CONTEXT_ATTRIBUTE, None)
        if context:
            text += "\nContext: " + json.dumps(context, indent=4, default=str, sort_keys=True)
        return f"{text}\n{DEBUG_LOG_SEPARATOR}"


def log_context(**values: object) -> dict[str, dict[str, object]]:
    """Build the ``extra`` mapping for a structured log record."""

    return {CONTEXT_ATTRIBUTE: values}


def level_from_environment(default: int = logging.INFO) -> int:
    name = os.getenv("SETSYNC_LOG_LEVEL")
    if not name:
        return default
    return _LEVELS.get(name.strip().upper(), default)


def configure_logging(
    *,
    level: int = logging.INFO,
    force: bool = False,
    debug_log_path: Path | None = None,
) -> None:
    """Initialise the root logger once with sensible defaults.

    Parameters mirror ``logging.basicConfig`` with a simplified contract: we default
    to INFO level and a terse format suitable for CLI output. Pass ``force=True`` to
    reconfigure during tests or specialised entry points. ``debug_log_path`` adds a
    DEBUG-level file handler that also records each message's structured context.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if debug_log_path is None:
        return

    root = logging.getLogger()
    for handler in root.handlers:
        if (
            isinstance(handler, logging.FileHandler)
            and Path(handler.baseFilename).resolve() == debug_log_path.resolve()
        ):
            return
    file_handler = logging.FileHandler(debug_log_path, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(DebugContextFormatter())
    for handler in root.handlers:
        handler.setLevel(level)
    root.addHandler(file_handler)
    root.setLevel(logging.DEBUG)
