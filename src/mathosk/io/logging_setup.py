"""Logging bootstrap for mathosk.

Every module logs through ``logging.getLogger(__name__)``; configure() is the
one place handlers are attached, all on the ``mathosk`` logger.

// [LAW:single-enforcer] Handler wiring happens here and nowhere else.
"""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from datetime import datetime, timezone
from logging.handlers import RotatingFileHandler
from pathlib import Path

ROOT_LOGGER = "mathosk"

LEVEL_ENV = "MATHOSK_LOG_LEVEL"
FILE_ENV = "MATHOSK_LOG_FILE"
DIR_ENV = "MATHOSK_LOG_DIR"

MAX_BYTES = 5 * 1024 * 1024
BACKUPS = 3

_STREAM_FORMAT = logging.Formatter("[%(name)s] %(levelname)s %(message)s")
_FILE_FORMAT = logging.Formatter(
    "%(asctime)s %(levelname)s %(name)s %(message)s", datefmt="%Y-%m-%dT%H:%M:%S"
)


@dataclass(frozen=True)
class LoggingRuntime:
    """Where logs go and at what level, as resolved by configure()."""

    level_name: str
    file_path: str


_RUNTIME: LoggingRuntime | None = None


def _level_from_env() -> str:
    name = os.environ.get(LEVEL_ENV, "").strip().upper()
    return name if isinstance(logging.getLevelName(name), int) else "INFO"


def _log_file_from_env() -> Path:
    explicit = os.environ.get(FILE_ENV)
    if explicit:
        return Path(explicit)
    log_dir = Path(os.environ.get(DIR_ENV) or Path.home() / ".local" / "share" / "mathosk" / "logs")
    stamp = datetime.now(timezone.utc).strftime("%Y%m%d-%H%M%S")
    return log_dir / f"mathosk-{stamp}-{os.getpid()}.log"


def configure(*, stream: bool = True) -> LoggingRuntime:
    """Attach a rotating file handler (and optionally stderr) to the mathosk logger.

    Pass stream=False while a full-screen TUI owns the terminal. Only the
    first call configures; later calls return the same runtime.
    """
    global _RUNTIME
    if _RUNTIME is not None:
        return _RUNTIME

    level_name = _level_from_env()
    log_file = _log_file_from_env()
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handlers: list[logging.Handler] = [
        RotatingFileHandler(log_file, maxBytes=MAX_BYTES, backupCount=BACKUPS, encoding="utf-8")
    ]
    handlers[0].setFormatter(_FILE_FORMAT)
    if stream:
        handlers.append(logging.StreamHandler())
        handlers[-1].setFormatter(_STREAM_FORMAT)

    logger = logging.getLogger(ROOT_LOGGER)
    logger.handlers.clear()
    logger.setLevel(level_name)
    logger.propagate = False
    for handler in handlers:
        logger.addHandler(handler)
    logging.captureWarnings(True)

    _RUNTIME = LoggingRuntime(level_name=level_name, file_path=str(log_file))
    return _RUNTIME


def get_runtime() -> LoggingRuntime | None:
    return _RUNTIME


def reset() -> None:
    """Detach and close handlers so configure() can run again."""
    global _RUNTIME
    logger = logging.getLogger(ROOT_LOGGER)
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True
    logging.captureWarnings(False)
    _RUNTIME = None
