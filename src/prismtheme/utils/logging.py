"""Logging setup shared by the CLI and embedding applications."""

from __future__ import annotations

import logging
import logging.handlers
import os
import sys
from pathlib import Path
from typing import TextIO

__all__ = ["setup_logging"]

_DEFAULT_LOG_DIR = Path.home() / ".prismtheme" / "logs"
_LOG_FILENAME = "prismtheme.log"
_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
_MAX_BYTES = 512_000
_BACKUP_COUNT = 2
_log_path: Path | None = None


def setup_logging(
    level: int = logging.INFO,
    *,
    log_dir: Path | str | None = None,
    stream: TextIO | None = None,
    force: bool = False,
) -> Path:
    """Log to a rotating file under ``log_dir`` and to ``stream`` (stderr by default).

    Only the first call configures handlers unless ``force`` is set, so a host
    application that embeds the resolver keeps its own setup.
    """

    global _log_path
    if _log_path is not None and not force:
        return _log_path

    directory = Path(log_dir or os.environ.get("PRISMTHEME_LOG_DIR") or _DEFAULT_LOG_DIR).expanduser()
    directory.mkdir(parents=True, exist_ok=True)
    log_path = directory / _LOG_FILENAME

    formatter = logging.Formatter(fmt=_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")
    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            log_path, maxBytes=_MAX_BYTES, backupCount=_BACKUP_COUNT, encoding="utf-8"
        ),
        logging.StreamHandler(stream or sys.stderr),
    ]
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
    logging.basicConfig(level=level, handlers=handlers, force=True)
    logging.getLogger("asyncio").setLevel(max(level, logging.WARNING))

    _log_path = log_path
    return log_path
