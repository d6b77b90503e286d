"""
Logging setup for site-feed.

Everything logs under the ``site_feed`` namespace. The console gets rich
output; the optional log file gets one JSON object per record, with the
``extra`` fields of each record (fragment name, counts, failing page) kept
as top-level keys.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from rich.logging import RichHandler

from .config import LoggingConfig

LOGGER_NAME = "site_feed"

# attributes every LogRecord carries; anything else came in through ``extra``
_RECORD_FIELDS = frozenset(
    logging.LogRecord("", logging.INFO, "", 0, "", (), None).__dict__
) | {"message", "asctime"}


def setup_logging(cfg: LoggingConfig, log_dir: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    level = _level_from_string(cfg.level)
    logger.setLevel(level)
    logger.handlers = []
    logger.propagate = False

    if cfg.console:
        console_handler = RichHandler(rich_tracebacks=True, show_time=False, show_path=False)
        console_handler.setLevel(level)
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        logger.addHandler(console_handler)

    if cfg.file and log_dir is not None:
        log_dir.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_dir / cfg.filename, encoding="utf-8")
        file_handler.setLevel(level)
        file_handler.setFormatter(_build_file_formatter(cfg.format))
        logger.addHandler(file_handler)

    return logger


def log_render(logger: logging.Logger | None, fragment: str, **counts: Any) -> None:
    """Record that an HTML fragment was produced, with its entry counts."""
    if logger is None:
        return
    logger.info("Rendered %s", fragment, extra={"fragment": fragment, **counts})


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        payload.update(
            {key: value for key, value in record.__dict__.items() if key not in _RECORD_FIELDS}
        )
        if record.exc_info and record.exc_info[1] is not None:
            exc = record.exc_info[1]
            payload["error"] = {"type": type(exc).__name__, "message": str(exc)}
            identifier = getattr(exc, "identifier", None)
            if identifier is not None:
                payload["page"] = identifier
        return json.dumps(payload, ensure_ascii=True, default=str)


def _build_file_formatter(fmt: str) -> logging.Formatter:
    if fmt == "jsonl":
        return JsonlFormatter()
    return logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s")


def _level_from_string(level: str) -> int:
    return getattr(logging, level.upper(), logging.INFO)
