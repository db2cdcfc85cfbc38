from __future__ import annotations

import json
import logging
import sys
from datetime import UTC, datetime
from typing import Any, TextIO


class JsonlFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "ts": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        context = getattr(record, "context", None)
        if isinstance(context, dict):
            payload.update(context)
        # non-JSON context values (sets, params objects) fall back to str()
        return json.dumps(payload, ensure_ascii=False, default=str)


def get_logger(
    name: str, *, level: int = logging.INFO, stream: TextIO | None = None
) -> logging.Logger:
    logger = logging.getLogger(name)
    for handler in logger.handlers:
        if isinstance(handler.formatter, JsonlFormatter):
            return logger

    logger.setLevel(level)
    handler = logging.StreamHandler(stream or sys.stdout)
    handler.setFormatter(JsonlFormatter())
    logger.handlers = [handler]
    logger.propagate = False
    return logger


def set_level(level: int) -> None:
    """
    Applies `level` to every JSONL logger of this package.
    """
    for name, logger in logging.Logger.manager.loggerDict.items():
        if not name.startswith("matchmaking_simulation") or not isinstance(logger, logging.Logger):
            continue
        logger.setLevel(level)


def log(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    logger.log(level, event, extra={"context": fields})
