"""JSON logging with a stable schema for error values."""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from faultline.common.constants import LOG_FIELDS, LOGGER_NAME
from faultline.core.entity import format_message
from faultline.core.predicates import is_error
from faultline.core.serialization import json_default, to_map


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")


def _record_error(record: logging.LogRecord) -> Any:
    error = getattr(record, "error", None)
    if is_error(error):
        return error
    if record.exc_info and is_error(record.exc_info[1]):
        return record.exc_info[1]
    return None


class JsonLineFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "timestamp": utc_timestamp_iso(),
            "level": record.levelname,
            "logger": record.name,
            "event": getattr(record, "event", None),
            "message": record.getMessage(),
        }
        error = _record_error(record)
        if error is not None:
            error_map = to_map(error)
            payload["error_type"] = error_map["error_type"]
            payload["kind"] = error.kind
            payload["reason"] = error_map["reason"]
            payload["error"] = error_map
        for field in LOG_FIELDS:
            payload.setdefault(field, None)
        return json.dumps(payload, ensure_ascii=False, default=json_default)


def build_logger(name: str = LOGGER_NAME, level: str = "INFO", log_path: Path | None = None) -> logging.Logger:
    logger = logging.getLogger(name)
    logger.setLevel(level.upper())
    logger.handlers.clear()

    stream = logging.StreamHandler()
    stream.setFormatter(JsonLineFormatter())
    logger.addHandler(stream)

    if log_path is not None:
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding="utf-8")
        file_handler.setFormatter(JsonLineFormatter())
        logger.addHandler(file_handler)

    return logger


def log_event(logger: logging.Logger, message: str, **event_fields: Any) -> None:
    logger.info(message, extra=event_fields)


def log_error(
    logger: logging.Logger,
    error: Any,
    message: str | None = None,
    *,
    level: int = logging.ERROR,
    event: str = "ERROR",
) -> None:
    """Log an error value; the formatter attaches its serialized form."""
    if message is None:
        message = format_message(error) if is_error(error) and isinstance(error.message, str) else repr(error)
    logger.log(level, message, extra={"event": event, "error": error})
