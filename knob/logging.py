from __future__ import annotations

import json
import logging

from .config import get_config


class JsonFormatter(logging.Formatter):
    """Very small JSON formatter for structured logs."""

    def format(self, record: logging.LogRecord) -> str:
        payload = {
            "level": record.levelname.lower(),
            "logger": record.name,
            "message": record.getMessage(),
            "event_type": getattr(record, "event_type", record.getMessage()),
            "key": getattr(record, "key", None),
            "option": getattr(record, "option", None),
            "failure_kind": getattr(record, "failure_kind", None),
            "category": getattr(record, "category", None),
        }
        return json.dumps(payload, default=str)


def configure_logging(level: str | int | None = None, fmt: str | None = None) -> None:
    """Configure logging.

    Level and format default to ``KNOB_LOG_LEVEL`` and ``KNOB_LOG_FORMAT``.
    With ``json`` the output becomes structured JSON carrying the setting key,
    option and failure fields.
    """

    config = get_config()
    if level is None:
        level = config.log_level.upper()
    if fmt is None:
        fmt = config.log_format
    if isinstance(level, str):
        level = level.upper()

    if fmt.lower() == "json":
        handler = logging.StreamHandler()
        handler.setFormatter(JsonFormatter())
        logging.basicConfig(level=level, handlers=[handler], force=True)
    else:
        logging.basicConfig(
            level=level,
            format="%(asctime)s %(levelname)s %(name)s %(message)s",
            datefmt="%H:%M:%S",
            force=True,
        )
