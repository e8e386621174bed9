"""Logging setup for anchorsnap.

Records are emitted as one JSON object per line by default, carrying the
run context injected by ``ContextFilter`` and any ``extra=`` payload. A
plain text format is available for interactive use. Configuration is
declarative through ``logging.config.dictConfig``.
"""

from __future__ import annotations

import json
import logging
import logging.config
from datetime import datetime, timezone
from typing import Any, Dict, Mapping, Optional, Set

from anchorsnap.common.exceptions import AnchorSnapError

TEXT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s [run=%(run_id)s] %(message)s"


def _standard_record_keys() -> Set[str]:
    """Attributes every ``LogRecord`` has; anything else came from ``extra=``."""
    blank = logging.makeLogRecord({})
    return set(blank.__dict__) | {"asctime", "message"}


_STANDARD_KEYS = _standard_record_keys()


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


class CustomJsonFormatter(logging.Formatter):
    """One JSON object per record: base fields, extras, trace ids and errors.

    When the record carries an ``AnchorSnapError``, its code and details are
    lifted to top-level keys so failures can be filtered without parsing the
    traceback.
    """

    def format(self, record: logging.LogRecord) -> str:
        entry: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        for key, value in record.__dict__.items():
            if key in _STANDARD_KEYS or key in entry:
                continue
            if key == "otelTraceID":
                entry["trace_id"] = value
            elif key == "otelSpanID":
                entry["span_id"] = value
            elif not key.startswith("otel"):
                entry[key] = value

        if record.exc_info:
            error = record.exc_info[1]
            if isinstance(error, AnchorSnapError):
                entry.setdefault("error_code", error.error_code.value)
                entry.setdefault("error_name", error.error_code.name)
                entry.setdefault("error_details", error.details)
            entry["exception"] = self.formatException(record.exc_info)

        return json.dumps(entry, default=str)


def setup_logging(
    level: str = "INFO",
    json_format: bool = True,
    logger_levels: Optional[Mapping[str, str]] = None,
) -> None:
    """Configure root logging.

    Args:
        level: Base log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        json_format: Emit JSON lines; plain text when False
        logger_levels: Per-logger overrides, e.g. ``{"anchorsnap.decoding": "DEBUG"}``
    """
    level = level.upper()
    formatter = "snap_json" if json_format else "snap_text"

    config_dict: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "snap_json": {"()": "anchorsnap.logging.logger.CustomJsonFormatter"},
            "snap_text": {"format": TEXT_FORMAT},
        },
        "filters": {
            "snap_context": {"()": "anchorsnap.logging.filters.ContextFilter"},
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": formatter,
                "filters": ["snap_context"],
                "stream": "ext://sys.stderr",
            }
        },
        "loggers": {
            name: {"level": override.upper()}
            for name, override in (logger_levels or {}).items()
        },
        "root": {
            "level": level,
            "handlers": ["console"],
        },
    }

    logging.config.dictConfig(config_dict)
