"""
Structured logging configuration.

- Development: human-readable format
- Production (or LOG_FORMAT=json): JSON format, one object per line
- Log level: LOG_LEVEL env variable, defaults to DEBUG in dev and INFO in prod
"""
import json
import logging
import sys
from datetime import datetime, timezone

from reqplan.config import Settings

_EXTRA_FIELDS = ("req_id", "policy", "n_developers", "total_days")


class JSONFormatter(logging.Formatter):
    """JSON log formatter for log aggregation."""

    def format(self, record: logging.LogRecord) -> str:
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }
        if record.exc_info and record.exc_info[0] is not None:
            log_entry["exception"] = self.formatException(record.exc_info)
        for key in _EXTRA_FIELDS:
            val = getattr(record, key, None)
            if val is not None:
                log_entry[key] = str(val)
        return json.dumps(log_entry, ensure_ascii=False)


class ReadableFormatter(logging.Formatter):
    """Human-readable formatter for development."""

    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.now().strftime("%H:%M:%S")
        base = f"{ts} {record.levelname:<8} {record.name}: {record.getMessage()}"
        if record.exc_info and record.exc_info[0] is not None:
            base += "\n" + self.formatException(record.exc_info)
        return base


def configure_logging(settings: Settings) -> None:
    """Install a single stderr handler on the root logger."""
    level_name = settings.effective_log_level
    level = getattr(logging, level_name, logging.INFO)

    use_json = settings.is_production or settings.log_format.lower() == "json"
    formatter = JSONFormatter() if use_json else ReadableFormatter()

    root = logging.getLogger()
    # Remove existing handlers to prevent duplicates on reload
    root.handlers.clear()
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler.setLevel(level)
    root.addHandler(handler)
    root.setLevel(level)

    for noisy in ("uvicorn.access", "httpx"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(__name__).info(
        "Logging configured: level=%s format=%s", level_name, "JSON" if use_json else "readable"
    )
