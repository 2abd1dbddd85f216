import json
import logging
import os
from datetime import datetime, timezone

# Attributes every LogRecord carries; anything else came in through `extra=`
_RESERVED_ATTRS = set(vars(logging.makeLogRecord({}))) | {"message", "asctime", "service"}


def _extra_fields(record: logging.LogRecord) -> dict:
    return {k: v for k, v in vars(record).items() if k not in _RESERVED_ATTRS}


class JsonFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        base = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }
        service = getattr(record, "service", None)
        if service:
            base["service"] = service
        for key, value in _extra_fields(record).items():
            base.setdefault(key, value)
        if record.exc_info and record.exc_info[0] is not None:
            base["exception_type"] = record.exc_info[0].__name__
            base["exception_message"] = str(record.exc_info[1])
            base["traceback"] = self.formatException(record.exc_info)
        return json.dumps(base, ensure_ascii=False, default=str)


class HumanFormatter(logging.Formatter):
    def format(self, record: logging.LogRecord) -> str:
        ts = datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat()
        service = getattr(record, "service", "-")
        extras = " ".join(f"{k}={v}" for k, v in sorted(_extra_fields(record).items()))
        base = f"{ts} | {record.levelname:<8} | {service} | {record.name} | {record.getMessage()}"
        if extras:
            base += f" | {extras}"
        if record.exc_info:
            base += "\n" + self.formatException(record.exc_info)
        return base


class ServiceFilter(logging.Filter):
    def __init__(self, service_name: str) -> None:
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        if not hasattr(record, "service"):
            record.service = self.service_name
        return True


def _safe_level(level_value: str) -> int:
    level = logging.getLevelName((level_value or "INFO").upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging(
    service_name: str,
    json_enabled: bool | None = None,
    level_value: str | None = None,
) -> None:
    if json_enabled is None:
        json_enabled = os.getenv("LOG_JSON", "true").lower() in {"1", "true", "yes", "on"}
    if level_value is None:
        level_value = os.getenv("LOG_LEVEL", "INFO")
    level = _safe_level(level_value)

    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.addFilter(ServiceFilter(os.getenv("LOG_SERVICE_NAME", service_name)))
    handler.setFormatter(JsonFormatter() if json_enabled else HumanFormatter())

    root.addHandler(handler)
    root.setLevel(level)

    # Reduce verbosity of third-party noisy loggers
    for noisy in ("httpx", "sqlalchemy.engine", "alembic"):
        logging.getLogger(noisy).setLevel(logging.WARNING)
