import json
import logging
from datetime import UTC, datetime
from typing import Any

from app.core.config import settings

_LOGGING_CONFIGURED = False

# uvicorn's access log prints raw paths, which may carry owner-link tokens.
_QUIETED_LOGGERS = ("uvicorn.access", "httpx", "httpcore")


class JsonLogFormatter(logging.Formatter):
    _extra_fields = (
        "event_name",
        "product_id",
        "product_request_id",
        "deletion_request_id",
        "category_id",
        "body_product_id",
        "reason_code",
        "outcome",
        "app_env",
        "status",
        "method",
        "path",
        "latency_ms",
        "configured_level",
    )

    def __init__(self, *, service: str | None = None, env: str | None = None) -> None:
        super().__init__()
        self._static: dict[str, str] = {}
        if service:
            self._static["service"] = service
        if env:
            self._static["env"] = env

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=UTC).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            **self._static,
        }
        for field in self._extra_fields:
            value = getattr(record, field, None)
            if value is not None:
                payload[field] = value

        if record.exc_info:
            payload["exc_info"] = self.formatException(record.exc_info)

        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"), default=str)


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level

    logging.getLogger("spotted.logging").warning(
        "invalid_log_level_fallback",
        extra={"event_name": "invalid_log_level_fallback", "configured_level": name},
    )
    return logging.INFO


def configure_logging() -> None:
    global _LOGGING_CONFIGURED
    if _LOGGING_CONFIGURED:
        return

    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter(service=settings.app_name, env=settings.app_env))

    root_logger = logging.getLogger()
    root_logger.handlers = [handler]
    root_logger.setLevel(_resolve_level(settings.log_level))
    for name in _QUIETED_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    _LOGGING_CONFIGURED = True
