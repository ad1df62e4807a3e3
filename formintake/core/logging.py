"""Structured JSON logging for the intake service.

Every line is one JSON object. Request-scoped fields (``request_id`` and the
authenticated ``principal``) come from the context variables the request-id
middleware and auth dependency set; event fields travel on the record as
``extra_data`` and are written with :func:`log_event`. Submission payloads
are never passed in.
"""

from __future__ import annotations

import json
import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from ..middlewares import principal_ctx_var, request_id_ctx_var

SERVICE_NAME = "formintake"


class JsonLogFormatter(logging.Formatter):
    def __init__(self, service: str = SERVICE_NAME) -> None:
        super().__init__()
        self.service = service

    def format(self, record: logging.LogRecord) -> str:
        stamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
        payload: dict[str, Any] = {
            "timestamp": stamp.isoformat(timespec="milliseconds").replace("+00:00", "Z"),
            "service": self.service,
            "level": record.levelname,
            "logger": record.name,
            "event": record.getMessage(),
        }
        for key, var in (("request_id", request_id_ctx_var), ("principal", principal_ctx_var)):
            value = var.get()
            if value:
                payload[key] = value
        extra = getattr(record, "extra_data", None)
        if isinstance(extra, Mapping):
            # Event fields never overwrite the envelope keys above.
            payload.update({k: v for k, v in extra.items() if k not in payload})
        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)
        return json.dumps(payload, separators=(",", ":"), default=str)


def log_event(logger: logging.Logger, event: str, level: int = logging.INFO, **fields: Any) -> None:
    """Emit ``event`` with ``fields`` attached as structured ``extra_data``."""

    logger.log(level, event, extra={"extra_data": fields})


def configure_logging(level: str | int = logging.INFO, service: str = SERVICE_NAME) -> None:
    """Route the root logger through :class:`JsonLogFormatter`.

    ``uvicorn.access`` is silenced because ``request.completed`` already
    records every request with its id and principal.
    """

    handler = logging.StreamHandler()
    handler.setFormatter(JsonLogFormatter(service=service))
    logging.root.handlers = [handler]
    logging.root.setLevel(level)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
