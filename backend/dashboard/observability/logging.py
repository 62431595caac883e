from __future__ import annotations

import logging
import os
from typing import Any, Dict

import structlog

DEFAULT_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
SERVICE_NAME = "demand-dashboard"


def configure_logging(level: str | None = None, *, env: str | None = None) -> None:
    """
    Route stdlib logging and structlog through one JSON renderer on stdout.

    Every event carries the service name, the environment and whatever the request
    middleware bound into the contextvars (request id, method, path, region).
    """
    log_level = (level or DEFAULT_LEVEL).upper()

    logging.basicConfig(
        level=log_level,
        format="%(message)s",
        handlers=[logging.StreamHandler()],
    )

    static = {"service": SERVICE_NAME}
    if env:
        static["env"] = env

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.add_log_level,
            _add_static(static),
            _rename_event_key,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
        wrapper_class=structlog.stdlib.BoundLogger,
    )


def _add_static(fields: Dict[str, str]):
    def processor(logger: Any, name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
        for key, value in fields.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def _rename_event_key(logger: Any, name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    if "event" in event_dict:
        return event_dict
    msg = event_dict.pop("msg", None)
    if msg is not None:
        event_dict["event"] = msg
    return event_dict
