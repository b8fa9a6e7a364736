from __future__ import annotations

import logging
from typing import Any

import structlog

# Loggers that would otherwise echo full upstream URLs, query-string keys included.
_NOISY_LOGGERS = ("httpx", "httpcore")


def _add_service(service_name: str):
    def _inner(_: Any, __: str, event_dict: dict[str, Any]) -> dict[str, Any]:
        event_dict.setdefault("service", service_name)
        return event_dict

    return _inner


def configure_logging(
    service_name: str = "citydash", *, level: str = "INFO", json_logs: bool = False
) -> None:
    """Configure one structlog stack for the whole process.

    Called by the application factory, never at import time. Stdlib logging
    (uvicorn) goes to stderr as plain messages; structlog events get an ISO UTC
    timestamp, level and service name and are rendered as JSON or as colored
    console lines.
    """
    numeric_level = logging.getLevelName(level.upper())
    if not isinstance(numeric_level, int):
        numeric_level = logging.INFO

    logging.basicConfig(level=numeric_level, format="%(message)s", force=True)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        _add_service(service_name),
    ]
    if json_logs:
        processors += [
            structlog.processors.dict_tracebacks,
            structlog.processors.JSONRenderer(),
        ]
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str | None = None) -> Any:
    # Stays a lazy proxy so the configuration applied later by create_app wins.
    if name:
        return structlog.get_logger(logger_name=name)
    return structlog.get_logger()
