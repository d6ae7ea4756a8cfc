"""Logging for pagelinks.

Every event goes through stdlib ``logging``, so a host application that only
calls ``init_app`` or uses the resolvers directly controls pagelinks output
with its usual logger levels and handlers. ``create_app`` additionally calls
``setup_logging`` to render JSON lines on stdout.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

SERVICE_NAME: str = "pagelinks"

_HANDLER_NAME = "pagelinks-json"


def add_service_name(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    event_dict.setdefault("service", SERVICE_NAME)
    return event_dict


def _event_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_name,  # type: ignore[list-item]
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def configure_library_defaults() -> None:
    """Route structlog through stdlib loggers, honouring their levels.

    Events below the effective level of ``pagelinks.*`` are dropped before
    rendering; nothing is written unless the host has configured a handler
    (or the record reaches the stdlib last-resort handler at WARNING).
    """
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *_event_processors(),
            structlog.processors.KeyValueRenderer(key_order=["event"]),
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )


def setup_logging(log_level: str = "INFO") -> None:
    """Render pagelinks and foreign stdlib records as JSON on stdout.

    Called by ``create_app``. ``log_level`` is a level name such as ``DEBUG``;
    unknown names fall back to ``INFO``. Calling it again replaces the
    handler installed by the previous call and leaves other handlers alone.
    """
    numeric_level = getattr(logging, log_level.upper(), logging.INFO)
    processors = _event_processors()

    # Loggers are not cached so module-level loggers follow a reconfiguration.
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            *processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.JSONRenderer(),
        ],
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(formatter)

    root_logger = logging.getLogger()
    for existing in list(root_logger.handlers):
        if existing.get_name() == _HANDLER_NAME:
            root_logger.removeHandler(existing)
    root_logger.addHandler(handler)
    root_logger.setLevel(numeric_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    return structlog.get_logger(name)  # type: ignore[no-any-return]


if not structlog.is_configured():
    configure_library_defaults()
