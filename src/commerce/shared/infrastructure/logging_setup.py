"""Structured logging (structlog on top of stdlib logging)."""

from __future__ import annotations

import logging
import re
import sys

import structlog

_SENSITIVE_PATTERN = re.compile(
    r"[A-Za-z0-9+_.-]+@[A-Za-z0-9.-]+"  # e-mail
    r"|\+\d[\d\-\s()]{6,18}\d"  # international phone
    r"|\(?\b\d{3}\)?[-\s]\d{3}[-\s]\d{4}\b"  # local phone
)
_MASK = "***MASKED***"


def mask_sensitive_data(_, __, event_dict):
    """Processor that masks e-mail addresses and phone numbers in log values."""
    for key, value in list(event_dict.items()):
        if key == "event":
            continue
        if isinstance(value, str):
            event_dict[key] = _SENSITIVE_PATTERN.sub(_MASK, value)
    return event_dict


_shared_processors = [
    structlog.contextvars.merge_contextvars,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.processors.TimeStamper(fmt="iso"),
    mask_sensitive_data,
    structlog.processors.StackInfoRenderer(),
    structlog.processors.UnicodeDecoder(),
]


def configure_logging(level: str = "INFO", json: bool = False) -> None:
    """Route structlog through stdlib logging and install one stderr handler."""
    structlog.configure(
        processors=[
            *_shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    renderer = (
        structlog.processors.JSONRenderer()
        if json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
        foreign_pre_chain=_shared_processors,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(level.upper())
