"""Structured logging for the bolt generator.

Every bolt build runs inside a ``LogContext`` whose id is the build id. The
``add_build_id`` processor stamps it on each event, so the stage and kernel
events of one bolt share a ``build_id`` field. Events logged outside a build
carry no such field.
"""

import structlog
import uuid
import logging
from contextvars import ContextVar
from typing import Optional, Any, Dict
from .config import get_config


# Build id of the bolt currently being built, if any
build_id_var: ContextVar[Optional[str]] = ContextVar("build_id", default=None)


def new_build_id() -> str:
    """Generate a short build id."""
    return uuid.uuid4().hex[:8]


def current_build_id() -> Optional[str]:
    """Build id of the enclosing ``LogContext``, or None outside a build."""
    return build_id_var.get()


def add_build_id(
    logger: Any,
    method_name: str,
    event_dict: Dict[str, Any]
) -> Dict[str, Any]:
    """Structlog processor adding the current build id."""
    build_id = build_id_var.get()
    if build_id is not None:
        event_dict.setdefault("build_id", build_id)
    return event_dict


def setup_logging(level: Optional[str] = None, fmt: Optional[str] = None) -> None:
    """Configure structured logging.

    Args:
        level: Log level name; defaults to the configured ``log_level``
        fmt: ``json`` or ``console``; defaults to the configured ``log_format``
    """
    config = get_config()
    level = level or config.log_level
    fmt = fmt or config.log_format

    processors = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        add_build_id,
        structlog.processors.format_exc_info,
    ]

    if fmt == "json":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer())

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    # stdout carries the CLI's JSON result, so log records go to stderr
    logging.basicConfig(
        format="%(message)s",
        level=getattr(logging, level.upper(), logging.INFO),
    )


def get_logger(name: str = __name__) -> structlog.stdlib.BoundLogger:
    """Get a logger instance."""
    return structlog.get_logger(name)


class LogContext:
    """Scope one bolt build: sets the build id seen by ``add_build_id``.

    Args:
        correlation_id: Build id to use; a new one is generated when omitted
    """

    def __init__(self, correlation_id: Optional[str] = None):
        self.correlation_id = correlation_id or new_build_id()
        self._token = None

    def __enter__(self) -> "LogContext":
        self._token = build_id_var.set(self.correlation_id)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        build_id_var.reset(self._token)
