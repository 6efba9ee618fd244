"""Structured logging via structlog.

Configures structlog once per process. All subsequent calls to
`structlog.get_logger()` (or `logging.getLogger()` via the stdlib bridge)
use this configuration.

Renderer selection:
  json_logs=False — `ConsoleRenderer` for humans reading a CI job log.
  json_logs=True  — `JSONRenderer` for log collectors.

Everything is written to stderr. stdout is reserved for the download URL
so pipelines can capture it with a plain `$(publisher ...)`.

ContextVar injection:
  `invocation_id` is bound by the pipeline for the duration of one publish
  run and injected into every log line emitted while it is set, whether it
  comes from structlog or from a stdlib `logging` module logger.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Iterator

import structlog

_invocation_id_var: ContextVar[str] = ContextVar("invocation_id", default="")

# Azure SDK request/response logging is very chatty at INFO.
_NOISY_LOGGERS = ("azure.core.pipeline.policies.http_logging_policy", "azure")


def get_invocation_id() -> str:
    """Return the current invocation ID, or empty string if not set."""
    return _invocation_id_var.get()


@contextmanager
def bind_invocation_id(invocation_id: str) -> Iterator[str]:
    """Set the invocation ID for the enclosed block and restore it afterwards."""
    token = _invocation_id_var.set(invocation_id)
    try:
        yield invocation_id
    finally:
        _invocation_id_var.reset(token)


def _inject_context_vars(
    logger: logging.Logger,
    method: str,
    event_dict: dict,
) -> dict:
    """Structlog processor: inject invocation_id from its ContextVar."""
    invocation_id = get_invocation_id()
    if invocation_id:
        event_dict["invocation_id"] = invocation_id
    return event_dict


def configure_structlog(json_logs: bool = False, level: str = "INFO") -> None:
    """Configure structlog for the process lifetime.

    Calling multiple times is safe; the last call wins.
    """
    log_level = logging.getLevelName(level.upper())
    if not isinstance(log_level, int):
        log_level = logging.INFO

    shared_processors: list = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        _inject_context_vars,
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_logs:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer()

    structlog.configure(
        processors=shared_processors + [renderer],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.WriteLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=False,
    )

    # Bridge stdlib logging so module loggers and the Azure SDK write to
    # the same stream, level and renderer, with the same context injected.
    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[structlog.stdlib.add_logger_name] + shared_processors,
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            renderer,
        ],
    ))
    root = logging.getLogger()
    for existing in list(root.handlers):
        root.removeHandler(existing)
        existing.close()
    root.addHandler(handler)
    root.setLevel(log_level)
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(log_level, logging.WARNING))
