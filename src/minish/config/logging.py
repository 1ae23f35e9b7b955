"""Diagnostic logging for the shell process.

Diagnostics always go to stderr, so redirected or piped command output never
picks them up. Records raised while a line runs carry the ``op`` the executor
binds (``command``, ``redirect`` or ``pipeline``):

- Console mode (default) prefixes the message with ``[op]``.
- JSON mode (``--log-json``) keeps ``op`` as its own key, next to a timestamp.

Builtins and services log through stdlib ``logging``; those records are run
through the same structlog chain as native structlog events.
"""

from __future__ import annotations

import logging
import sys

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

ROOT_LOGGER = "minish"
HANDLER_NAME = "minish-stderr"
# Third-party loggers held at WARNING even under --verbose.
QUIET_LOGGERS = ("pluggy",)


def prefix_op(_logger: WrappedLogger, _method: str, event_dict: EventDict) -> EventDict:
    """Move a bound ``op`` into the message as ``[op] message``."""
    op = event_dict.pop("op", None)
    if op is not None:
        event_dict["event"] = f"[{op}] {event_dict.get('event', '')}"
    return event_dict


def _pre_chain(log_json: bool) -> list[Processor]:
    chain: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
    ]
    if log_json:
        chain.append(structlog.processors.TimeStamper(fmt="iso"))
    return chain


def _render_chain(log_json: bool) -> list[Processor]:
    if log_json:
        return [structlog.processors.JSONRenderer()]
    return [prefix_op, structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]


def _install_handler(formatter: logging.Formatter) -> None:
    """Attach one stderr handler to the root logger, replacing a previous one."""
    root = logging.getLogger()
    for handler in [h for h in root.handlers if h.get_name() == HANDLER_NAME]:
        root.removeHandler(handler)
    handler = logging.StreamHandler(sys.stderr)
    handler.set_name(HANDLER_NAME)
    handler.setFormatter(formatter)
    root.addHandler(handler)


def configure_logging(*, verbose: bool = False, log_json: bool = False) -> None:
    """Route ``minish`` diagnostics to stderr.

    Args:
        verbose: Show DEBUG records from ``minish`` loggers (dispatch traces,
            redirect writes, plugin loading). Otherwise only warnings appear.
        log_json: One JSON object per record instead of console lines.
    """
    pre_chain = _pre_chain(log_json)
    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )
    _install_handler(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=pre_chain,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                *_render_chain(log_json),
            ],
        )
    )

    logging.getLogger().setLevel(logging.WARNING)
    logging.getLogger(ROOT_LOGGER).setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)
