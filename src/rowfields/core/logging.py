"""structlog setup for rowfields.

Library modules only call ``structlog.get_logger()``; applications decide
where events go by calling ``configure_logging`` (directly or through
``rowfields.config.apply_config``). Each configured output gets its own
stdlib handler, level and renderer.

A correlation id, when set, is bound through structlog's context variables
so every event logged in the same context carries it.
"""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import TYPE_CHECKING
from uuid import uuid4

import structlog

if TYPE_CHECKING:
    from rowfields.config.models import LoggingConfig, LogOutputConfig

CORRELATION_KEY = "correlation_id"


def get_correlation_id() -> str | None:
    return structlog.contextvars.get_contextvars().get(CORRELATION_KEY)


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Bind ``correlation_id`` (or a fresh 12-char id) to the current context."""
    cid = correlation_id or uuid4().hex[:12]
    structlog.contextvars.bind_contextvars(**{CORRELATION_KEY: cid})
    return cid


def clear_correlation_id() -> None:
    structlog.contextvars.unbind_contextvars(CORRELATION_KEY)


def _level_number(name: str | None, default: int) -> int:
    if name is None:
        return default
    return logging.getLevelNamesMapping().get(name.upper(), default)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
    ]


def _renderer(output: LogOutputConfig) -> structlog.types.Processor:
    if output.format == "json":
        return structlog.processors.JSONRenderer()
    stream = sys.stdout if output.destination == "stdout" else sys.stderr
    on_terminal = output.destination in ("stderr", "stdout") and stream.isatty()
    return structlog.dev.ConsoleRenderer(colors=on_terminal)


def _open_handler(destination: str) -> logging.Handler:
    if destination == "stdout":
        return logging.StreamHandler(sys.stdout)
    if destination == "stderr":
        return logging.StreamHandler(sys.stderr)
    path = Path(destination)
    path.parent.mkdir(parents=True, exist_ok=True)
    return logging.FileHandler(path, mode="a", encoding="utf-8")


def _replace_handlers(root: logging.Logger, handlers: list[logging.Handler]) -> None:
    """Swap the root handlers, closing the old ones so file handles are released."""
    for old in list(root.handlers):
        root.removeHandler(old)
        old.close()
    for handler in handlers:
        root.addHandler(handler)


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog events through stdlib handlers, one per configured output.

    Without ``config`` a single stderr output is used, rendered as JSON when
    ``json_format`` is set. Safe to call repeatedly; the previous handlers are
    closed.
    """
    from rowfields.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_number(config.level, logging.INFO)
    pre_chain = _shared_processors()

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    handlers: list[logging.Handler] = []
    for output in config.outputs:
        handler = _open_handler(output.destination)
        handler.setLevel(_level_number(output.level, root_level))
        handler.setFormatter(
            structlog.stdlib.ProcessorFormatter(
                processor=_renderer(output), foreign_pre_chain=pre_chain
            )
        )
        handlers.append(handler)

    root = logging.getLogger()
    root.setLevel(root_level)
    _replace_handlers(root, handlers)

    # SQL echo belongs to the caller's engine setup
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    return logger.bind(logger=name) if name else logger  # type: ignore[no-any-return]
