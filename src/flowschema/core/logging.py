# src/flowschema/core/logging.py
"""Structured logging for flowschema.

Core modules log snake_case events through structlog
(``process_parsed``, ``traversal_complete``, ``generation_failed``, ...).
configure_logging() routes those events and plain stdlib records through
one ProcessorFormatter, so dynaconf or networkx warnings come out in the
same console or JSON shape.

Records are written to stderr by default. The CLI prints the augmented
callback payload on stdout, and the platform reads it from there.
"""

import logging
import sys
from typing import Any, TextIO

import structlog
from structlog.stdlib import ProcessorFormatter

# Chatty at DEBUG and irrelevant to schema generation
_NOISY_LOGGERS: tuple[str, ...] = (
    "dynaconf",
    "networkx",
)


def _remove_internal_fields(
    logger: logging.Logger | None,
    method_name: str,
    event_dict: dict[str, Any],
) -> dict[str, Any]:
    """Drop ProcessorFormatter bookkeeping keys before rendering."""
    event_dict.pop("_record", None)
    event_dict.pop("_from_structlog", None)
    return event_dict


def _resolve_level(level: str) -> int:
    """Map a level name (any case) to its stdlib number.

    Raises:
        ValueError: If level is not a stdlib level name
    """
    levels = logging.getLevelNamesMapping()
    name = level.upper()
    if name not in levels:
        raise ValueError(f"Unknown log level {level!r}; expected one of DEBUG, INFO, WARNING, ERROR, CRITICAL")
    return levels[name]


def _shared_processors() -> list[Any]:
    """Processors applied to structlog events and foreign stdlib records alike."""
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
    ]


def _render_processors(json_output: bool) -> list[Any]:
    if json_output:
        return [
            _remove_internal_fields,
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(),
        ]
    # No ANSI colours: stderr is usually captured by the platform or a pipe
    return [
        _remove_internal_fields,
        structlog.dev.ConsoleRenderer(colors=False),
    ]


def configure_logging(
    *,
    json_output: bool = False,
    level: str = "INFO",
    stream: TextIO | None = None,
) -> None:
    """Install the flowschema handler on the root logger.

    Replaces any root handlers, so calling it again reconfigures cleanly.

    Args:
        json_output: Render one JSON object per record instead of console text.
        level: Root level name (DEBUG, INFO, WARNING, ERROR).
        stream: Destination, sys.stderr when None (resolved at call time).

    Raises:
        ValueError: If level is not a known level name
    """
    log_level = _resolve_level(level)
    shared = _shared_processors()

    structlog.configure(
        processors=[*shared, ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        # Module-level loggers must pick up a later reconfiguration
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(
        ProcessorFormatter(
            processors=_render_processors(json_output),
            foreign_pre_chain=shared,
        )
    )

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(log_level)

    # Quieter than the root level, never louder
    noisy_level = max(log_level, logging.WARNING)
    for logger_name in _NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(noisy_level)


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Bound logger for a module (pass __name__)."""
    logger: structlog.stdlib.BoundLogger = structlog.get_logger(name)
    return logger
