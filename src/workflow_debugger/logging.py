"""structlog setup for the workflow debugger.

stdout is the MCP stdio channel, so every log line goes to stderr unless a
stream is given. Module loggers are lazy proxies: they pick up whatever
configuration is active when an event is emitted, not when the module was
imported.
"""

from __future__ import annotations

import logging
import sys
from contextvars import ContextVar
from typing import TYPE_CHECKING, Any, TextIO

import structlog

if TYPE_CHECKING:
    from structlog.typing import EventDict, Processor, WrappedLogger

# Tool invocation in progress; survives awaits within the same task
tool_ctx: ContextVar[str] = ContextVar("tool", default="")


def add_tool_name(logger: WrappedLogger, method_name: str, event_dict: EventDict) -> EventDict:
    tool = tool_ctx.get()
    if tool:
        event_dict["tool"] = tool
    return event_dict


def _processors(json_format: bool) -> list[Processor]:
    renderer: Processor = (
        structlog.processors.JSONRenderer()
        if json_format
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", key="timestamp"),
        add_tool_name,
        structlog.processors.format_exc_info,
        renderer,
    ]


def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    stream: TextIO | None = None,
) -> None:
    """
    Route structured log events to a text stream.

    Args:
        log_level: Minimum level name; unknown names fall back to INFO.
        json_format: One JSON object per line instead of console key=value output.
        stream: Destination, sys.stderr when omitted.
    """
    level = logging.getLevelName(log_level.upper())
    structlog.configure(
        processors=_processors(json_format),
        wrapper_class=structlog.make_filtering_bound_logger(
            level if isinstance(level, int) else logging.INFO
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=stream or sys.stderr),
        cache_logger_on_first_use=False,
    )


def get_logger(name: str) -> Any:
    """Lazy logger tagging each event with ``logger_name``."""
    return structlog.get_logger(name, logger_name=name)
