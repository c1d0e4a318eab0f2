"""Logging setup for the Publit API client.

The client only ever logs at two levels: ``info`` for request traffic and
``debug`` for errors it has handled (or is about to re-raise). Everything is
emitted through structlog.

:func:`make_logger` builds a standalone logger from an explicit
:class:`LogConfig` so each client can be handed its own sink.
"""

import logging
import sys
from typing import Any

import pydantic
import structlog


class LogConfig(pydantic.BaseModel):
    """Configuration of a logging sink."""

    level: str = pydantic.Field("INFO", description="Minimum level to emit")
    json_format: bool = pydantic.Field(
        True,
        description="Render JSON lines instead of logfmt",
    )
    output: Any = pydantic.Field(
        None,
        description="Stream to write to (default: stderr)",
    )

    @pydantic.field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        if not isinstance(logging.getLevelName(value.upper()), int):
            msg = f"Unknown log level: {value}"
            raise ValueError(msg)
        return value.upper()


def _processors(json_format: bool) -> list[Any]:
    renderer: Any
    if json_format:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.processors.LogfmtRenderer(
            key_order=("timestamp", "level", "msg"),
        )
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.EventRenamer("msg"),
        structlog.processors.format_exc_info,
        renderer,
    ]


def make_logger(config: LogConfig | None = None) -> Any:
    """Build a structlog logger writing to the configured sink.

    The logger is independent of structlog's global configuration, so
    several clients can log to different destinations in one process.
    """
    config = config or LogConfig()
    log_level = logging.getLevelName(config.level)
    return structlog.wrap_logger(
        structlog.PrintLogger(file=config.output or sys.stderr),
        processors=_processors(config.json_format),
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
    )

