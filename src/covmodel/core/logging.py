"""Structured logging with multi-output support and a verbosity-gated message logger.

Supports:
- structlog on top of stdlib logging (console or JSON rendering)
- Separate per-output log levels
- A small message logger (SinkLogger) that forwards `{0}`-style templates to a
  pluggable sink, gated by a VerbosityLevel
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Callable
from enum import IntEnum
from pathlib import Path
from typing import TYPE_CHECKING, Any

import structlog

if TYPE_CHECKING:
    from covmodel.config.models import LoggingConfig, LogOutputConfig


_LEVEL_MAP = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARN": logging.WARNING,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def configure_logging(
    *,
    config: LoggingConfig | None = None,
    json_format: bool = False,
    level: str = "INFO",
) -> None:
    """Route structlog through stdlib logging, one handler per configured output.

    Without a config, a single stderr output is built from json_format and level.
    """
    from covmodel.config.models import LoggingConfig, LogOutputConfig

    if config is None:
        config = LoggingConfig(
            level=level,
            outputs=[LogOutputConfig(format="json" if json_format else "console")],
        )

    root_level = _level_of(config.level)
    pre_chain: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", key="timestamp"),
    ]

    structlog.configure(
        processors=[*pre_chain, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        wrapper_class=structlog.make_filtering_bound_logger(root_level),
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.setLevel(root_level)
    for output in config.outputs:
        handler = _output_handler(output, pre_chain)
        handler.setLevel(_level_of(output.level or config.level, root_level))
        root.addHandler(handler)


def _level_of(name: str, fallback: int = logging.INFO) -> int:
    return _LEVEL_MAP.get(name.upper(), fallback)


def _output_handler(
    output: LogOutputConfig,
    pre_chain: list[structlog.types.Processor],
) -> logging.Handler:
    """Handler writing to stderr, stdout or an (appended) file, with its renderer."""
    handler: logging.Handler
    streams = {"stderr": sys.stderr, "stdout": sys.stdout}
    stream = streams.get(output.destination)
    if stream is not None:
        handler = logging.StreamHandler(stream)
    else:
        path = Path(output.destination)
        path.parent.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(path, mode="a", encoding="utf-8")

    renderer: structlog.types.Processor
    if output.format == "json":
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(
            colors=stream is not None and stream.isatty(),
            pad_event_to=0,
            pad_level=False,
        )
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(processor=renderer, foreign_pre_chain=pre_chain)
    )
    return handler


def get_logger(name: str | None = None) -> structlog.stdlib.BoundLogger:
    logger = structlog.get_logger()
    if name:
        logger = logger.bind(logger=name)
    return logger  # type: ignore[no-any-return]


# =============================================================================
# Verbosity-gated message logger
# =============================================================================


class VerbosityLevel(IntEnum):
    """Message verbosity, from most to least chatty."""

    VERBOSE = 0
    INFO = 1
    WARNING = 2
    ERROR = 3
    OFF = 4


LogSink = Callable[[VerbosityLevel, str, tuple[Any, ...]], None]
"""Consumes (level, message or template, template args)."""


class SinkLogger:
    """Logger that sends messages to a LogSink.

    Each method forwards only when the configured verbosity is below the
    next-higher level: debug needs verbosity < INFO, info < WARNING,
    warn < ERROR and error < OFF.
    """

    def __init__(
        self,
        sink: LogSink | None,
        verbosity: VerbosityLevel = VerbosityLevel.VERBOSE,
    ) -> None:
        if sink is None:
            raise ValueError("sink must not be None")
        self._sink = sink
        self.verbosity = verbosity

    def debug(self, message: str, *args: Any) -> None:
        if self.verbosity < VerbosityLevel.INFO:
            self._sink(VerbosityLevel.VERBOSE, message, args)

    def info(self, message: str, *args: Any) -> None:
        if self.verbosity < VerbosityLevel.WARNING:
            self._sink(VerbosityLevel.INFO, message, args)

    def warn(self, message: str, *args: Any) -> None:
        if self.verbosity < VerbosityLevel.ERROR:
            self._sink(VerbosityLevel.WARNING, message, args)

    def error(self, message: str, *args: Any) -> None:
        if self.verbosity < VerbosityLevel.OFF:
            self._sink(VerbosityLevel.ERROR, message, args)


class SinkLoggerFactory:
    """Hands out one shared SinkLogger regardless of the requested name."""

    def __init__(self, sink: LogSink | None) -> None:
        self._logger = SinkLogger(sink)

    @property
    def verbosity(self) -> VerbosityLevel:
        return self._logger.verbosity

    @verbosity.setter
    def verbosity(self, value: VerbosityLevel) -> None:
        self._logger.verbosity = value

    def get_logger(self, name: str) -> SinkLogger:  # noqa: ARG002
        return self._logger


_STRUCTLOG_METHODS = {
    VerbosityLevel.VERBOSE: "debug",
    VerbosityLevel.INFO: "info",
    VerbosityLevel.WARNING: "warning",
    VerbosityLevel.ERROR: "error",
}


def structlog_sink(name: str) -> LogSink:
    """Build a LogSink that renders templates and emits them through structlog."""

    def sink(level: VerbosityLevel, message: str, args: tuple[Any, ...]) -> None:
        method = _STRUCTLOG_METHODS.get(level)
        if method is None:
            return
        text = message.format(*args) if args else message
        getattr(get_logger(name), method)(text)

    return sink
