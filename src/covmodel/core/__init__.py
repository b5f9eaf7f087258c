"""Core module exports."""

from covmodel.core.errors import (
    ConfigError,
    CovModelError,
    ErrorCode,
    InternalError,
    ReportError,
)
from covmodel.core.logging import (
    LogSink,
    SinkLogger,
    SinkLoggerFactory,
    VerbosityLevel,
    configure_logging,
    get_logger,
    structlog_sink,
)

__all__ = [
    # Errors
    "ConfigError",
    "CovModelError",
    "ErrorCode",
    "InternalError",
    "ReportError",
    # Logging
    "LogSink",
    "SinkLogger",
    "SinkLoggerFactory",
    "VerbosityLevel",
    "configure_logging",
    "get_logger",
    "structlog_sink",
]
