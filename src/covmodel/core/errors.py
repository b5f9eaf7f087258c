"""covmodel error types with typed error codes.

Error code ranges:
- 2xxx: Config
- 3xxx: Report
- 9xxx: Internal
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002
    CONFIG_FILE_NOT_FOUND = 2004

    # Report (3xxx)
    REPORT_INVALID_ARGUMENT = 3001
    REPORT_MALFORMED_NUMBER = 3002
    REPORT_INVALID_XML = 3003
    REPORT_NOT_FOUND = 3004

    # Internal (9xxx)
    INTERNAL_ERROR = 9001


@dataclass(frozen=True)
class CovModelError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'REPORT_MALFORMED_NUMBER')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        """Serialize for structured log events."""
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class ConfigError(CovModelError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )

    @classmethod
    def file_not_found(cls, path: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_FILE_NOT_FOUND,
            message=f"Config file not found: {path}",
            details={"path": path},
        )


class ReportError(CovModelError):
    """Errors raised while reading or decoding a coverage report.

    Any ReportError aborts the whole parse; there is no partial result.
    """

    @classmethod
    def invalid_argument(cls, name: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_INVALID_ARGUMENT,
            message=f"Argument '{name}' must not be None",
            details={"argument": name},
        )

    @classmethod
    def malformed_number(cls, element: str, attribute: str, value: str | None) -> "ReportError":
        shown = "<missing>" if value is None else repr(value)
        return cls(
            code=ErrorCode.REPORT_MALFORMED_NUMBER,
            message=f"Attribute '{attribute}' of <{element}> is not a number: {shown}",
            details={"element": element, "attribute": attribute, "value": value},
        )

    @classmethod
    def invalid_xml(cls, path: str, reason: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_INVALID_XML,
            message=f"Invalid JaCoCo XML at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def not_found(cls, path: str) -> "ReportError":
        return cls(
            code=ErrorCode.REPORT_NOT_FOUND,
            message=f"JaCoCo report not found: {path}",
            details={"path": path},
        )


class InternalError(CovModelError):
    """Internal/unexpected errors."""

    @classmethod
    def unexpected(cls, reason: str, **details: Any) -> "InternalError":
        return cls(
            code=ErrorCode.INTERNAL_ERROR,
            message=f"Internal error: {reason}",
            details=details,
        )
