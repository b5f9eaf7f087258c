"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (COVMODEL__SECTION__KEY)
3. YAML config file (explicit path or ~/.config/covmodel/config.yaml)
4. Built-in defaults (this file)

Environment Variable Format:
    COVMODEL__<SECTION>__<KEY>=<VALUE>

Examples:
    COVMODEL__LOGGING__LEVEL=DEBUG
    COVMODEL__PARSER__MAX_WORKERS=4
    COVMODEL__FILTERS__CLASSES='["+com/example/*", "-*Test"]'
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
Verbosity = Literal["VERBOSE", "INFO", "WARNING", "ERROR", "OFF"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        COVMODEL__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="INFO",
        description="Root log level. DEBUG includes per-assembly parser progress.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ParserConfig(BaseModel):
    """Report parser configuration.

    Env vars:
        COVMODEL__PARSER__MAX_WORKERS: Worker threads for per-class processing
        COVMODEL__PARSER__VERBOSITY: Verbosity of the parser's message logger
    """

    max_workers: int | None = Field(
        default=None,
        description="Worker threads used to process the classes of one assembly. "
        "None uses the executor default.",
    )
    verbosity: Verbosity = Field(
        default="INFO",
        description="Minimum verbosity forwarded by the parser logger. "
        "VERBOSE reports every assembly as it is processed.",
    )

    @field_validator("max_workers")
    @classmethod
    def validate_max_workers(cls, v: int | None) -> int | None:
        if v is not None and v < 1:
            raise ValueError(f"max_workers must be >= 1, got {v}")
        return v


class FiltersConfig(BaseModel):
    """Inclusion/exclusion patterns.

    Each entry is a glob pattern prefixed with '+' (include) or '-' (exclude).
    An empty list includes everything.

    Env vars:
        COVMODEL__FILTERS__ASSEMBLIES: JSON list of assembly (package) patterns
        COVMODEL__FILTERS__CLASSES: JSON list of class name patterns
        COVMODEL__FILTERS__FILES: JSON list of source file patterns
    """

    assemblies: list[str] = Field(default_factory=list)
    classes: list[str] = Field(default_factory=list)
    files: list[str] = Field(default_factory=list)


class CovModelConfig(BaseModel):
    """Root configuration for covmodel.

    All settings can be configured via:
    1. Environment variables: COVMODEL__SECTION__KEY
    2. A YAML config file
    3. Direct kwargs to load_config()
    """

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    parser: ParserConfig = Field(default_factory=ParserConfig)
    filters: FiltersConfig = Field(default_factory=FiltersConfig)
