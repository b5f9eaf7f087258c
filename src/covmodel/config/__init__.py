"""Config module exports."""

from covmodel.config.loader import load_config
from covmodel.config.models import (
    CovModelConfig,
    FiltersConfig,
    LoggingConfig,
    ParserConfig,
)

__all__ = [
    "load_config",
    "CovModelConfig",
    "FiltersConfig",
    "LoggingConfig",
    "ParserConfig",
]
