"""Exception hierarchy for codemetrics."""

from .analysis import (
    AnalysisError,
    FileAccessError,
    ParsingError,
    UnsupportedLanguageError,
)
from .base import CodeMetricsError
from .config import ConfigurationError, InvalidConfigError

__all__ = [
    "CodeMetricsError",
    "AnalysisError",
    "FileAccessError",
    "ParsingError",
    "UnsupportedLanguageError",
    "ConfigurationError",
    "InvalidConfigError",
]
