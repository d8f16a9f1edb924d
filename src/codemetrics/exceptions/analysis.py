"""Analysis-related exceptions: document access, parsing, languages."""

from pathlib import Path
from typing import List

from .base import CodeMetricsError


class AnalysisError(CodeMetricsError):
    """Base class for analysis-related errors."""
    pass


class FileAccessError(AnalysisError):
    """Raised when a file cannot be accessed or read."""

    def __init__(self, filepath: Path, reason: str):
        super().__init__(
            f"Cannot access file: {filepath}",
            details={"filepath": str(filepath), "reason": reason},
        )
        self.filepath = filepath
        self.reason = reason


class ParsingError(AnalysisError):
    """Raised when a metric engine cannot produce a tree for a document."""

    def __init__(self, uri: str, language: str, reason: str):
        super().__init__(
            f"Failed to parse {language} document: {uri}",
            details={"uri": uri, "language": language, "reason": reason},
        )
        self.uri = uri
        self.language = language
        self.reason = reason


class UnsupportedLanguageError(AnalysisError):
    """Raised when a language id cannot be mapped to a grammar or file type."""

    def __init__(self, language: str, supported_languages: List[str]):
        super().__init__(
            f"Unsupported language: {language}",
            details={"language": language, "supported": ", ".join(supported_languages)},
        )
        self.language = language
        self.supported_languages = supported_languages
