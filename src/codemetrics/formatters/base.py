"""Base formatter interface for codemetrics output rendering."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import List, Optional

from lsprotocol.types import Diagnostic

from ..config import MetricsConfiguration
from ..document import TextDocument
from ..metrics.model import MetricsModel


@dataclass
class FileReport:
    """Result of analyzing one document from the command line.

    ``error`` is set instead of ``models`` when the document failed.
    """

    document: TextDocument
    models: List[MetricsModel] = field(default_factory=list)
    diagnostics: List[Diagnostic] = field(default_factory=list)
    error: Optional[str] = None

    @property
    def uri(self) -> str:
        return self.document.uri

    @property
    def max_complexity(self) -> int:
        return max((m.get_collected_complexity() for m in self.models), default=0)


class BaseFormatter(ABC):
    """Abstract base class for output formatters."""

    @abstractmethod
    def render(self, reports: List[FileReport], config: MetricsConfiguration) -> None:
        """Render reports to stderr/stdout as appropriate."""

    @abstractmethod
    def format(self, reports: List[FileReport], config: MetricsConfiguration) -> str:
        """Return formatted string representation of reports."""
