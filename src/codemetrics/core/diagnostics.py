"""Projection of kept metric nodes onto editor diagnostics, and publishing."""

from typing import Optional, Protocol

from lsprotocol.types import (
    Diagnostic,
    DiagnosticSeverity,
    PublishDiagnosticsParams,
    Range,
)

from ..config import MetricsConfiguration
from ..document import TextDocument
from ..metrics.model import MetricsModel

DIAGNOSTIC_SOURCE = "codemetrics"
DIAGNOSTIC_CODE = "42"


def to_diagnostic(
    model: MetricsModel, document: TextDocument, config: MetricsConfiguration
) -> Diagnostic:
    return Diagnostic(
        range=Range(start=document.position_at(model.start), end=document.position_at(model.end)),
        message=model.to_string(config),
        severity=DiagnosticSeverity.Hint,
        source=DIAGNOSTIC_SOURCE,
        code=DIAGNOSTIC_CODE,
    )


def to_diagnostics(
    models: list[MetricsModel], document: TextDocument, config: MetricsConfiguration
) -> list[Diagnostic]:
    """One hint per kept node, or nothing when diagnostics are switched off."""
    if not config.diagnostics_enabled:
        return []
    return [to_diagnostic(model, document, config) for model in models]


class DiagnosticsPublisher(Protocol):
    """The host connection diagnostics are sent to."""

    def send_diagnostics(self, params: PublishDiagnosticsParams) -> None: ...


class DiagnosticsCollector:
    """In-memory publisher keeping the latest diagnostic set per URI.

    Publishing an empty set clears the URI, the same way an editor drops
    previously shown diagnostics.
    """

    def __init__(self) -> None:
        self.published: dict[str, list[Diagnostic]] = {}
        self.history: list[PublishDiagnosticsParams] = []

    def send_diagnostics(self, params: PublishDiagnosticsParams) -> None:
        self.history.append(params)
        self.published[params.uri] = list(params.diagnostics)

    def get(self, uri: str) -> Optional[list[Diagnostic]]:
        return self.published.get(uri)
