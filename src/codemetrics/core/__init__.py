"""Analysis pipeline: gate, collector, diagnostics, orchestrator."""

from .analyzer import MetricsAnalyzer, get_metrics
from .collector import collect, is_kept
from .diagnostics import (
    DIAGNOSTIC_CODE,
    DIAGNOSTIC_SOURCE,
    DiagnosticsCollector,
    DiagnosticsPublisher,
    to_diagnostics,
)
from .gate import is_above_file_size_limit, is_excluded, is_language_disabled, should_analyze

__all__ = [
    "MetricsAnalyzer",
    "get_metrics",
    "collect",
    "is_kept",
    "to_diagnostics",
    "DiagnosticsPublisher",
    "DiagnosticsCollector",
    "DIAGNOSTIC_SOURCE",
    "DIAGNOSTIC_CODE",
    "should_analyze",
    "is_excluded",
    "is_above_file_size_limit",
    "is_language_disabled",
]
