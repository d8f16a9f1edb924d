"""
codemetrics - complexity hints for script, markup-embedded and Lua code

Scores every function-like construct of a document by the decisions it
contains and surfaces the ones above a configured threshold as editor
diagnostics.
"""

__version__ = "0.1.0"

from .config import MetricsConfiguration, load_config
from .core import DiagnosticsCollector, MetricsAnalyzer, get_metrics
from .document import TextDocument
from .metrics import MetricsModel, MetricsParseResult

__all__ = [
    "get_metrics",  # Main entry point
    "MetricsAnalyzer",
    "MetricsConfiguration",
    "load_config",
    "TextDocument",
    "MetricsModel",
    "MetricsParseResult",
    "DiagnosticsCollector",
]
