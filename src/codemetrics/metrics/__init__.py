"""Metric engines and the metric tree model."""

from .engines import HostTemplateEngine, MetricsEngine, compute_tree, engine_for
from .lua import LuaMetrics, LuaMetricsEngine
from .model import MetricsModel, MetricsParseResult
from .script import ScriptMetricsEngine

__all__ = [
    "MetricsModel",
    "MetricsParseResult",
    "MetricsEngine",
    "ScriptMetricsEngine",
    "HostTemplateEngine",
    "LuaMetrics",
    "LuaMetricsEngine",
    "compute_tree",
    "engine_for",
]
