"""Engine dispatch: language id -> metric engine.

Each LanguageCategory maps to one engine factory. All engines share the
MetricsEngine interface, so the pipeline never branches on language ids:

    SCRIPT         ScriptMetricsEngine(grammar)           original text
    HOST_TEMPLATE  HostTemplateEngine(script engine)      masked text
    STATEMENT      LuaMetricsEngine()                     original text

Engines are pure functions of their input; failures propagate to the caller.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Optional, Protocol

from ..languages import (
    DEFAULT_GRAMMAR,
    LanguageCategory,
    LanguageSpec,
    category_of,
    get_language_spec,
)
from ..logging_config import get_logger
from ..scanning.normalizer import mask_host_template
from .lua import LuaMetricsEngine
from .model import MetricsParseResult
from .script import ScriptMetricsEngine

if TYPE_CHECKING:
    from ..config import MetricsConfiguration

logger = get_logger(__name__)


class MetricsEngine(Protocol):
    """Anything that turns document text into a metric tree."""

    def compute_tree(
        self, uri: str, text: str, config: MetricsConfiguration
    ) -> MetricsParseResult: ...


class HostTemplateEngine:
    """Masks host markup, then runs the script engine over the result.

    Masking keeps every offset, so the returned tree points into the
    original document text.
    """

    def __init__(self, script_engine: Optional[ScriptMetricsEngine] = None):
        self._script_engine = script_engine or ScriptMetricsEngine(DEFAULT_GRAMMAR)

    def compute_tree(
        self, uri: str, text: str, config: MetricsConfiguration
    ) -> MetricsParseResult:
        return self._script_engine.compute_tree(uri, mask_host_template(text), config)


def _grammar(spec: Optional[LanguageSpec]) -> str:
    if spec is None or spec.grammar is None:
        return DEFAULT_GRAMMAR
    return spec.grammar


def _script_engine(spec: Optional[LanguageSpec]) -> MetricsEngine:
    return ScriptMetricsEngine(_grammar(spec))


def _host_template_engine(spec: Optional[LanguageSpec]) -> MetricsEngine:
    return HostTemplateEngine(ScriptMetricsEngine(_grammar(spec)))


def _statement_engine(spec: Optional[LanguageSpec]) -> MetricsEngine:
    return LuaMetricsEngine()


ENGINE_FACTORIES: dict[LanguageCategory, Callable[[Optional[LanguageSpec]], MetricsEngine]] = {
    LanguageCategory.SCRIPT: _script_engine,
    LanguageCategory.HOST_TEMPLATE: _host_template_engine,
    LanguageCategory.STATEMENT: _statement_engine,
}


def engine_for(language_id: str) -> MetricsEngine:
    """Return the engine for a language id; unknown ids get the script engine."""
    factory = ENGINE_FACTORIES[category_of(language_id)]
    return factory(get_language_spec(language_id))


def compute_tree(
    document_uri: str, text: str, config: MetricsConfiguration, language_id: str
) -> MetricsParseResult:
    """Compute the metric tree of a document with the engine for its language.

    Raises:
        ParsingError: If the engine cannot parse the text
    """
    engine = engine_for(language_id)
    logger.debug(f"Computing metrics for {document_uri} with {type(engine).__name__}")
    return engine.compute_tree(document_uri, text, config)
