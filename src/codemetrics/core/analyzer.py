"""Main entry point: composes gate, engines, collector and diagnostics."""

from typing import Optional

from lsprotocol.types import Diagnostic, PublishDiagnosticsParams

from ..config import MetricsConfiguration, default_config
from ..document import TextDocument
from ..logging_config import get_logger
from ..metrics.engines import compute_tree
from ..metrics.model import MetricsModel
from .collector import collect
from .diagnostics import DiagnosticsPublisher, to_diagnostics
from .gate import should_analyze

logger = get_logger(__name__)


class MetricsAnalyzer:
    """Per-document orchestrator.

    Holds no state between calls: every ``get_metrics`` call works on one
    document snapshot and the read-only configuration.
    """

    def __init__(
        self,
        config: Optional[MetricsConfiguration] = None,
        publisher: Optional[DiagnosticsPublisher] = None,
    ):
        self.config = config or default_config
        self.publisher = publisher

    def get_metrics(self, document: TextDocument) -> list[MetricsModel]:
        """Analyze a document, publish its diagnostics and return the kept nodes.

        A diagnostic set is always published for the document URI, empty
        when the document was skipped. If an engine fails, an empty set is
        published to clear stale diagnostics and the error is re-raised.

        Raises:
            ParsingError: If the metric engine cannot parse the document
        """
        config = self.config
        text = document.get_text()
        result: list[MetricsModel] = []
        diagnostics: list[Diagnostic] = []

        if should_analyze(document.uri, document.language_id, text, config):
            try:
                metrics = compute_tree(document.uri, text, config, document.language_id)
            except Exception:
                logger.warning(f"Metrics failed for {document.uri}, clearing diagnostics")
                self._publish(document, [])
                raise
            result = collect(metrics.metrics, config)
            diagnostics = to_diagnostics(result, document, config)
            logger.debug(f"{document.uri}: {len(result)} node(s), {len(diagnostics)} diagnostic(s)")

        self._publish(document, diagnostics)
        return result

    def _publish(self, document: TextDocument, diagnostics: list[Diagnostic]) -> None:
        if self.publisher is None:
            return
        self.publisher.send_diagnostics(
            PublishDiagnosticsParams(uri=document.uri, diagnostics=diagnostics)
        )


def get_metrics(
    document: TextDocument,
    config: Optional[MetricsConfiguration] = None,
    publisher: Optional[DiagnosticsPublisher] = None,
) -> list[MetricsModel]:
    """Convenience wrapper around MetricsAnalyzer.get_metrics."""
    return MetricsAnalyzer(config, publisher).get_metrics(document)
