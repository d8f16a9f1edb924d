"""JSON formatter for codemetrics."""

import json
from typing import Any, Dict, List

from ..config import MetricsConfiguration
from .base import BaseFormatter, FileReport


def _model_to_dict(report: FileReport, model, config: MetricsConfiguration) -> Dict[str, Any]:
    start = report.document.position_at(model.start)
    end = report.document.position_at(model.end)
    return {
        "name": model.text,
        "complexity": model.get_collected_complexity(),
        "message": model.to_string(config),
        "start": {"line": start.line, "character": start.character},
        "end": {"line": end.line, "character": end.character},
        "explanation": model.get_explanation().splitlines(),
    }


def _diagnostic_to_dict(diagnostic) -> Dict[str, Any]:
    return {
        "message": diagnostic.message,
        "severity": int(diagnostic.severity),
        "source": diagnostic.source,
        "code": diagnostic.code,
        "range": {
            "start": {
                "line": diagnostic.range.start.line,
                "character": diagnostic.range.start.character,
            },
            "end": {
                "line": diagnostic.range.end.line,
                "character": diagnostic.range.end.character,
            },
        },
    }


class JsonFormatter(BaseFormatter):
    """Render reports as JSON."""

    def render(self, reports: List[FileReport], config: MetricsConfiguration) -> None:
        print(self.format(reports, config))

    def format(self, reports: List[FileReport], config: MetricsConfiguration) -> str:
        data = []
        for report in reports:
            entry: Dict[str, Any] = {
                "uri": report.uri,
                "language": report.document.language_id,
            }
            if report.error is not None:
                entry["error"] = report.error
            else:
                entry["metrics"] = [_model_to_dict(report, m, config) for m in report.models]
                entry["diagnostics"] = [_diagnostic_to_dict(d) for d in report.diagnostics]
            data.append(entry)
        return json.dumps(data, indent=2)
