"""Shared CLI helpers."""

from pathlib import Path
from typing import Iterator, List, Optional

from rich.console import Console

from ..config import MetricsConfiguration, load_config
from ..file_ops import should_skip_file
from ..languages import detect_language_id

console = Console()


def resolve_config(
    config: Optional[Path] = None,
    threshold: Optional[int] = None,
    diagnostics: Optional[bool] = None,
) -> MetricsConfiguration:
    """Build configuration from CLI options."""
    overrides = {}
    if threshold is not None:
        overrides["minimum_visible_complexity"] = threshold
    if diagnostics is not None:
        overrides["diagnostics_enabled"] = diagnostics
    return load_config(config_file=config, **overrides)


def iter_source_files(
    paths: List[Path], config: MetricsConfiguration, language: Optional[str] = None
) -> Iterator[Path]:
    """Yield the files to analyze, in a stable order.

    Explicit file arguments are always yielded and left to the gate.
    Directories are walked for files of a known (or forced) language,
    pruning anything the exclusion patterns match.
    """
    seen = set()
    for path in paths:
        if path.is_file():
            candidates = [path]
        else:
            candidates = [
                p
                for p in sorted(path.rglob("*"))
                if p.is_file()
                and (language is not None or detect_language_id(p) is not None)
                and not should_skip_file(p, config.exclude)
            ]
        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                yield candidate
