"""Language registry: the single source of truth for supported language ids.

Every recognized editor language id maps to one LanguageSpec: the category
that selects its metric engine, the configuration switch that enables it,
the tree-sitter grammar used for script parsing and the file extensions the
CLI uses to guess it.

Adding a new language:
  1. Add a LanguageSpec entry to LANGUAGES below.
  2. If it needs a new kind of engine, add a LanguageCategory member and
     register the engine in ``codemetrics.metrics.engines``.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Optional


class LanguageCategory(Enum):
    """How a document of a given language is turned into a metric tree."""

    SCRIPT = "script"  # parsed directly by the script engine
    HOST_TEMPLATE = "host_template"  # script embedded in markup, masked first
    STATEMENT = "statement"  # own grammar and cost table (Lua)


@dataclass(frozen=True)
class LanguageSpec:
    """Everything the pipeline needs to know about a language id."""

    language_id: str
    category: LanguageCategory
    enable_flag: str
    grammar: Optional[str] = None
    extensions: tuple[str, ...] = ()


# Grammar used for language ids outside LANGUAGES and for host templates
DEFAULT_GRAMMAR = "typescript"


LANGUAGES: dict[str, LanguageSpec] = {
    "typescript": LanguageSpec(
        language_id="typescript",
        category=LanguageCategory.SCRIPT,
        enable_flag="enabled_for_ts",
        grammar="typescript",
        extensions=(".ts", ".mts", ".cts"),
    ),
    "typescriptreact": LanguageSpec(
        language_id="typescriptreact",
        category=LanguageCategory.SCRIPT,
        enable_flag="enabled_for_tsx",
        grammar="tsx",
        extensions=(".tsx",),
    ),
    "javascript": LanguageSpec(
        language_id="javascript",
        category=LanguageCategory.SCRIPT,
        enable_flag="enabled_for_js",
        grammar="javascript",
        extensions=(".js", ".mjs", ".cjs"),
    ),
    "javascriptreact": LanguageSpec(
        language_id="javascriptreact",
        category=LanguageCategory.SCRIPT,
        enable_flag="enabled_for_jsx",
        grammar="javascript",
        extensions=(".jsx",),
    ),
    "lua": LanguageSpec(
        language_id="lua",
        category=LanguageCategory.STATEMENT,
        enable_flag="enabled_for_lua",
        grammar="lua",
        extensions=(".lua",),
    ),
    "vue": LanguageSpec(
        language_id="vue",
        category=LanguageCategory.HOST_TEMPLATE,
        enable_flag="enabled_for_vue",
        grammar=DEFAULT_GRAMMAR,
        extensions=(".vue",),
    ),
    "html": LanguageSpec(
        language_id="html",
        category=LanguageCategory.HOST_TEMPLATE,
        enable_flag="enabled_for_html",
        grammar=DEFAULT_GRAMMAR,
        extensions=(".html", ".htm"),
    ),
}


# Extension to language id mapping (built from LANGUAGES)
_EXTENSION_TO_LANGUAGE: dict[str, str] = {}
for _spec in LANGUAGES.values():
    for _ext in _spec.extensions:
        _EXTENSION_TO_LANGUAGE[_ext] = _spec.language_id


def get_language_spec(language_id: str) -> Optional[LanguageSpec]:
    """Look up a language id; None for ids outside the closed set."""
    return LANGUAGES.get(language_id)


def category_of(language_id: str) -> LanguageCategory:
    """Category of a language id. Unknown ids are treated as plain script."""
    spec = LANGUAGES.get(language_id)
    return spec.category if spec is not None else LanguageCategory.SCRIPT


def supported_language_ids() -> list[str]:
    return list(LANGUAGES.keys())


def detect_language_id(filepath) -> Optional[str]:
    """Detect the editor language id from a file extension.

    Args:
        filepath: Path object or string

    Returns:
        Language id (e.g., "typescript", "lua") or None if unknown
    """
    path = Path(filepath) if not hasattr(filepath, "suffix") else filepath
    return _EXTENSION_TO_LANGUAGE.get(path.suffix.lower())
