"""Tree-sitter parser wrapper.

Provides a unified interface for tree-sitter parsing across the script and
Lua grammars the metric engines use.

Usage:
    parser = TreeSitterParser()
    tree = parser.parse(code_bytes, "typescript")
    root = tree.root_node
"""

from __future__ import annotations

from functools import lru_cache
from typing import Any, Callable

import tree_sitter
import tree_sitter_javascript
import tree_sitter_lua
import tree_sitter_typescript

from ..exceptions import UnsupportedLanguageError

# Grammar name -> function returning the raw language pointer
_GRAMMARS: dict[str, Callable[[], Any]] = {
    "javascript": tree_sitter_javascript.language,
    "typescript": tree_sitter_typescript.language_typescript,
    # TSX is bundled with tree-sitter-typescript
    "tsx": tree_sitter_typescript.language_tsx,
    "lua": tree_sitter_lua.language,
}


def get_supported_grammars() -> list[str]:
    """Get list of grammar names the parser can load."""
    return list(_GRAMMARS.keys())


@lru_cache(maxsize=None)
def _load_language(grammar: str) -> tree_sitter.Language:
    # tree-sitter >= 0.23 returns PyCapsule; wrap in Language()
    return tree_sitter.Language(_GRAMMARS[grammar]())


class TreeSitterParser:
    """Wrapper around tree-sitter for multi-grammar parsing.

    Language objects are shared; a fresh tree_sitter.Parser is created per
    parse so concurrent analyses never share parser state.
    """

    def is_grammar_supported(self, grammar: str) -> bool:
        """Check if a grammar is available."""
        return grammar in _GRAMMARS

    def language(self, grammar: str) -> tree_sitter.Language:
        """Get the tree-sitter Language for a grammar.

        Raises:
            UnsupportedLanguageError: If the grammar is unknown
        """
        if not self.is_grammar_supported(grammar):
            raise UnsupportedLanguageError(grammar, get_supported_grammars())
        return _load_language(grammar)

    def parse(self, code: bytes, grammar: str) -> tree_sitter.Tree:
        """Parse code and return syntax tree.

        Tree-sitter recovers from syntax errors, so malformed code still
        yields a tree containing ERROR nodes.

        Args:
            code: Source code as bytes
            grammar: Grammar name (e.g., "typescript")

        Returns:
            Parsed tree

        Raises:
            UnsupportedLanguageError: If the grammar is unknown
        """
        parser = tree_sitter.Parser(self.language(grammar))
        return parser.parse(code)
