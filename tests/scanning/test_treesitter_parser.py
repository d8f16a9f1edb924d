"""Tests for tree-sitter parser wrapper."""

import pytest

from codemetrics.exceptions import UnsupportedLanguageError
from codemetrics.scanning.treesitter_parser import TreeSitterParser, get_supported_grammars


class TestSupportedGrammars:
    """Test grammar discovery."""

    def test_script_grammars_available(self):
        """The script grammars and the Lua grammar are bundled."""
        assert set(get_supported_grammars()) == {"javascript", "typescript", "tsx", "lua"}

    def test_is_grammar_supported(self):
        """Unknown grammars are reported as unsupported."""
        parser = TreeSitterParser()
        assert parser.is_grammar_supported("tsx")
        assert not parser.is_grammar_supported("python")


class TestTreeSitterParser:
    """Tests that parse real code."""

    def test_parse_returns_tree(self):
        """parse() returns a tree rooted at a program node."""
        tree = TreeSitterParser().parse(b"function foo() { return 1; }", "javascript")
        assert tree.root_node.type == "program"
        assert tree.root_node.named_children[0].type == "function_declaration"

    def test_parse_typescript_types(self):
        """TypeScript syntax parses cleanly with the typescript grammar."""
        code = b"interface A { x: number }\nconst f = (a: A): number => a.x;\n"
        tree = TreeSitterParser().parse(code, "typescript")
        assert not tree.root_node.has_error

    def test_parse_lua(self):
        """Lua parses to a chunk holding a function declaration."""
        tree = TreeSitterParser().parse(b"local function f(a) return a or 1 end\n", "lua")
        assert tree.root_node.type == "chunk"
        assert not tree.root_node.has_error
        assert tree.root_node.named_children[0].type == "function_declaration"

    def test_language_is_cached(self):
        """The same Language object is shared between parsers."""
        assert TreeSitterParser().language("typescript") is TreeSitterParser().language("typescript")

    def test_malformed_code_has_error_nodes(self):
        """Syntax errors are recovered, not raised."""
        tree = TreeSitterParser().parse(b"function (", "javascript")
        assert tree.root_node.has_error

    def test_unknown_grammar_raises(self):
        """Unknown grammars raise UnsupportedLanguageError."""
        with pytest.raises(UnsupportedLanguageError) as exc_info:
            TreeSitterParser().parse(b"x", "python")
        assert "typescript" in exc_info.value.supported_languages
