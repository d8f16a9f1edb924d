"""Tests for the tree-sitter script metrics engine."""

import pytest

from codemetrics.config import MetricsConfiguration, ScriptMetricsConfiguration
from codemetrics.exceptions import UnsupportedLanguageError
from codemetrics.metrics.script import ScriptMetricsEngine


def _tree(code, grammar="typescript", config=None):
    engine = ScriptMetricsEngine(grammar)
    return engine.compute_tree("file:///t", code, config or MetricsConfiguration()).metrics


def _visible(model):
    """Visible nodes in pre-order."""
    result = []
    stack = [model]
    while stack:
        node = stack.pop()
        if node.visible:
            result.append(node)
        stack.extend(reversed(node.children))
    return result


class TestDeclarations:
    """Test which constructs become visible units."""

    def test_root_spans_document(self):
        """The root is an invisible node covering the whole text."""
        code = "let a = 1;\n"
        root = _tree(code)
        assert (root.start, root.end, root.visible) == (0, len(code), False)

    def test_function_declaration_named(self):
        """Function declarations carry their name."""
        [fn] = _visible(_tree("function load() { return 1; }"))
        assert fn.text == "function load"
        assert fn.get_collected_complexity() == 1

    def test_arrow_function_takes_variable_name(self):
        """Anonymous arrows are named after their variable."""
        [fn] = _visible(_tree("const handler = (e) => e;"))
        assert fn.text == "arrow function handler"

    def test_methods_nested_in_class(self):
        """Methods are children of their class."""
        code = "class Store {\n  get(k) { return k; }\n  set(k, v) { if (v) {} }\n}\n"
        root = _tree(code)
        [cls] = root.children
        assert cls.text == "class Store"
        assert [m.text for m in cls.children] == ["method get", "method set"]
        # class_declaration costs 0 by default
        assert cls.complexity == 0
        assert cls.get_collected_complexity() == 3

    def test_nested_function_is_own_unit(self):
        """A nested function is a child of its enclosing function."""
        code = "function outer() {\n  function inner(a) { return a || 1; }\n}\n"
        [outer, inner] = _visible(_tree(code))
        assert inner in outer.children
        assert inner.get_collected_complexity() == 2
        assert outer.get_collected_complexity() == 3


class TestStatements:
    """Test the cost of decisions inside a unit."""

    @pytest.mark.parametrize(
        "body, expected",
        [
            ("if (a) {}", 1),
            ("if (a) {} else {}", 1),
            ("if (a) {} else if (b) {}", 2),
            ("switch (a) { case 1: break; case 2: break; default: }", 2),
            ("for (;;) {}", 1),
            ("for (const k in a) {}", 1),
            ("for (const k of a) {}", 1),
            ("while (a) {}", 1),
            ("do {} while (a);", 1),
            ("try {} catch (e) { throw e; }", 1),
            ("return a ? b : c;", 1),
            ("return a && b || c;", 2),
            ("return a ?? b;", 1),
            ("a ||= b;", 1),
            ("return a + b;", 0),
        ],
    )
    def test_statement_costs(self, body, expected):
        """Each decision adds its configured cost to the function."""
        [fn] = _visible(_tree(f"function f(a, b, c) {{ {body} }}"))
        assert fn.get_collected_complexity() == 1 + expected

    def test_zero_cost_statements_are_not_reported(self):
        """Constructs that cost nothing do not appear in the tree."""
        [fn] = _visible(_tree("function f(a) { if (a) {} else {} }"))
        assert [c.text for c in fn.children] == ["if"]

    def test_custom_costs(self):
        """Costs come from the script configuration."""
        config = MetricsConfiguration(
            script=ScriptMetricsConfiguration(else_clause=1, function_declaration=0)
        )
        [fn] = _visible(_tree("function f(a) { if (a) {} else {} }", config=config))
        assert fn.get_collected_complexity() == 2

    def test_statements_outside_functions_attach_to_root(self):
        """Top-level decisions belong to the file root."""
        root = _tree("if (a) { b(); }\n")
        assert [c.text for c in root.children] == ["if"]
        assert root.children[0].visible is False


class TestOffsets:
    """Test character offsets."""

    def test_offsets_are_characters_not_bytes(self):
        """Non-ASCII text before a function does not shift its offsets."""
        code = "const s = 'héllo wörld 🎉';\nfunction f() {}\n"
        [fn] = _visible(_tree(code))
        assert code[fn.start : fn.end] == "function f() {}"

    def test_tsx_grammar(self):
        """JSX inside TSX parses with the tsx grammar."""
        code = "const View = () => <div>{a && <b/>}</div>;\n"
        [fn] = _visible(_tree(code, grammar="tsx"))
        assert fn.get_collected_complexity() == 2

    def test_javascript_grammar(self):
        """Plain JavaScript parses with the javascript grammar."""
        [fn] = _visible(_tree("function f(a) { return a ? 1 : 2; }", grammar="javascript"))
        assert fn.get_collected_complexity() == 2


class TestErrors:
    """Test failure behavior."""

    def test_syntax_errors_still_produce_tree(self):
        """Malformed code yields a partial tree, not an error."""
        root = _tree("function f( { if (a) {\n")
        assert root.text == "file"

    def test_unknown_grammar(self):
        """An unknown grammar name is rejected."""
        with pytest.raises(UnsupportedLanguageError):
            _tree("let a;", grammar="cobol")
