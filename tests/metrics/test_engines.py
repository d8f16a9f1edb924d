"""Tests for engine dispatch."""

from codemetrics.config import MetricsConfiguration
from codemetrics.metrics.engines import HostTemplateEngine, compute_tree, engine_for
from codemetrics.metrics.lua import LuaMetricsEngine
from codemetrics.metrics.script import ScriptMetricsEngine


class TestEngineFor:
    """Test language id to engine mapping."""

    def test_script_languages(self):
        """Script ids get the script engine with their grammar."""
        expected = {
            "typescript": "typescript",
            "typescriptreact": "tsx",
            "javascript": "javascript",
            "javascriptreact": "javascript",
        }
        for language_id, grammar in expected.items():
            engine = engine_for(language_id)
            assert isinstance(engine, ScriptMetricsEngine)
            assert engine.grammar == grammar

    def test_host_templates(self):
        """vue and html mask before parsing."""
        assert isinstance(engine_for("vue"), HostTemplateEngine)
        assert isinstance(engine_for("html"), HostTemplateEngine)

    def test_lua(self):
        """lua gets the statement engine."""
        assert isinstance(engine_for("lua"), LuaMetricsEngine)

    def test_unknown_defaults_to_typescript(self):
        """Unknown ids are parsed as TypeScript."""
        engine = engine_for("svelte")
        assert isinstance(engine, ScriptMetricsEngine)
        assert engine.grammar == "typescript"


class TestComputeTree:
    """Test dispatching a document."""

    def test_html_document(self):
        """Script in an HTML page is scored, markup is not."""
        html = (
            "<html>\n<body onload=\"if (a) {}\">\n"
            "<script>\nfunction go(a) { return a ? 1 : 2; }\n</script>\n"
            "<p>if (x) { while (y) {} }</p>\n</html>\n"
        )
        result = compute_tree("file:///index.html", html, MetricsConfiguration(), "html")

        [fn] = result.metrics.children
        assert html[fn.start : fn.end] == "function go(a) { return a ? 1 : 2; }"
        assert fn.get_collected_complexity() == 2

    def test_html_without_script(self):
        """A page without script yields an empty tree."""
        html = "<html><body>if (a) { for (;;) {} }</body></html>"
        result = compute_tree("file:///index.html", html, MetricsConfiguration(), "html")
        assert result.metrics.children == []

    def test_result_carries_uri(self):
        """The envelope names the document it came from."""
        result = compute_tree("file:///a.js", "let a;", MetricsConfiguration(), "javascript")
        assert result.file == "file:///a.js"
