"""Tests for the Lua statement engine."""

from codemetrics.config import LuaStatementMetricsConfiguration, MetricsConfiguration
from codemetrics.metrics.lua import LuaMetrics, LuaMetricsEngine


def _tree(code, config=None):
    return LuaMetrics().get_metrics_from_lua_source(
        config or LuaStatementMetricsConfiguration(), code
    )


class TestCommentsAndStrings:
    """Keywords outside code cost nothing."""

    def test_keywords_in_comments_and_strings_ignored(self):
        """Keywords inside comments and strings are not statements."""
        code = "function f()\n  -- if a then end\n  local s = 'if or and'\n  --[==[ while ]==]\nend\n"
        [fn] = _tree(code).children
        assert fn.get_collected_complexity() == 1

    def test_long_string(self):
        """A long bracket string hides its keywords."""
        code = "function f()\n  return [[ if a or b then end ]]\nend\n"
        [fn] = _tree(code).children
        assert fn.children == []


class TestFunctions:
    """Test function extents and nesting."""

    def test_named_function(self):
        """Function names include the table path."""
        root = _tree("function M.util:run()\nend\n")
        assert root.children[0].text == "function M.util:run"

    def test_anonymous_function(self):
        """Function expressions get a generic label."""
        root = _tree("local f = function(a) return a end\n")
        assert root.children[0].text == "function"

    def test_function_extent_ends_at_end(self):
        """A local function runs from ``local`` to its matching end."""
        code = "local function f()\n  if a then\n  end\nend\nprint(1)\n"
        [fn] = _tree(code).children
        assert code[fn.start : fn.end] == "local function f()\n  if a then\n  end\nend"

    def test_loop_do_opens_no_extra_block(self):
        """The do of a loop header belongs to the loop."""
        code = "function f()\n  while a do\n    do end\n  end\nend\nreturn 1\n"
        [fn] = _tree(code).children
        assert code[fn.end - 3 : fn.end] == "end"
        assert code[fn.end :] == "\nreturn 1\n"

    def test_repeat_until(self):
        """repeat ... until is a loop."""
        code = "function f()\n  repeat x = x - 1 until x == 0\nend\n"
        [fn] = _tree(code).children
        assert fn.get_collected_complexity() == 2
        assert fn.end == len(code) - 1

    def test_nested_functions(self):
        """Inner functions are children of the outer one."""
        code = "function outer()\n  local function inner() if a then end end\nend\n"
        [outer] = _tree(code).children
        inner = [c for c in outer.children if c.visible]
        assert [c.text for c in inner] == ["function inner"]
        assert outer.get_collected_complexity() == 3

    def test_character_offsets(self):
        """Offsets count characters, not UTF-8 bytes."""
        code = 'local s = "héllo"\nfunction f() end\n'
        [fn] = _tree(code).children
        assert fn.start == code.index("function")
        assert code[fn.start : fn.end] == "function f() end"

    def test_syntax_errors_still_yield_tree(self):
        """Malformed source is recovered rather than raised."""
        code = "function f()\n  if a then\n"
        root = _tree(code)
        assert root.end == len(code)


class TestStatements:
    """Test statement costs."""

    def test_reference_function(self, lua_document):
        """function, for, if, and, elseif add up to 5."""
        [fn] = _tree(lua_document.text).children
        assert fn.text == "function process"
        assert fn.get_collected_complexity() == 5

    def test_zero_cost_statements_omitted(self):
        """else and break cost nothing by default and are not reported."""
        code = "function f()\n  while a do if a then else break end end\nend\n"
        [fn] = _tree(code).children
        assert [c.text for c in fn.children] == ["while", "if"]

    def test_logical_operators(self):
        """and/or count, comparison operators do not."""
        code = "function f(a, b)\n  return a and b or a == b\nend\n"
        [fn] = _tree(code).children
        assert sorted(c.text for c in fn.children) == ["and", "or"]

    def test_goto(self):
        """goto costs 1 by default."""
        code = "function f()\n  goto done\n  ::done::\nend\n"
        [fn] = _tree(code).children
        assert [c.text for c in fn.children] == ["goto"]

    def test_custom_costs(self):
        """Costs come from the Lua configuration."""
        config = LuaStatementMetricsConfiguration(else_clause=2, function_declaration=0)
        code = "function f()\n  if a then else end\nend\n"
        [fn] = _tree(code, config).children
        assert fn.get_collected_complexity() == 3

    def test_engine_uses_lua_section(self):
        """The engine wrapper reads the [lua] section of the configuration."""
        config = MetricsConfiguration(lua=LuaStatementMetricsConfiguration(if_statement=4))
        result = LuaMetricsEngine().compute_tree("file:///a.lua", "function f() if a then end end", config)
        assert result.file == "file:///a.lua"
        assert result.metrics.children[0].get_collected_complexity() == 5
