"""Statement metrics engine for Lua.

Lua has its own cost table (LuaStatementMetricsConfiguration) and its own
grammar, so it does not share the script engine's node maps. The text is
parsed with the tree-sitter Lua grammar and walked with an explicit stack:
every function becomes a visible MetricsModel, and every costed statement is
attached to the innermost enclosing function. A function's collected
complexity is therefore its own cost plus every decision inside it,
including nested functions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Callable, Optional

from ..exceptions import ParsingError
from ..logging_config import get_logger
from ..scanning.treesitter_parser import TreeSitterParser
from .model import MetricsModel, MetricsParseResult
from .script import char_offset_converter, node_text

if TYPE_CHECKING:
    from ..config import LuaStatementMetricsConfiguration, MetricsConfiguration

logger = get_logger(__name__)

LUA_GRAMMAR = "lua"

# Named and anonymous (``function(...) end``) functions
_FUNCTIONS = frozenset({"function_declaration", "function_definition"})

# node type -> (cost field, label)
_STATEMENTS: dict[str, tuple[str, str]] = {
    "if_statement": ("if_statement", "if"),
    "elseif_statement": ("elseif_clause", "elseif"),
    "else_statement": ("else_clause", "else"),
    "while_statement": ("while_statement", "while"),
    "for_statement": ("for_statement", "for"),
    "repeat_statement": ("repeat_statement", "repeat"),
    "goto_statement": ("goto_statement", "goto"),
    "break_statement": ("break_statement", "break"),
}

_LOGICAL_OPERATORS = frozenset({"and", "or"})


def _operator(node: Any) -> str:
    """The operator token of a binary expression."""
    for child in node.children:
        if not child.is_named:
            return child.type
    return ""


class LuaMetrics:
    """Builds a metric tree from Lua source text.

    Args:
        parser: Parser wrapper; a new one is created when omitted
    """

    def __init__(self, parser: Optional[TreeSitterParser] = None):
        self._parser = parser or TreeSitterParser()

    def get_metrics_from_lua_source(
        self, config: LuaStatementMetricsConfiguration, text: str, uri: str = ""
    ) -> MetricsModel:
        """Parse ``text`` and return the root of its metric tree.

        Raises:
            ParsingError: If the text cannot be encoded or parsed
        """
        try:
            code = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParsingError(uri, LUA_GRAMMAR, f"Encoding error: {e}") from e

        tree = self._parser.parse(code, LUA_GRAMMAR)
        if tree is None:
            raise ParsingError(uri, LUA_GRAMMAR, "parser returned no tree")
        if tree.root_node.has_error:
            logger.debug(f"Syntax errors in {uri or 'Lua source'}, metrics may be incomplete")

        root = MetricsModel(start=0, end=len(text), text="file", visible=False)
        to_char = char_offset_converter(text, code)

        stack: list[tuple[Any, MetricsModel]] = [(tree.root_node, root)]
        while stack:
            node, parent = stack.pop()
            model = self._model_for(node, config, to_char)
            if model is not None:
                parent.children.append(model)
                if model.visible:
                    parent = model
            stack.extend((child, parent) for child in reversed(node.named_children))
        return root

    @staticmethod
    def _model_for(
        node: Any,
        config: LuaStatementMetricsConfiguration,
        to_char: Callable[[int], int],
    ) -> Optional[MetricsModel]:
        if node.type in _FUNCTIONS:
            name = node.child_by_field_name("name")
            return MetricsModel(
                start=to_char(node.start_byte),
                end=to_char(node.end_byte),
                text=f"function {node_text(name)}" if name is not None else "function",
                complexity=config.function_declaration,
                visible=True,
                description="for 'function'",
            )

        statement = _STATEMENTS.get(node.type)
        if statement is not None:
            cost_field, label = statement
        elif node.type == "binary_expression":
            label = _operator(node)
            if label not in _LOGICAL_OPERATORS:
                return None
            cost_field = "logical_operator"
        else:
            return None

        cost = getattr(config, cost_field)
        if cost <= 0:
            return None
        return MetricsModel(
            start=to_char(node.start_byte),
            end=to_char(node.end_byte),
            text=label,
            complexity=cost,
            visible=False,
            description=f"for '{label}'",
        )


class LuaMetricsEngine:
    """Lua engine wrapper exposing the common engine interface."""

    def __init__(self, parser: Optional[TreeSitterParser] = None):
        self._metrics = LuaMetrics(parser)

    def compute_tree(
        self, uri: str, text: str, config: MetricsConfiguration
    ) -> MetricsParseResult:
        return MetricsParseResult(
            file=uri,
            metrics=self._metrics.get_metrics_from_lua_source(config.lua, text, uri),
        )
