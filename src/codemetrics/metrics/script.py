"""Script metrics engine: complexity trees for JavaScript and TypeScript.

The engine parses the text with tree-sitter and walks the syntax tree with an
explicit stack. Every construct that has a cost in ScriptMetricsConfiguration
becomes a MetricsModel under the nearest enclosing declaration (function,
method, arrow function or class), so a declaration's collected complexity is
its own cost plus everything nested inside it.

Tree-sitter reports byte offsets; the models carry character offsets so they
can be handed to TextDocument.position_at unchanged.
"""

from __future__ import annotations

from bisect import bisect_left
from itertools import accumulate
from typing import TYPE_CHECKING, Any, Callable, Optional

from ..exceptions import ParsingError
from ..languages import DEFAULT_GRAMMAR
from ..logging_config import get_logger
from ..scanning.treesitter_parser import TreeSitterParser
from .model import MetricsModel, MetricsParseResult

if TYPE_CHECKING:
    from ..config import MetricsConfiguration, ScriptMetricsConfiguration

logger = get_logger(__name__)

# node type -> (cost field, label); always visible, always reported
_DECLARATIONS: dict[str, tuple[str, str]] = {
    "function_declaration": ("function_declaration", "function"),
    "generator_function_declaration": ("function_declaration", "function*"),
    "function_expression": ("function_expression", "function"),
    "function": ("function_expression", "function"),
    "generator_function": ("function_expression", "function*"),
    "arrow_function": ("arrow_function", "arrow function"),
    "method_definition": ("method_declaration", "method"),
    "class_declaration": ("class_declaration", "class"),
    "abstract_class_declaration": ("class_declaration", "class"),
    "class": ("class_declaration", "class"),
}

# node type -> (cost field, label); reported only when the cost is positive
_STATEMENTS: dict[str, tuple[str, str]] = {
    "if_statement": ("if_statement", "if"),
    "else_clause": ("else_clause", "else"),
    "switch_case": ("case_clause", "case"),
    "switch_default": ("default_clause", "default"),
    "ternary_expression": ("conditional_expression", "?:"),
    "for_statement": ("for_statement", "for"),
    "for_in_statement": ("for_in_statement", "for...in/of"),
    "while_statement": ("while_statement", "while"),
    "do_statement": ("do_statement", "do...while"),
    "catch_clause": ("catch_clause", "catch"),
    "throw_statement": ("throw_statement", "throw"),
    "break_statement": ("break_statement", "break"),
    "continue_statement": ("continue_statement", "continue"),
}

# operator token -> cost field, for binary and compound-assignment expressions
_OPERATORS: dict[str, str] = {
    "&&": "logical_operator",
    "||": "logical_operator",
    "??": "nullish_coalescing",
    "&&=": "logical_operator",
    "||=": "logical_operator",
    "??=": "nullish_coalescing",
}

# parent node type -> field holding the name of an anonymous declaration
_NAME_FROM_PARENT: dict[str, str] = {
    "variable_declarator": "name",
    "pair": "key",
    "assignment_expression": "left",
    "public_field_definition": "name",
    "field_definition": "property",
}


def char_offset_converter(text: str, code: bytes) -> Callable[[int], int]:
    """Build a byte offset -> character offset converter for ``text``."""
    if len(code) == len(text):
        return lambda offset: offset
    byte_starts = list(accumulate((len(ch.encode("utf-8")) for ch in text), initial=0))
    return lambda offset: bisect_left(byte_starts, offset)


def node_text(node: Any) -> str:
    return node.text.decode("utf-8", errors="replace") if node.text else ""


def _declaration_name(node: Any) -> Optional[str]:
    name = node.child_by_field_name("name")
    if name is None and node.parent is not None:
        field_name = _NAME_FROM_PARENT.get(node.parent.type)
        if field_name is not None:
            name = node.parent.child_by_field_name(field_name)
    return node_text(name) if name is not None else None


class ScriptMetricsEngine:
    """Computes metric trees for script-family documents.

    Args:
        grammar: Tree-sitter grammar name ("javascript", "typescript", "tsx")
        parser: Parser wrapper; a new one is created when omitted
    """

    def __init__(self, grammar: str = DEFAULT_GRAMMAR, parser: Optional[TreeSitterParser] = None):
        self.grammar = grammar
        self._parser = parser or TreeSitterParser()

    def compute_tree(
        self, uri: str, text: str, config: MetricsConfiguration
    ) -> MetricsParseResult:
        """Parse ``text`` and return its metric tree.

        Raises:
            UnsupportedLanguageError: If the grammar is unknown
            ParsingError: If the text cannot be encoded or parsed
        """
        try:
            code = text.encode("utf-8")
        except UnicodeEncodeError as e:
            raise ParsingError(uri, self.grammar, f"Encoding error: {e}") from e

        tree = self._parser.parse(code, self.grammar)
        if tree is None:
            raise ParsingError(uri, self.grammar, "parser returned no tree")
        if tree.root_node.has_error:
            logger.debug(f"Syntax errors in {uri}, metrics may be incomplete")

        root = MetricsModel(start=0, end=len(text), text="file", visible=False)
        to_char = char_offset_converter(text, code)
        costs = config.script

        stack: list[tuple[Any, MetricsModel]] = [(tree.root_node, root)]
        while stack:
            node, parent = stack.pop()
            model = self._model_for(node, costs, to_char)
            if model is not None:
                parent.children.append(model)
                if model.visible:
                    parent = model
            # Reversed so siblings are popped, and appended, in source order
            stack.extend((child, parent) for child in reversed(node.named_children))

        return MetricsParseResult(file=uri, metrics=root)

    def _model_for(
        self,
        node: Any,
        costs: ScriptMetricsConfiguration,
        to_char: Callable[[int], int],
    ) -> Optional[MetricsModel]:
        declaration = _DECLARATIONS.get(node.type)
        if declaration is not None:
            cost_field, label = declaration
            name = _declaration_name(node)
            return MetricsModel(
                start=to_char(node.start_byte),
                end=to_char(node.end_byte),
                text=f"{label} {name}" if name else label,
                complexity=getattr(costs, cost_field),
                visible=True,
                description=f"for '{label}'",
            )

        statement = _STATEMENTS.get(node.type)
        if statement is not None:
            cost_field, label = statement
        elif node.type in ("binary_expression", "augmented_assignment_expression"):
            operator = node.child_by_field_name("operator")
            label = operator.type if operator is not None else ""
            cost_field = _OPERATORS.get(label)
            if cost_field is None:
                return None
        else:
            return None

        cost = getattr(costs, cost_field)
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
