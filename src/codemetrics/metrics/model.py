"""Metric tree models.

A metric engine turns a document into a tree of MetricsModel nodes. Every
node carries its own cost; the complexity shown to a user is the collected
complexity, i.e. the node's own cost plus the cost of all descendants.

Offsets always refer to the original document text, even when the engine
parsed a masked copy of it.
"""

from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..config import MetricsConfiguration


@dataclass
class MetricsModel:
    """One scored unit of code.

    Attributes:
        start: Start character offset (inclusive)
        end: End character offset (exclusive)
        text: Short label, e.g. "function fetchUser" or "if"
        complexity: Own cost of this node
        visible: Whether the node may be surfaced to a user
        description: Why the node costs what it costs
        children: Nested nodes in source order
    """

    start: int
    end: int
    text: str
    complexity: int = 0
    visible: bool = False
    description: str = ""
    children: list[MetricsModel] = field(default_factory=list)

    def get_collected_complexity(self) -> int:
        """Own complexity plus the complexity of every descendant."""
        total = 0
        stack: list[MetricsModel] = [self]
        while stack:
            node = stack.pop()
            total += node.complexity
            stack.extend(node.children)
        return total

    @property
    def collected_complexity(self) -> int:
        return self.get_collected_complexity()

    def to_string(self, config: MetricsConfiguration) -> str:
        """Render the user-facing message for this node."""
        if not self.visible:
            return f"+{self.complexity} {self.description}".rstrip()
        complexity = self.get_collected_complexity()
        return (
            config.complexity_template.replace("{0}", str(complexity))
            .replace("{1}", config.level_description(complexity))
            .strip()
        )

    def get_explanation(self) -> str:
        """Breakdown of the costs collected below this node, most expensive first."""
        costs: Counter[str] = Counter()
        stack = list(self.children)
        while stack:
            node = stack.pop()
            if node.complexity and node.description:
                costs[node.description] += node.complexity
            stack.extend(node.children)
        lines = [f"+{cost} {description}" for description, cost in costs.most_common()]
        return "\n".join(lines)


@dataclass
class MetricsParseResult:
    """Envelope returned by every metric engine."""

    file: str
    metrics: MetricsModel
