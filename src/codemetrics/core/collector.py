"""Collects the surfaced nodes of a metric tree."""

from ..config import MetricsConfiguration
from ..metrics.model import MetricsModel


def is_kept(model: MetricsModel, config: MetricsConfiguration) -> bool:
    """A node is surfaced when visible and complex enough."""
    return model.visible and model.get_collected_complexity() >= config.minimum_visible_complexity


def collect(root: MetricsModel, config: MetricsConfiguration) -> list[MetricsModel]:
    """Return every kept node of the tree in pre-order.

    Parents come before their children and siblings keep source order. A
    node that is not kept is still descended into, since its children are
    judged on their own.
    """
    result: list[MetricsModel] = []
    stack = [root]
    while stack:
        model = stack.pop()
        if is_kept(model, config):
            result.append(model)
        stack.extend(reversed(model.children))
    return result
