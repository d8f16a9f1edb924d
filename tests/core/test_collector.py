"""Tests for collecting surfaced metric nodes."""

from codemetrics.config import MetricsConfiguration
from codemetrics.core.collector import collect, is_kept
from codemetrics.metrics.model import MetricsModel


def _visible(text, complexity, children=None):
    return MetricsModel(
        start=0, end=1, text=text, complexity=complexity, visible=True,
        children=children or [],
    )


def _statement(complexity):
    return MetricsModel(start=0, end=1, text="if", complexity=complexity, visible=False)


class TestCollect:
    """Test threshold filtering and ordering."""

    def test_threshold_keeps_only_complex_nodes(self):
        """Only visible nodes at or above the threshold are kept."""
        nodes = [_visible("a", 1), _visible("b", 5), _visible("c", 10)]
        root = MetricsModel(start=0, end=1, text="file", children=nodes)
        config = MetricsConfiguration(minimum_visible_complexity=5)

        kept = collect(root, config)

        assert [m.text for m in kept] == ["b", "c"]

    def test_invisible_nodes_never_kept(self):
        """Statements are never surfaced, whatever their cost."""
        root = MetricsModel(start=0, end=1, text="file", children=[_statement(50)])
        assert collect(root, MetricsConfiguration(minimum_visible_complexity=0)) == []

    def test_root_is_not_kept(self):
        """The invisible file root is never part of the result."""
        root = MetricsModel(start=0, end=1, text="file", complexity=100)
        assert collect(root, MetricsConfiguration()) == []

    def test_preorder_parent_before_children(self):
        """Parents come before children, siblings keep source order."""
        inner_a = _visible("inner_a", 5)
        inner_b = _visible("inner_b", 5)
        outer = _visible("outer", 1, [inner_a, inner_b])
        last = _visible("last", 6)
        root = MetricsModel(start=0, end=1, text="file", children=[outer, last])

        kept = collect(root, MetricsConfiguration(minimum_visible_complexity=5))

        assert [m.text for m in kept] == ["outer", "inner_a", "inner_b", "last"]

    def test_children_of_dropped_nodes_are_visited(self):
        """A node below the threshold does not hide complex descendants."""
        deep = _visible("deep", 9)
        shallow = _visible("shallow", 0, [_visible("middle", 0, [deep])])
        root = MetricsModel(start=0, end=1, text="file", children=[shallow])

        kept = collect(root, MetricsConfiguration(minimum_visible_complexity=10))

        # every level collects the 9 of the deepest node
        assert kept == []
        kept = collect(root, MetricsConfiguration(minimum_visible_complexity=9))
        assert [m.text for m in kept] == ["shallow", "middle", "deep"]

    def test_is_kept_uses_collected_complexity(self):
        """The threshold applies to own plus nested cost."""
        node = _visible("f", 1, [_statement(2), _statement(2)])
        assert is_kept(node, MetricsConfiguration(minimum_visible_complexity=5))
        assert not is_kept(node, MetricsConfiguration(minimum_visible_complexity=6))
