"""Tests for the top-down tree strategy."""

import pytest

from flowlayout.engine import (
    DiagramGraph,
    Element,
    HierarchicalStrategy,
    create_layout_config,
    find_overlaps,
)


@pytest.fixture
def strategy() -> HierarchicalStrategy:
    return HierarchicalStrategy()


class TestHierarchicalStrategy:
    """Tests for HierarchicalStrategy.compute()."""

    def test_core_on_top_centre(self, strategy: HierarchicalStrategy, config, ring_graph: DiagramGraph) -> None:
        """Test the core is centred on x = 0 with its top at y = 0."""
        core = strategy.compute(ring_graph, config).positions["bc"]
        assert core.center_x == pytest.approx(0)
        assert core.y == 0

    def test_rows_descend_by_ring(self, strategy: HierarchicalStrategy, config, ring_graph: DiagramGraph) -> None:
        """Test every ring sits on its own row, lower for higher rings."""
        positions = strategy.compute(ring_graph, config).positions
        core_y = positions["bc"].y
        ring_1_y = positions["api"].y
        ring_2_y = positions["db"].y

        assert positions["worker"].y == ring_1_y
        assert positions["queue"].y == ring_2_y
        assert core_y < ring_1_y < ring_2_y

    def test_first_row_below_core(self, strategy: HierarchicalStrategy, config, ring_graph: DiagramGraph) -> None:
        """Test the first ring starts one vertical gap below the core."""
        positions = strategy.compute(ring_graph, config).positions
        assert positions["api"].y == positions["bc"].bottom_edge + config.spacing.vertical

    def test_row_centred(self, strategy: HierarchicalStrategy, config, ring_graph: DiagramGraph) -> None:
        """Test a row without children is symmetric about x = 0."""
        positions = strategy.compute(ring_graph, config).positions
        assert positions["db"].x == pytest.approx(-positions["queue"].right_edge)
        assert positions["queue"].x - positions["db"].right_edge == pytest.approx(config.spacing.horizontal)

    def test_children_beneath_parent(self, strategy: HierarchicalStrategy, config, ring_graph: DiagramGraph) -> None:
        """Test children form a row centred under their parent."""
        positions = strategy.compute(ring_graph, config).positions
        parent = positions["api"]
        children = [positions[f"api-pod-{i}"] for i in range(1, 4)]

        for child in children:
            assert child.y == parent.bottom_edge + config.spacing.child_gap_vertical
        assert children[0].x < children[1].x < children[2].x
        mid = (children[0].x + children[-1].right_edge) / 2
        assert mid == pytest.approx(parent.center_x)

    def test_children_clear_next_ring(self, strategy: HierarchicalStrategy, config, ring_graph: DiagramGraph) -> None:
        """Test the next ring starts below the child row."""
        positions = strategy.compute(ring_graph, config).positions
        lowest_child = max(positions[f"api-pod-{i}"].bottom_edge for i in range(1, 4))
        assert positions["db"].y > lowest_child

    def test_sibling_child_rows_never_collide(self, strategy: HierarchicalStrategy, config) -> None:
        """Test wide child rows push neighbouring parents apart."""
        elements = [Element(id="core", ring=0), Element(id="a", ring=1), Element(id="b", ring=1)]
        elements += [Element(id=f"a{i}", parent_id="a") for i in range(6)]
        elements += [Element(id=f"b{i}", parent_id="b") for i in range(6)]
        result = strategy.compute(DiagramGraph(elements=elements), config)
        assert find_overlaps(result.flatten()) == []

    def test_clustered_children(self, strategy: HierarchicalStrategy, ring_graph: DiagramGraph) -> None:
        """Test the clustered mode packs children into a square block."""
        config = create_layout_config(child_layout="clustered")
        positions = strategy.compute(ring_graph, config).positions
        rows = {positions[f"api-pod-{i}"].y for i in range(1, 4)}
        assert len(rows) == 2

    def test_manual_core(self, strategy: HierarchicalStrategy, config) -> None:
        """Test a manually placed core is copied and rings still lay out."""
        graph = DiagramGraph(
            elements=[Element(id="core", ring=0, position={"x": 10, "y": 20}), Element(id="a", ring=1)]
        )
        positions = strategy.compute(graph, config).positions
        assert (positions["core"].x, positions["core"].y) == (10, 20)
        assert positions["a"].center_x == pytest.approx(0)

    def test_manual_core_keeps_core_size(self, strategy: HierarchicalStrategy, config) -> None:
        """Test a pinned core is sized as the core, not as a satellite."""
        graph = DiagramGraph(elements=[Element(id="core", ring=0, position={"x": 10, "y": 20})])
        core = strategy.compute(graph, config).positions["core"]
        assert (core.width, core.height) == (config.sizing.core_size, config.sizing.core_size)
