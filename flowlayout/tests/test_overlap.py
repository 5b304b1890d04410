"""Tests for overlap detection and nudging."""

from flowlayout.engine import (
    DiagramGraph,
    Element,
    ElementPosition,
    compute_layout,
    create_layout_config,
    find_overlaps,
    resolve_overlaps,
)
from flowlayout.engine.overlap import overlap_amount


def box(element_id: str, x: float, y: float, manual: bool = False, parent_id=None) -> ElementPosition:
    return ElementPosition(
        element_id=element_id, x=x, y=y, width=100, height=50, parent_id=parent_id, manual=manual
    )


class TestFindOverlaps:
    """Tests for find_overlaps()."""

    def test_touching_edges_do_not_overlap(self) -> None:
        """Test boxes sharing an edge are not reported."""
        assert find_overlaps([box("a", 0, 0), box("b", 100, 0)]) == []

    def test_padding_grows_boxes(self) -> None:
        """Test padding reports near misses."""
        assert find_overlaps([box("a", 0, 0), box("b", 105, 0)], padding=5) == [("a", "b")]

    def test_nested_pairs_skipped(self) -> None:
        """Test a child overlapping its parent is only reported on request."""
        positions = [box("p", 0, 0), box("c", 10, 10, parent_id="p")]
        assert find_overlaps(positions) == []
        assert find_overlaps(positions, include_nested=True) == [("p", "c")]


class TestOverlapAmount:
    """Tests for overlap_amount()."""

    def test_amount(self) -> None:
        """Test intersection width and height, zero when apart."""
        assert overlap_amount(box("a", 0, 0), box("b", 60, 20)) == (40, 30)
        assert overlap_amount(box("a", 0, 0), box("b", 300, 0)) == (0.0, 50)


class TestResolveOverlaps:
    """Tests for resolve_overlaps()."""

    def test_staggered_row_separated(self) -> None:
        """Test overlapping free boxes are nudged until none overlap."""
        positions = [box("a", 0, 0), box("b", 60, 0), box("c", 120, 0)]
        resolved = resolve_overlaps(positions, padding=10)
        assert list(resolved) == ["a", "b", "c"]
        assert find_overlaps(resolved.values()) == []

    def test_push_follows_centre_delta(self) -> None:
        """Test each side moves away from the other by half the overlap plus one."""
        resolved = resolve_overlaps([box("a", 0, 0), box("b", 60, 0)], padding=0)
        # Overlap is 40 x 50; b's centre is right of a's and level with it
        assert (resolved["a"].x, resolved["a"].y) == (-21, -26)
        assert (resolved["b"].x, resolved["b"].y) == (81, 26)

    def test_manual_position_never_moves(self) -> None:
        """Test the free side of a pair takes the whole push."""
        pinned = box("m", 10, 10, manual=True)
        resolved = resolve_overlaps([box("a", 0, 0), pinned], padding=10)

        assert resolved["m"] == pinned
        assert resolved["a"].x < 0 and resolved["a"].y < 0
        assert find_overlaps(resolved.values()) == []

    def test_two_manual_positions_left_alone(self) -> None:
        """Test pairs of manual positions keep their overlap."""
        positions = [box("m1", 0, 0, manual=True), box("m2", 10, 10, manual=True)]
        resolved = resolve_overlaps(positions)
        assert list(resolved.values()) == positions

    def test_nested_pairs_not_pushed(self) -> None:
        """Test a child is left overlapping its parent."""
        positions = [box("p", 0, 0), box("c", 10, 10, parent_id="p")]
        resolved = resolve_overlaps(positions)
        assert list(resolved.values()) == positions

    def test_inputs_not_modified(self) -> None:
        """Test the input rectangles are untouched."""
        a = box("a", 0, 0)
        resolve_overlaps([a, box("b", 10, 0)])
        assert (a.x, a.y) == (0, 0)


class TestEngineOverlapResolution:
    """Tests for the opt-in resolution step in compute()."""

    def graph(self) -> DiagramGraph:
        return DiagramGraph(
            elements=[
                Element(id="a"),
                Element(id="b"),
                Element(id="m", position={"x": 160, "y": 130}),
            ]
        )

    def test_disabled_by_default(self, config) -> None:
        """Test the default layout reports the collision with a manual element."""
        result = compute_layout(self.graph(), config)
        assert find_overlaps(result.flatten()) == [("a", "m")]

    def test_enabled_clears_collision(self) -> None:
        """Test enabling resolution moves the auto-placed element off the manual one."""
        config = create_layout_config(overlap={"resolve": True})
        result = compute_layout(self.graph(), config)

        m = result.positions["m"]
        assert (m.x, m.y) == (160, 130)
        assert m.manual
        assert find_overlaps(result.flatten()) == []
        assert result.warnings == []
        assert result.bounds.min_x == result.positions["a"].x

    def test_unresolvable_overlap_warns(self, caplog) -> None:
        """Test overlapping manual elements are reported as a warning."""
        graph = DiagramGraph(
            elements=[
                Element(id="m1", position={"x": 10, "y": 10}),
                Element(id="m2", position={"x": 20, "y": 20}),
            ]
        )
        config = create_layout_config(overlap={"resolve": True})
        result = compute_layout(graph, config)
        assert any("m1/m2" in w for w in result.warnings)
        assert "Unresolved overlaps" in caplog.text
