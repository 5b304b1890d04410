"""
layered_strategy.py — Left-to-right column layout strategy.

Used for: dependency flows read left to right.
Pattern: Core on the left, one column per ring, children in a sub-column
immediately right of their parent.
"""

from typing import Dict, List

from .base_strategy import ChildBlock, RingLayoutStrategy, StrategyResult
from ..config import LayoutConfig
from ..data_models import DiagramGraph
from ..positioned import ElementPosition


class LayeredStrategy(RingLayoutStrategy):
    """
    Column layout strategy with columns ordered by ring number.

    Key features:
    - Every column (and the core) centred on y = 0
    - Column x advances past the widest element and its child sub-column,
      so a ring's children never touch the next ring
    """

    name = "layered"

    child_arrangements = {
        "nested": "column",
        "expanded": "column",
        "clustered": "cluster",
    }

    def place(self, graph: DiagramGraph, config: LayoutConfig) -> StrategyResult:
        """Compute positions for layered layout."""
        plan = self.plan_rings(graph)
        if plan.core is None:
            return StrategyResult(warnings=["No elements to layout"])

        spacing = config.spacing
        item_gap = spacing.vertical / 2
        arrangement = self.arrangement_for(config)
        positions: Dict[str, ElementPosition] = {}

        core_w, core_h = self.core_size(plan.core, config)
        positions[plan.core.id] = self.core_position(plan.core, config, 0.0, -core_h / 2)

        current_x = core_w + spacing.horizontal

        for _, members in plan.rings:
            sizes = [self.satellite_size(m, config) for m in members]
            blocks: List[ChildBlock] = [
                self.child_block(plan.descendants.get(m.id, []), config, arrangement)
                for m in members
            ]
            slot_heights = [max(h, block.height) for (_, h), block in zip(sizes, blocks)]

            column_height = sum(slot_heights) + (len(members) - 1) * item_gap
            column_width = max(w for w, _ in sizes)
            child_left = current_x + column_width + spacing.child_gap_horizontal

            slot_y = -column_height / 2
            max_child_width = 0.0
            for element, (width, height), block, slot_height in zip(members, sizes, blocks, slot_heights):
                parent = ElementPosition(
                    element_id=element.id,
                    x=current_x,
                    y=slot_y + (slot_height - height) / 2,
                    width=width,
                    height=height,
                    parent_id=element.parent_id,
                )
                positions[element.id] = parent

                if not block.is_empty:
                    children = plan.descendants[element.id]
                    top = parent.center_y - block.height / 2
                    for pos in block.place(child_left, top, {c.id: c.parent_id for c in children}):
                        positions[pos.element_id] = pos
                    max_child_width = max(max_child_width, block.width + spacing.child_gap_horizontal)

                slot_y += slot_height + item_gap

            current_x += column_width + spacing.horizontal + max_child_width

        self.place_manual_children(plan, config, positions)

        return StrategyResult(positions=positions)
