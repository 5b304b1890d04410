"""
hierarchical_strategy.py — Top-down tree layout strategy.

Used for: deployment trees, ownership hierarchies.
Pattern: Core at top centre, one row per ring, children in a sub-row
beneath their parent.
"""

from typing import Dict, List

from .base_strategy import ChildBlock, RingLayoutStrategy, StrategyResult
from ..config import LayoutConfig
from ..data_models import DiagramGraph
from ..positioned import ElementPosition


class HierarchicalStrategy(RingLayoutStrategy):
    """
    Tree layout strategy with rows ordered by ring number.

    Key features:
    - Each row centred as a block on x = 0
    - A parent's slot widens to fit its child row, so sibling child rows
      never collide
    - Rows with children reserve the child row before the next ring
    """

    name = "hierarchical"

    def place(self, graph: DiagramGraph, config: LayoutConfig) -> StrategyResult:
        """Compute positions for hierarchical layout."""
        plan = self.plan_rings(graph)
        if plan.core is None:
            return StrategyResult(warnings=["No elements to layout"])

        spacing = config.spacing
        arrangement = self.arrangement_for(config)
        positions: Dict[str, ElementPosition] = {}

        core_w, core_h = self.core_size(plan.core, config)
        positions[plan.core.id] = self.core_position(plan.core, config, -core_w / 2, 0.0)

        current_y = core_h + spacing.vertical

        for _, members in plan.rings:
            sizes = [self.satellite_size(m, config) for m in members]
            blocks: List[ChildBlock] = [
                self.child_block(plan.descendants.get(m.id, []), config, arrangement)
                for m in members
            ]
            slot_widths = [max(w, block.width) for (w, _), block in zip(sizes, blocks)]

            row_width = sum(slot_widths) + (len(members) - 1) * spacing.horizontal
            row_height = max(h for _, h in sizes)
            child_top = current_y + row_height + spacing.child_gap_vertical

            slot_x = -row_width / 2
            for element, (width, height), block, slot_width in zip(members, sizes, blocks, slot_widths):
                parent = ElementPosition(
                    element_id=element.id,
                    x=slot_x + (slot_width - width) / 2,
                    y=current_y,
                    width=width,
                    height=height,
                    parent_id=element.parent_id,
                )
                positions[element.id] = parent

                if not block.is_empty:
                    children = plan.descendants[element.id]
                    left = parent.center_x - block.width / 2
                    for pos in block.place(left, child_top, {c.id: c.parent_id for c in children}):
                        positions[pos.element_id] = pos

                slot_x += slot_width + spacing.horizontal

            child_heights = [block.height for block in blocks if not block.is_empty]
            child_row_height = max(child_heights) + spacing.child_gap_vertical if child_heights else 0.0

            current_y += row_height + spacing.vertical + child_row_height

        self.place_manual_children(plan, config, positions)

        return StrategyResult(positions=positions)
