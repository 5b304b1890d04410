"""
grouped_strategy.py — Context column layout strategy.

Used for: bounded-context and swimlane diagrams.
Pattern: Groups ordered left to right by edge flow, each group laid out
as its own ranked column; ungrouped elements stacked in a column on the
left edge.
"""

import logging
from typing import Dict, List

from .base_strategy import BaseLayoutStrategy, StrategyResult
from ..config import LayoutConfig
from ..data_models import DiagramGraph, Element
from ..group_order import resolve_group_order
from ..intra_group import IntraGroupLayout
from ..positioned import ElementPosition

logger = logging.getLogger(__name__)


class GroupedStrategy(BaseLayoutStrategy):
    """
    Grouped layout strategy.

    Key features:
    - Best-effort topological group order (cycles fall back to declaration order)
    - Columns never overlap, regions included
    - Elements naming an undeclared group are laid out as ungrouped
    """

    name = "grouped"

    def place(self, graph: DiagramGraph, config: LayoutConfig) -> StrategyResult:
        """Compute positions for grouped layout."""
        groups = config.groups
        warnings: List[str] = []

        order = resolve_group_order(graph.groups, graph.elements, graph.edges)
        if order.has_cycle:
            message = (
                f"Cyclic group dependencies; appended in declaration order: "
                f"{', '.join(order.unresolved)}"
            )
            logger.warning(message)
            warnings.append(message)

        declared = set(graph.group_ids())
        undeclared = [e.id for e in graph.elements if e.group is not None and e.group not in declared]
        if undeclared:
            message = f"Elements reference undeclared groups, laid out as ungrouped: {', '.join(undeclared)}"
            logger.warning(message)
            warnings.append(message)

        positions: Dict[str, ElementPosition] = {}

        external = [
            e for e in graph.elements
            if (e.group is None or e.group not in declared) and not self.is_manual(e)
        ]
        cursor_x = groups.margin
        if external:
            external_positions = self._layout_external(external, config)
            positions.update(external_positions)
            right = max(p.right_edge for p in external_positions.values())
            cursor_x = right + groups.group_gap

        # Keep neighbouring regions apart even when padding exceeds the inner margin
        region_overhang = max(0.0, groups.region_padding - groups.rank_margin)
        cursor_x += region_overhang

        layout = IntraGroupLayout(config)
        for group_id in order.order:
            members = [m for m in graph.members_of(group_id) if not self.is_manual(m)]
            if not members:
                continue

            result = layout.compute(members, graph.edges, origin_x=cursor_x, origin_y=groups.margin)
            positions.update(result.positions)

            column_width = max(groups.column_min_width, result.width)
            cursor_x += column_width + groups.group_gap + 2 * region_overhang

        logger.debug(f"Grouped layout: {len(order.order)} groups, {len(external)} ungrouped")

        return StrategyResult(
            positions=positions,
            group_order=order.order,
            warnings=warnings,
        )

    def _layout_external(
        self,
        elements: List[Element],
        config: LayoutConfig,
    ) -> Dict[str, ElementPosition]:
        """Stack ungrouped elements on the left edge."""
        x = config.canvas.padding
        y = config.canvas.padding
        positions: Dict[str, ElementPosition] = {}
        for element in elements:
            width, height = self.default_size(element, config)
            positions[element.id] = ElementPosition(
                element_id=element.id,
                x=x,
                y=y,
                width=width,
                height=height,
                parent_id=element.parent_id,
            )
            y += height + config.groups.external_gap
        return positions
