"""
grid_strategy.py — Adaptive grid fallback.

Used when elements carry no group or ring metadata.
Pattern: A compact horizontal flow for small diagrams, a layered grid with
one band per named layer for larger ones.
"""

from typing import Dict, List, Sequence, Tuple

from .base_strategy import BaseLayoutStrategy, StrategyResult
from ..config import LayoutConfig
from ..data_models import DiagramGraph, Element
from ..positioned import ElementPosition


class GridStrategy(BaseLayoutStrategy):
    """
    Grid layout strategy for unstructured diagrams.

    Key features:
    - Mode chosen by how many elements still need a position
    - Type priority puts structural elements first in compact mode
    - A position at exactly (0, 0) counts as unset
    """

    name = "grid"

    def place(self, graph: DiagramGraph, config: LayoutConfig) -> StrategyResult:
        """Compute positions for grid layout."""
        pending = [e for e in graph.elements if not self.is_manual(e)]
        if not pending:
            return StrategyResult()

        if len(pending) <= config.grid.compact_threshold:
            positions = self._compute_horizontal_flow(pending, config)
        else:
            positions = self._compute_layered_grid(pending, config)

        return StrategyResult(positions=positions)

    def is_manual(self, element: Element) -> bool:
        return element.position is not None and not element.position.is_origin

    def default_size(self, element: Element, config: LayoutConfig) -> Tuple[float, float]:
        grid = config.grid
        return element.resolve_size(config, (grid.cell_width, grid.cell_height))

    def _compute_horizontal_flow(
        self,
        elements: Sequence[Element],
        config: LayoutConfig,
    ) -> Dict[str, ElementPosition]:
        """Left-to-right, top-to-bottom flow sorted by type priority."""
        grid = config.grid

        def priority(element: Element) -> int:
            return grid.type_priority.get(element.type, grid.unknown_priority)

        ordered = sorted(elements, key=priority)  # stable: ties keep declaration order
        positions, _ = self._flow_rows(ordered, grid.start_y, config)
        return positions

    def _compute_layered_grid(
        self,
        elements: Sequence[Element],
        config: LayoutConfig,
    ) -> Dict[str, ElementPosition]:
        """One band per layer, layers in canonical order."""
        grid = config.grid

        layers: Dict[str, List[Element]] = {}
        for element in elements:
            layers.setdefault(element.layer or grid.default_layer, []).append(element)

        canonical = list(grid.layer_order)
        first_seen = list(layers.keys())

        def layer_rank(name: str) -> Tuple[int, int]:
            if name in canonical:
                return (canonical.index(name), 0)
            return (len(canonical), first_seen.index(name))

        positions: Dict[str, ElementPosition] = {}
        layer_y = grid.start_y
        for name in sorted(layers, key=layer_rank):
            band, next_row_y = self._flow_rows(layers[name], layer_y, config)
            positions.update(band)
            # Move to next layer with gap
            layer_y = next_row_y + grid.layer_gap

        return positions

    def _flow_rows(
        self,
        elements: Sequence[Element],
        top: float,
        config: LayoutConfig,
    ) -> Tuple[Dict[str, ElementPosition], float]:
        """
        Flow elements into rows of nodes_per_row.

        Returns the positions and the y where a following row would start.
        """
        grid = config.grid
        positions: Dict[str, ElementPosition] = {}
        y = top

        for start in range(0, len(elements), grid.nodes_per_row):
            row = elements[start:start + grid.nodes_per_row]
            sizes = [self.default_size(e, config) for e in row]
            x = grid.start_x
            for element, (width, height) in zip(row, sizes):
                positions[element.id] = ElementPosition(
                    element_id=element.id,
                    x=x,
                    y=y,
                    width=width,
                    height=height,
                    parent_id=element.parent_id,
                )
                x += max(width, grid.cell_width) + grid.gap_x
            y += max(max(h for _, h in sizes), grid.cell_height) + grid.gap_y

        return positions, y
