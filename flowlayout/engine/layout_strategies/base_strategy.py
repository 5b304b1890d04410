"""
base_strategy.py — Abstract base class for layout strategies.

All layout strategies inherit from BaseLayoutStrategy and implement
place() to position the elements they are responsible for. The shared
compute() then honours manual positions, optionally nudges overlaps apart,
derives group regions and sizes the canvas, so every strategy returns a
complete LayoutResult.
"""

import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from ..config import LayoutConfig
from ..data_models import DiagramGraph, Element
from ..positioned import Bounds, CanvasSize, ElementPosition, LayoutResult
from ..overlap import find_overlaps, resolve_overlaps
from ..region_bounds import compute_regions

logger = logging.getLogger(__name__)


# =============================================================================
# DATA CLASSES
# =============================================================================

@dataclass
class StrategyResult:
    """
    Positions computed automatically by a strategy.

    Manual positions are merged by compute() afterwards; a strategy only
    returns one when it sizes the pinned element itself (marked manual).
    """
    positions: Dict[str, ElementPosition] = field(default_factory=dict)
    group_order: List[str] = field(default_factory=list)

    # Warnings or notes from computation
    warnings: List[str] = field(default_factory=list)


@dataclass
class ChildBlock:
    """
    Arrangement of a parent's children, relative to the block's top-left.

    Strategies decide where the block goes; the block only knows its
    internal offsets and overall size.
    """
    offsets: List[Tuple[str, float, float, float, float]] = field(default_factory=list)
    width: float = 0.0
    height: float = 0.0

    @property
    def is_empty(self) -> bool:
        return not self.offsets

    def place(
        self,
        left: float,
        top: float,
        parent_ids: Dict[str, Optional[str]],
    ) -> List[ElementPosition]:
        """Materialise the block at an absolute top-left corner."""
        return [
            ElementPosition(
                element_id=child_id,
                x=left + dx,
                y=top + dy,
                width=width,
                height=height,
                parent_id=parent_ids.get(child_id),
            )
            for child_id, dx, dy, width, height in self.offsets
        ]


# =============================================================================
# BASE STRATEGY
# =============================================================================

class BaseLayoutStrategy(ABC):
    """
    Abstract base class for layout computation strategies.

    Each strategy knows how to arrange elements according to a specific
    pattern (rings, rows, columns, grid, group columns). Strategies hold
    no state between calls.
    """

    name: str = ""

    @abstractmethod
    def place(self, graph: DiagramGraph, config: LayoutConfig) -> StrategyResult:
        """
        Compute positions for every element this strategy auto-places.

        Args:
            graph: The validated input graph
            config: Immutable layout configuration

        Returns:
            StrategyResult with automatic positions only
        """
        pass

    def compute(self, graph: DiagramGraph, config: LayoutConfig) -> LayoutResult:
        """Run the strategy and assemble the full LayoutResult."""
        placed = self.place(graph, config)

        positions: Dict[str, ElementPosition] = {}
        for element in graph.elements:
            auto = placed.positions.get(element.id)
            if self.is_manual(element):
                # A strategy may size a pinned element itself (ring cores)
                if auto is not None and auto.manual:
                    positions[element.id] = auto
                else:
                    positions[element.id] = self.manual_position(element, config)
            elif auto is not None:
                positions[element.id] = auto

        warnings = list(placed.warnings)
        if config.overlap.resolve:
            overlap = config.overlap
            positions = resolve_overlaps(
                positions.values(),
                padding=overlap.padding,
                max_iterations=overlap.max_iterations,
            )
            remaining = find_overlaps(positions.values())
            if remaining:
                message = f"Unresolved overlaps: {', '.join(f'{a}/{b}' for a, b in remaining)}"
                logger.warning(message)
                warnings.append(message)

        regions = compute_regions(graph, positions, config)
        bounds = Bounds.of(positions.values())

        return LayoutResult(
            positions=positions,
            regions=regions,
            canvas=self.canvas_size(bounds, config),
            bounds=bounds,
            strategy=self.name,
            group_order=placed.group_order,
            warnings=warnings,
        )

    # =========================================================================
    # HELPER METHODS (Available to all strategies)
    # =========================================================================

    def is_manual(self, element: Element) -> bool:
        """Whether an element keeps its input position verbatim."""
        return element.position is not None

    def default_size(self, element: Element, config: LayoutConfig) -> Tuple[float, float]:
        """Size used for elements this strategy does not size itself."""
        sizing = config.sizing
        return element.resolve_size(config, (sizing.node_width, sizing.node_height))

    def manual_position(self, element: Element, config: LayoutConfig) -> ElementPosition:
        width, height = self.default_size(element, config)
        return ElementPosition(
            element_id=element.id,
            x=element.position.x,
            y=element.position.y,
            width=width,
            height=height,
            parent_id=element.parent_id,
            manual=True,
        )

    def canvas_size(self, bounds: Bounds, config: LayoutConfig) -> CanvasSize:
        """
        Canvas covering the origin and every rectangle, never smaller than
        the configured minimum, plus padding.
        """
        canvas = config.canvas
        extent_x = bounds.max_x - min(bounds.min_x, 0.0)
        extent_y = bounds.max_y - min(bounds.min_y, 0.0)
        return CanvasSize(
            width=max(extent_x, canvas.min_width) + canvas.padding,
            height=max(extent_y, canvas.min_height) + canvas.padding,
        )

    def child_block(
        self,
        children: Sequence[Element],
        config: LayoutConfig,
        arrangement: str,
    ) -> ChildBlock:
        """
        Lay children out as a row, a column or a compact cluster.

        Args:
            children: Children to arrange, in declaration order
            config: Layout configuration (child size and sibling gaps)
            arrangement: "row" or "column"; anything else clusters
        """
        if not children:
            return ChildBlock()

        spacing = config.spacing
        child_size = config.sizing.child_size
        sizes = [
            c.resolve_size(config, (child_size, child_size), use_type_defaults=False)
            for c in children
        ]

        if arrangement == "row":
            columns = len(children)
        elif arrangement == "column":
            columns = 1
        else:
            columns = math.ceil(math.sqrt(len(children)))

        rows = math.ceil(len(children) / columns)
        col_widths = [0.0] * columns
        row_heights = [0.0] * rows
        for i, (width, height) in enumerate(sizes):
            col_widths[i % columns] = max(col_widths[i % columns], width)
            row_heights[i // columns] = max(row_heights[i // columns], height)

        gap_x = spacing.child_sibling_gap_horizontal
        gap_y = spacing.child_sibling_gap_vertical
        block_width = sum(col_widths) + gap_x * (columns - 1)
        block_height = sum(row_heights) + gap_y * (rows - 1)

        offsets = []
        for i, (child, (width, height)) in enumerate(zip(children, sizes)):
            col, row = i % columns, i // columns
            cell_x = sum(col_widths[:col]) + gap_x * col
            cell_y = sum(row_heights[:row]) + gap_y * row
            # Centre each child in its cell
            dx = cell_x + (col_widths[col] - width) / 2
            dy = cell_y + (row_heights[row] - height) / 2
            offsets.append((child.id, dx, dy, width, height))

        return ChildBlock(offsets=offsets, width=block_width, height=block_height)


# =============================================================================
# RING STRATEGIES
# =============================================================================

@dataclass
class RingPlan:
    """Core, rings and child lists shared by the three ring strategies."""
    core: Optional[Element] = None
    rings: List[Tuple[int, List[Element]]] = field(default_factory=list)
    descendants: Dict[str, List[Element]] = field(default_factory=dict)
    manual_satellites: List[Element] = field(default_factory=list)

    @property
    def satellite_count(self) -> int:
        return sum(len(members) for _, members in self.rings)


class RingLayoutStrategy(BaseLayoutStrategy):
    """
    Base for strategies that radiate from a core element.

    Satellites are top-level elements (or direct children of the core);
    everything nested below a satellite travels with it as its children.
    """

    # Child arrangement per child_layout mode
    child_arrangements: Dict[str, str] = {
        "nested": "row",
        "expanded": "row",
        "clustered": "cluster",
    }

    def plan_rings(self, graph: DiagramGraph) -> RingPlan:
        """Split the graph into core, ring members and per-satellite children."""
        core = graph.resolve_core()
        core_id = core.id if core else None

        rings: Dict[int, List[Element]] = {}
        descendants: Dict[str, List[Element]] = {}
        manual_satellites: List[Element] = []

        for element in graph.elements:
            if element.id == core_id:
                continue
            if element.parent_id is not None and element.parent_id != core_id:
                continue

            nested = [
                d for d in graph.descendants_of(element.id, stop_at=core_id)
                if not self.is_manual(d)
            ]
            descendants[element.id] = nested

            if self.is_manual(element):
                manual_satellites.append(element)
                continue

            ring = element.ring if element.ring else 1
            rings.setdefault(ring, []).append(element)

        return RingPlan(
            core=core,
            rings=sorted(rings.items()),
            descendants=descendants,
            manual_satellites=manual_satellites,
        )

    def core_size(self, core: Element, config: LayoutConfig) -> Tuple[float, float]:
        size = config.sizing.core_size
        return core.resolve_size(config, (size, size), use_type_defaults=False)

    def satellite_size(self, element: Element, config: LayoutConfig) -> Tuple[float, float]:
        size = config.sizing.element_size
        return element.resolve_size(config, (size, size), use_type_defaults=False)

    def default_size(self, element: Element, config: LayoutConfig) -> Tuple[float, float]:
        if element.parent_id is not None:
            size = config.sizing.child_size
            return element.resolve_size(config, (size, size), use_type_defaults=False)
        return self.satellite_size(element, config)

    def arrangement_for(self, config: LayoutConfig) -> str:
        return self.child_arrangements[config.child_layout]

    def core_position(
        self,
        core: Element,
        config: LayoutConfig,
        x: float,
        y: float,
    ) -> ElementPosition:
        """Core rectangle at (x, y), or at its manual position when pinned."""
        width, height = self.core_size(core, config)
        if self.is_manual(core):
            return ElementPosition(
                element_id=core.id,
                x=core.position.x,
                y=core.position.y,
                width=width,
                height=height,
                parent_id=core.parent_id,
                manual=True,
            )
        return ElementPosition(element_id=core.id, x=x, y=y, width=width, height=height)

    def place_manual_children(
        self,
        plan: RingPlan,
        config: LayoutConfig,
        positions: Dict[str, ElementPosition],
    ) -> None:
        """Children of manually placed satellites go in a block beneath them."""
        for satellite in plan.manual_satellites:
            children = plan.descendants.get(satellite.id, [])
            if not children:
                continue
            parent = self.manual_position(satellite, config)
            block = self.child_block(children, config, self.arrangement_for(config))
            top = parent.bottom_edge + config.spacing.child_gap_vertical
            left = parent.center_x - block.width / 2
            for pos in block.place(left, top, {c.id: c.parent_id for c in children}):
                positions[pos.element_id] = pos
