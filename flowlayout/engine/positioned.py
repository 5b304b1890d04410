"""
positioned.py — The contract between the layout engine and renderers.

The engine outputs LayoutResult objects. Renderers consume these; they
never compute positions themselves.

All coordinates are canvas pixels, (x, y) being the top-left corner.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Tuple


@dataclass
class ElementPosition:
    """Computed rectangle for a single element."""
    element_id: str
    x: float
    y: float
    width: float
    height: float
    parent_id: Optional[str] = None
    manual: bool = False                 # Copied verbatim from the input

    @property
    def center_x(self) -> float:
        return self.x + self.width / 2

    @property
    def center_y(self) -> float:
        return self.y + self.height / 2

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height

    @property
    def center(self) -> Tuple[float, float]:
        return (self.center_x, self.center_y)

    def contains(self, x: float, y: float) -> bool:
        """Check if a point lies inside (or on the edge of) this rectangle."""
        return self.x <= x <= self.right_edge and self.y <= y <= self.bottom_edge

    def overlaps(self, other: "ElementPosition", padding: float = 0.0) -> bool:
        """Axis-aligned overlap test, each box grown by padding."""
        return (
            self.x - padding < other.right_edge + padding and
            self.right_edge + padding > other.x - padding and
            self.y - padding < other.bottom_edge + padding and
            self.bottom_edge + padding > other.y - padding
        )


@dataclass
class Region:
    """Bounding rectangle of a group, used to draw swimlane outlines."""
    group_id: str
    x: float
    y: float
    width: float
    height: float
    label: Optional[str] = None
    color: Optional[str] = None

    @property
    def right_edge(self) -> float:
        return self.x + self.width

    @property
    def bottom_edge(self) -> float:
        return self.y + self.height

    def contains_rect(self, position: ElementPosition) -> bool:
        """Check if an element rectangle lies fully inside this region."""
        return (
            self.x <= position.x and
            self.y <= position.y and
            position.right_edge <= self.right_edge and
            position.bottom_edge <= self.bottom_edge
        )


@dataclass
class Bounds:
    """Extent of a set of rectangles."""
    min_x: float = 0.0
    min_y: float = 0.0
    max_x: float = 0.0
    max_y: float = 0.0

    @property
    def width(self) -> float:
        return self.max_x - self.min_x

    @property
    def height(self) -> float:
        return self.max_y - self.min_y

    @classmethod
    def of(cls, positions: Iterable[ElementPosition]) -> "Bounds":
        """Bounds of all given rectangles; zero bounds when empty."""
        positions = list(positions)
        if not positions:
            return cls()
        return cls(
            min_x=min(p.x for p in positions),
            min_y=min(p.y for p in positions),
            max_x=max(p.right_edge for p in positions),
            max_y=max(p.bottom_edge for p in positions),
        )


@dataclass
class CanvasSize:
    """Overall canvas size handed to the renderer."""
    width: float
    height: float


@dataclass
class LayoutResult:
    """
    Complete output of one layout call.

    The caller owns the result; the engine keeps no reference to it.
    Groups with no positioned members have no entry in ``regions``.
    """
    positions: Dict[str, ElementPosition] = field(default_factory=dict)
    regions: Dict[str, Region] = field(default_factory=dict)
    canvas: CanvasSize = field(default_factory=lambda: CanvasSize(0.0, 0.0))
    bounds: Bounds = field(default_factory=Bounds)
    strategy: str = ""
    group_order: List[str] = field(default_factory=list)

    # Warnings or notes from computation
    warnings: List[str] = field(default_factory=list)

    def get_position(self, element_id: str) -> Optional[ElementPosition]:
        return self.positions.get(element_id)

    def region_for(self, group_id: str) -> Optional[Region]:
        """Region of a group, or None when the group is absent (empty)."""
        return self.regions.get(group_id)

    def flatten(self) -> List[ElementPosition]:
        """All positions in insertion order."""
        return list(self.positions.values())
