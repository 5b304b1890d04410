"""
radial_strategy.py — Concentric ring layout strategy.

Used for: deployment views, context maps, anything with a focal core.
Pattern: Core at the origin, satellites on rings, children orbiting their
parent inside a narrow angular window.
"""

import math
from typing import Dict, List, Tuple

from .base_strategy import RingLayoutStrategy, StrategyResult
from ..config import LayoutConfig
from ..data_models import DiagramGraph
from ..positioned import ElementPosition


def radial_positions(
    count: int,
    radius: float,
    center_x: float = 0.0,
    center_y: float = 0.0,
    start_angle: float = -90.0,
    spread: float = 360.0,
) -> List[Tuple[float, float]]:
    """
    Spread points evenly over an arc.

    A single point always sits at start_angle, so the step never divides
    by a count of one or zero.

    Args:
        count: Number of points
        radius: Distance from the centre
        center_x: Centre x
        center_y: Centre y
        start_angle: Angle of the first point in degrees (-90 is up)
        spread: Arc covered by the points in degrees

    Returns:
        List of (x, y) point centres
    """
    if count <= 0:
        return []
    if count == 1:
        angles = [start_angle]
    else:
        angle_step = spread / count
        angles = [start_angle + i * angle_step for i in range(count)]

    positions = []
    for angle_deg in angles:
        angle_rad = math.radians(angle_deg)
        positions.append((
            center_x + radius * math.cos(angle_rad),
            center_y + radius * math.sin(angle_rad),
        ))
    return positions


def orbit_positions(
    count: int,
    radius: float,
    center_x: float,
    center_y: float,
    center_angle: float,
    window: float,
) -> List[Tuple[float, float]]:
    """Spread points over a window centred on center_angle."""
    if count <= 0:
        return []
    step = window / count
    start = center_angle - window / 2 + step / 2
    return radial_positions(count, radius, center_x, center_y, start, window)


class RadialStrategy(RingLayoutStrategy):
    """
    Radial layout strategy for core-and-satellite diagrams.

    Key features:
    - Ring radius grows linearly with ring number
    - Configurable start angle and arc spread
    - Children orbit their parent, facing away from the core
    """

    name = "radial"

    child_arrangements = {
        "nested": "orbit",
        "expanded": "row",
        "clustered": "cluster",
    }

    def place(self, graph: DiagramGraph, config: LayoutConfig) -> StrategyResult:
        """Compute positions for radial layout."""
        plan = self.plan_rings(graph)
        if plan.core is None:
            return StrategyResult(warnings=["No elements to layout"])

        radial = config.radial
        positions: Dict[str, ElementPosition] = {}

        core_w, core_h = self.core_size(plan.core, config)
        core = self.core_position(plan.core, config, -core_w / 2, -core_h / 2)
        positions[plan.core.id] = core
        # Rings follow a pinned core
        center_x, center_y = core.center

        for ring, members in plan.rings:
            radius = radial.base_radius + (ring - 1) * radial.ring_spacing
            points = radial_positions(
                len(members),
                radius,
                center_x,
                center_y,
                start_angle=radial.start_angle,
                spread=radial.arc_spread,
            )

            for element, (px, py) in zip(members, points):
                width, height = self.satellite_size(element, config)
                satellite = ElementPosition(
                    element_id=element.id,
                    x=px - width / 2,
                    y=py - height / 2,
                    width=width,
                    height=height,
                    parent_id=element.parent_id,
                )
                positions[element.id] = satellite

                children = plan.descendants.get(element.id, [])
                if children:
                    outward = math.degrees(math.atan2(py - center_y, px - center_x))
                    for pos in self._place_children(children, satellite, outward, config):
                        positions[pos.element_id] = pos

        self.place_manual_children(plan, config, positions)

        return StrategyResult(positions=positions)

    def _place_children(
        self,
        children,
        parent: ElementPosition,
        outward_angle: float,
        config: LayoutConfig,
    ) -> List[ElementPosition]:
        parent_ids = {c.id: c.parent_id for c in children}
        arrangement = self.arrangement_for(config)

        if arrangement != "orbit":
            block = self.child_block(children, config, arrangement)
            top = parent.bottom_edge + config.spacing.child_gap_vertical
            left = parent.center_x - block.width / 2
            return block.place(left, top, parent_ids)

        radial = config.radial
        points = orbit_positions(
            len(children),
            radial.child_orbit_radius,
            parent.center_x,
            parent.center_y,
            outward_angle,
            radial.child_arc_spread,
        )

        placed = []
        child_size = config.sizing.child_size
        for child, (cx, cy) in zip(children, points):
            width, height = child.resolve_size(
                config, (child_size, child_size), use_type_defaults=False
            )
            placed.append(ElementPosition(
                element_id=child.id,
                x=cx - width / 2,
                y=cy - height / 2,
                width=width,
                height=height,
                parent_id=parent_ids[child.id],
            ))
        return placed
