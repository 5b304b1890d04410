"""
region_bounds.py — Group bounding rectangles from final positions.
"""

from typing import Dict, Mapping, Optional, Sequence

from .config import LayoutConfig
from .data_models import DiagramGraph, Element, Group
from .positioned import ElementPosition, Region


def compute_region(
    group: Group,
    members: Sequence[Element],
    positions: Mapping[str, ElementPosition],
    padding: float,
    default_color: Optional[str] = None,
) -> Optional[Region]:
    """
    Compute the padded bounding box of a group's members.

    Returns None when no member has a position; an empty group never
    collapses to a degenerate point.
    """
    placed = [positions[m.id] for m in members if m.id in positions]
    if not placed:
        return None

    min_x = min(p.x for p in placed) - padding
    min_y = min(p.y for p in placed) - padding
    max_x = max(p.right_edge for p in placed) + padding
    max_y = max(p.bottom_edge for p in placed) + padding

    return Region(
        group_id=group.id,
        x=min_x,
        y=min_y,
        width=max_x - min_x,
        height=max_y - min_y,
        label=group.label,
        color=group.color if group.color is not None else default_color,
    )


def compute_regions(
    graph: DiagramGraph,
    positions: Mapping[str, ElementPosition],
    config: LayoutConfig,
) -> Dict[str, Region]:
    """Regions for every declared group that has at least one placed member."""
    regions: Dict[str, Region] = {}
    for group in graph.groups:
        region = compute_region(
            group,
            graph.members_of(group.id),
            positions,
            padding=config.groups.region_padding,
            default_color=config.groups.default_color,
        )
        if region is not None:
            regions[group.id] = region
    return regions
