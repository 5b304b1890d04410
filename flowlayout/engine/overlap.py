"""
overlap.py — Overlap detection and nudging over computed positions.
"""

import logging
from dataclasses import replace
from typing import Dict, Iterable, List, Tuple

from .positioned import ElementPosition

logger = logging.getLogger(__name__)


def find_overlaps(
    positions: Iterable[ElementPosition],
    padding: float = 0.0,
    include_nested: bool = False,
) -> List[Tuple[str, str]]:
    """
    Find all overlapping element pairs (AABB test).

    Args:
        positions: Rectangles to check, pairs reported in input order
        padding: Extra clearance required around every rectangle
        include_nested: If False, a child overlapping its own parent is
            not reported (nested orbits overlap their parent)

    Returns:
        List of (first_id, second_id) pairs
    """
    items = list(positions)
    overlaps: List[Tuple[str, str]] = []

    for i, a in enumerate(items):
        for b in items[i + 1:]:
            if not include_nested and (a.parent_id == b.element_id or b.parent_id == a.element_id):
                continue
            if a.overlaps(b, padding):
                overlaps.append((a.element_id, b.element_id))

    return overlaps


def overlap_amount(a: ElementPosition, b: ElementPosition, padding: float = 0.0) -> Tuple[float, float]:
    """Intersection width and height of two padded rectangles (0 when apart)."""
    overlap_x = min(a.right_edge, b.right_edge) - max(a.x, b.x) + 2 * padding
    overlap_y = min(a.bottom_edge, b.bottom_edge) - max(a.y, b.y) + 2 * padding
    return (max(0.0, overlap_x), max(0.0, overlap_y))


def resolve_overlaps(
    positions: Iterable[ElementPosition],
    padding: float = 10.0,
    max_iterations: int = 10,
    include_nested: bool = False,
) -> Dict[str, ElementPosition]:
    """
    Nudge overlapping rectangles apart.

    Each overlapping pair is pushed away along the direction between their
    centres, by half the overlap plus one pixel per axis for each side.
    Manual positions never move: when one side of a pair is manual, the
    other side takes the whole push. Pairs where both sides are manual are
    left as they are.

    Args:
        positions: Rectangles to separate, in priority order
        padding: Clearance kept between rectangles after nudging
        max_iterations: Upper bound on full passes over all pairs
        include_nested: If False, children may keep overlapping their parent

    Returns:
        New positions keyed by element id, in input order; inputs are not
        modified
    """
    current: Dict[str, ElementPosition] = {p.element_id: p for p in positions}
    ids = list(current)
    half = padding / 2

    for iteration in range(max_iterations):
        moved = False
        for i, a_id in enumerate(ids):
            for b_id in ids[i + 1:]:
                a, b = current[a_id], current[b_id]
                if not include_nested and (a.parent_id == b_id or b.parent_id == a_id):
                    continue
                if a.manual and b.manual:
                    continue
                if not a.overlaps(b, half):
                    continue

                overlap_x, overlap_y = overlap_amount(a, b, half)
                dx = b.center_x - a.center_x
                dy = b.center_y - a.center_y
                push_x = (1 if dx >= 0 else -1) * (overlap_x / 2 + 1) if overlap_x > 0 else 0.0
                push_y = (1 if dy >= 0 else -1) * (overlap_y / 2 + 1) if overlap_y > 0 else 0.0

                if a.manual:
                    current[b_id] = replace(b, x=b.x + 2 * push_x, y=b.y + 2 * push_y)
                elif b.manual:
                    current[a_id] = replace(a, x=a.x - 2 * push_x, y=a.y - 2 * push_y)
                else:
                    current[a_id] = replace(a, x=a.x - push_x, y=a.y - push_y)
                    current[b_id] = replace(b, x=b.x + push_x, y=b.y + push_y)
                moved = True

        if not moved:
            logger.debug(f"Overlaps resolved after {iteration} nudge passes")
            break

    return current
