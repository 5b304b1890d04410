"""
group_order.py — Left-to-right ordering of groups from edge flow.

Cross-group edges are reduced to a group dependency graph and sorted with
Kahn's algorithm. Ordering is best-effort: groups caught in a cycle are
appended in declaration order instead of raising.
"""

from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence

from .data_models import DependencyEdge, Element, Group


@dataclass
class GroupOrder:
    """Resolved group sequence."""
    order: List[str] = field(default_factory=list)
    unresolved: List[str] = field(default_factory=list)  # Left over by a cycle

    @property
    def has_cycle(self) -> bool:
        return bool(self.unresolved)


def group_dependency_pairs(
    groups: Sequence[Group],
    elements: Iterable[Element],
    edges: Iterable[DependencyEdge],
) -> List[tuple]:
    """
    Map element edges to distinct (source group, target group) pairs.

    Edges inside one group, or touching an element with no declared group,
    are dropped. Pairs keep first-seen order.
    """
    declared = {g.id for g in groups}
    element_group = {e.id: e.group for e in elements if e.group in declared}

    pairs: List[tuple] = []
    seen = set()
    for edge in edges:
        source_group = element_group.get(edge.source)
        target_group = element_group.get(edge.target)
        if source_group is None or target_group is None:
            continue
        if source_group == target_group:
            continue
        pair = (source_group, target_group)
        if pair not in seen:
            seen.add(pair)
            pairs.append(pair)
    return pairs


def resolve_group_order(
    groups: Sequence[Group],
    elements: Iterable[Element],
    edges: Iterable[DependencyEdge],
) -> GroupOrder:
    """
    Topologically order groups.

    Args:
        groups: Declared groups (declaration order breaks ties)
        elements: Elements carrying group assignments
        edges: Element-level dependency edges

    Returns:
        GroupOrder with every declared group exactly once
    """
    group_ids = list(dict.fromkeys(g.id for g in groups))
    pairs = group_dependency_pairs(groups, elements, edges)

    in_degree: Dict[str, int] = {gid: 0 for gid in group_ids}
    out_edges: Dict[str, List[str]] = {gid: [] for gid in group_ids}
    for source, target in pairs:
        out_edges[source].append(target)
        in_degree[target] += 1

    connected = {gid for pair in pairs for gid in pair}

    queue = deque(gid for gid in group_ids if gid in connected and in_degree[gid] == 0)
    order: List[str] = []
    while queue:
        current = queue.popleft()
        order.append(current)
        # Release targets in declaration order so simultaneous readiness is stable
        for target in sorted(out_edges[current], key=group_ids.index):
            in_degree[target] -= 1
            if in_degree[target] == 0:
                queue.append(target)

    placed = set(order)

    # Groups untouched by any cross-group edge
    for gid in group_ids:
        if gid not in connected:
            order.append(gid)
            placed.add(gid)

    unresolved = [gid for gid in group_ids if gid not in placed]
    order.extend(unresolved)

    return GroupOrder(order=order, unresolved=unresolved)
