"""
intra_group.py — Layered placement of the elements inside one group.

A small Sugiyama-style pipeline:

1. Cycle removal (DFS back edges dropped, declaration order)
2. Rank assignment (longest path from a source)
3. Crossing reduction (barycenter sweeps)
4. Coordinate assignment (rank bands on y, within-rank index on x)

Elements with a named ``layer`` are pinned to that layer's band instead of
their rank band.
"""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Sequence, Tuple

from .config import LayoutConfig
from .data_models import DependencyEdge, Element
from .positioned import ElementPosition

logger = logging.getLogger(__name__)


@dataclass
class IntraGroupResult:
    """Placement of one group's elements."""
    positions: Dict[str, ElementPosition] = field(default_factory=dict)
    ranks: Dict[str, int] = field(default_factory=dict)
    rank_order: Dict[int, List[str]] = field(default_factory=dict)
    width: float = 0.0
    height: float = 0.0


class IntraGroupLayout:
    """
    Rank-based layout of a single group.

    Key features:
    - Deterministic: every tie breaks on declaration order
    - Cyclic intra-group edges are tolerated (back edges ignored)
    - Layer pinning that never stacks two elements on the same spot
    """

    def __init__(self, config: LayoutConfig):
        self.config = config

    def compute(
        self,
        elements: Sequence[Element],
        edges: Iterable[DependencyEdge],
        origin_x: float = 0.0,
        origin_y: float = 0.0,
    ) -> IntraGroupResult:
        """
        Place elements of one group relative to the given origin.

        Args:
            elements: Group members to place, in declaration order
            edges: Any edges; only those between members are used
            origin_x: Left edge of the group column
            origin_y: Top edge of the group column

        Returns:
            IntraGroupResult with absolute positions
        """
        if not elements:
            return IntraGroupResult()

        ids = [e.id for e in elements]
        successors = self._intra_edges(ids, edges)
        successors = self.remove_cycles(ids, successors)

        ranks = self.assign_ranks(ids, successors)
        rank_order = self.order_within_ranks(ids, successors, ranks)

        positions, width, height = self._assign_coordinates(
            elements, ranks, rank_order, origin_x, origin_y
        )

        logger.debug(
            f"Intra-group layout: {len(ids)} elements, {len(rank_order)} ranks"
        )

        return IntraGroupResult(
            positions=positions,
            ranks=ranks,
            rank_order=rank_order,
            width=width,
            height=height,
        )

    # =========================================================================
    # GRAPH PREPARATION
    # =========================================================================

    def _intra_edges(
        self,
        ids: List[str],
        edges: Iterable[DependencyEdge],
    ) -> Dict[str, List[str]]:
        """Successor lists restricted to members, deduplicated, no self loops."""
        members = set(ids)
        successors: Dict[str, List[str]] = {node: [] for node in ids}
        for edge in edges:
            if edge.source not in members or edge.target not in members:
                continue
            if edge.source == edge.target:
                continue
            if edge.target not in successors[edge.source]:
                successors[edge.source].append(edge.target)
        return successors

    def remove_cycles(
        self,
        ids: List[str],
        successors: Dict[str, List[str]],
    ) -> Dict[str, List[str]]:
        """Drop DFS back edges so the remaining graph is acyclic."""
        state: Dict[str, int] = {node: 0 for node in ids}  # 0 new, 1 on stack, 2 done
        acyclic: Dict[str, List[str]] = {node: [] for node in ids}

        for root in ids:
            if state[root]:
                continue
            stack: List[Tuple[str, int]] = [(root, 0)]
            state[root] = 1
            while stack:
                node, next_index = stack[-1]
                targets = successors[node]
                if next_index >= len(targets):
                    state[node] = 2
                    stack.pop()
                    continue
                stack[-1] = (node, next_index + 1)
                target = targets[next_index]
                if state[target] == 1:
                    logger.debug(f"Ignoring back edge {node} -> {target}")
                    continue
                acyclic[node].append(target)
                if state[target] == 0:
                    state[target] = 1
                    stack.append((target, 0))

        return acyclic

    def assign_ranks(
        self,
        ids: List[str],
        successors: Dict[str, List[str]],
    ) -> Dict[str, int]:
        """Longest-path ranking; sources get rank 0."""
        in_degree = {node: 0 for node in ids}
        for node in ids:
            for target in successors[node]:
                in_degree[target] += 1

        ranks = {node: 0 for node in ids}
        queue = deque(node for node in ids if in_degree[node] == 0)
        while queue:
            node = queue.popleft()
            for target in successors[node]:
                ranks[target] = max(ranks[target], ranks[node] + 1)
                in_degree[target] -= 1
                if in_degree[target] == 0:
                    queue.append(target)
        return ranks

    # =========================================================================
    # CROSSING REDUCTION
    # =========================================================================

    def order_within_ranks(
        self,
        ids: List[str],
        successors: Dict[str, List[str]],
        ranks: Dict[str, int],
    ) -> Dict[int, List[str]]:
        """
        Barycenter heuristic: alternate downward (by predecessors) and
        upward (by successors) sweeps.
        """
        predecessors: Dict[str, List[str]] = {node: [] for node in ids}
        for node in ids:
            for target in successors[node]:
                predecessors[target].append(node)

        max_rank = max(ranks.values())
        layers: Dict[int, List[str]] = {r: [] for r in range(max_rank + 1)}
        for node in ids:
            layers[ranks[node]].append(node)

        for sweep in range(self.config.groups.crossing_sweeps):
            if sweep % 2 == 0:
                for r in range(1, max_rank + 1):
                    layers[r] = self._barycenter_sort(layers[r], predecessors, layers)
            else:
                for r in range(max_rank - 1, -1, -1):
                    layers[r] = self._barycenter_sort(layers[r], successors, layers)

        return {r: nodes for r, nodes in layers.items() if nodes}

    def _barycenter_sort(
        self,
        layer: List[str],
        neighbours: Dict[str, List[str]],
        layers: Dict[int, List[str]],
    ) -> List[str]:
        index_of: Dict[str, int] = {}
        for nodes in layers.values():
            for i, node in enumerate(nodes):
                index_of[node] = i

        def key(item: Tuple[int, str]) -> Tuple[float, int]:
            current_index, node = item
            linked = neighbours[node]
            if not linked:
                return (float(current_index), current_index)
            barycenter = sum(index_of[n] for n in linked) / len(linked)
            return (barycenter, current_index)

        return [node for _, node in sorted(enumerate(layer), key=key)]

    # =========================================================================
    # COORDINATES
    # =========================================================================

    def _assign_coordinates(
        self,
        elements: Sequence[Element],
        ranks: Dict[str, int],
        rank_order: Dict[int, List[str]],
        origin_x: float,
        origin_y: float,
    ) -> Tuple[Dict[str, ElementPosition], float, float]:
        groups = self.config.groups
        sizing = self.config.sizing
        by_id = {e.id: e for e in elements}

        order_key: Dict[str, Tuple[int, int]] = {}
        for r, nodes in rank_order.items():
            for i, node in enumerate(nodes):
                order_key[node] = (r, i)

        boxes: List[Tuple[float, Tuple[int, int], str, float, float]] = []
        for element in elements:
            width, height = element.resolve_size(
                self.config, (sizing.node_width, sizing.node_height)
            )
            if element.layer is not None and element.layer in groups.layer_bands:
                y = origin_y + groups.layer_bands[element.layer]
            else:
                y = origin_y + ranks[element.id] * groups.band_height + groups.rank_margin
            boxes.append((y, order_key[element.id], element.id, width, height))

        boxes.sort(key=lambda b: (b[0], b[1]))

        # Rows: elements whose vertical extents touch share one x sequence
        rows: List[List[Tuple[float, Tuple[int, int], str, float, float]]] = []
        row_bottom = float("-inf")
        for box in boxes:
            y, _, _, _, height = box
            if rows and y < row_bottom:
                rows[-1].append(box)
                row_bottom = max(row_bottom, y + height)
            else:
                rows.append([box])
                row_bottom = y + height

        positions: Dict[str, ElementPosition] = {}
        max_right = origin_x
        max_bottom = origin_y
        for row in rows:
            x = origin_x + groups.rank_margin
            for y, _, element_id, width, height in sorted(row, key=lambda b: b[1]):
                positions[element_id] = ElementPosition(
                    element_id=element_id,
                    x=x,
                    y=y,
                    width=width,
                    height=height,
                    parent_id=by_id[element_id].parent_id,
                )
                x += width + groups.node_gap
                max_right = max(max_right, x - groups.node_gap)
                max_bottom = max(max_bottom, y + height)

        ordered = {e.id: positions[e.id] for e in elements}
        width = max_right - origin_x + groups.rank_margin
        height = max_bottom - origin_y + groups.rank_margin
        return ordered, width, height
