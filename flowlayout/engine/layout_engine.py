"""
layout_engine.py — Layout orchestrator.

The engine coordinates one layout call:
1. Validates the graph's reference contract
2. Selects a strategy (explicit, configured, or inferred from metadata)
3. Runs the strategy, which returns a complete LayoutResult

Every call is independent. The engine holds only its immutable config, so
one instance can serve concurrent callers.
"""

import logging
from typing import List, Optional, Sequence

from .config import LayoutConfig, default_config
from .data_models import DiagramGraph, Element, Point
from .layout_strategies import get_strategy
from .positioned import LayoutResult

logger = logging.getLogger(__name__)


def select_strategy(graph: DiagramGraph, config: LayoutConfig, strategy: Optional[str] = None) -> str:
    """
    Pick the strategy name for a graph.

    Precedence: explicit argument, config.strategy, then inference: declared
    groups select "grouped", ring or parent metadata selects "radial",
    anything else falls back to "grid".
    """
    if strategy is not None:
        return strategy
    if config.strategy is not None:
        return config.strategy
    if graph.groups:
        return "grouped"
    if graph.has_ring_metadata():
        return "radial"
    return "grid"


def compute_layout(
    graph: DiagramGraph,
    config: Optional[LayoutConfig] = None,
    strategy: Optional[str] = None,
) -> LayoutResult:
    """
    Compute a fresh layout for a graph.

    Args:
        graph: Elements, edges and groups to lay out
        config: Layout configuration (defaults when omitted)
        strategy: Optional strategy name overriding config.strategy

    Returns:
        LayoutResult owned by the caller

    Raises:
        UnknownParentError: If an element names a missing parent
        ParentCycleError: If parent links form a cycle
        UnknownElementError: If core_id names a missing element
        UnknownStrategyError: If the strategy name is not registered
    """
    config = config or default_config()
    graph.validate_references()

    name = select_strategy(graph, config, strategy)
    layout_strategy = get_strategy(name)

    logger.debug(
        f"Computing {layout_strategy.name} layout: {len(graph.elements)} elements, "
        f"{len(graph.edges)} edges, {len(graph.groups)} groups"
    )

    known = {e.id for e in graph.elements}
    dangling = [edge.edge_id for edge in graph.edges if edge.source not in known or edge.target not in known]
    if dangling:
        logger.debug(f"Ignoring edges with unknown endpoints: {', '.join(dangling)}")

    return layout_strategy.compute(graph, config)


class LayoutEngine:
    """
    Convenience wrapper binding a configuration.

    Holds no per-call state; compute() is a pure function of its inputs.
    """

    def __init__(self, config: Optional[LayoutConfig] = None):
        self.config = config or default_config()

    def compute(self, graph: DiagramGraph, strategy: Optional[str] = None) -> LayoutResult:
        """Compute a layout with this engine's configuration."""
        return compute_layout(graph, self.config, strategy)


def apply_layout(elements: Sequence[Element], layout: LayoutResult) -> List[Element]:
    """
    Copy elements with their computed positions filled in.

    Elements missing from the layout are returned unchanged.
    """
    result = []
    for element in elements:
        position = layout.positions.get(element.id)
        if position is None:
            result.append(element)
        else:
            result.append(element.model_copy(update={"position": Point(x=position.x, y=position.y)}))
    return result
