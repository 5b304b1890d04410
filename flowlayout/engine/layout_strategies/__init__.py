"""
layout_strategies — Pluggable whole-diagram placement strategies.

This package contains the layout strategies selected by LayoutConfig.strategy:

- RadialStrategy: Core at the centre, satellites on concentric rings
- HierarchicalStrategy: Core on top, one row per ring
- LayeredStrategy: Core on the left, one column per ring
- GridStrategy: Adaptive grid fallback for unstructured diagrams
- GroupedStrategy: Ordered group columns with a ranked layout inside each

Each strategy implements the BaseLayoutStrategy interface and is looked up
by name in STRATEGIES.
"""

from .base_strategy import BaseLayoutStrategy, RingLayoutStrategy, StrategyResult, ChildBlock
from .radial_strategy import RadialStrategy, radial_positions, orbit_positions
from .hierarchical_strategy import HierarchicalStrategy
from .layered_strategy import LayeredStrategy
from .grid_strategy import GridStrategy
from .grouped_strategy import GroupedStrategy
from ..errors import UnknownStrategyError

__all__ = [
    'BaseLayoutStrategy',
    'RingLayoutStrategy',
    'StrategyResult',
    'ChildBlock',
    'RadialStrategy',
    'HierarchicalStrategy',
    'LayeredStrategy',
    'GridStrategy',
    'GroupedStrategy',
    'radial_positions',
    'orbit_positions',
    'get_strategy',
    'STRATEGIES',
]


# Strategy registry for lookup by name
STRATEGIES = {
    'radial': RadialStrategy,
    'hierarchical': HierarchicalStrategy,
    'layered': LayeredStrategy,
    'grid': GridStrategy,
    'grouped': GroupedStrategy,
}


def get_strategy(strategy_name: str) -> BaseLayoutStrategy:
    """Get a strategy instance by name."""
    strategy_class = STRATEGIES.get(strategy_name.lower()) if isinstance(strategy_name, str) else None
    if not strategy_class:
        raise UnknownStrategyError(strategy_name, STRATEGIES.keys())
    return strategy_class()
