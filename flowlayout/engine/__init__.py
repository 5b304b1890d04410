# FlowLayout Layout Engine

from .config import (
    LayoutConfig,
    SizingConfig,
    SpacingConfig,
    RadialConfig,
    GroupConfig,
    GridConfig,
    CanvasConfig,
    OverlapConfig,
    SizeSpec,
    create_layout_config,
    default_config,
)

from .data_models import (
    Point,
    Element,
    Group,
    DependencyEdge,
    DiagramGraph,
)

from .positioned import (
    ElementPosition,
    Region,
    Bounds,
    CanvasSize,
    LayoutResult,
)

from .errors import (
    LayoutError,
    InvalidGraphError,
    UnknownParentError,
    ParentCycleError,
    UnknownElementError,
    UnknownStrategyError,
    InvalidConfigError,
)

from .group_order import (
    GroupOrder,
    resolve_group_order,
)

from .intra_group import (
    IntraGroupLayout,
    IntraGroupResult,
)

from .region_bounds import (
    compute_region,
    compute_regions,
)

from .overlap import find_overlaps, resolve_overlaps

from .layout_strategies import (
    BaseLayoutStrategy,
    RadialStrategy,
    HierarchicalStrategy,
    LayeredStrategy,
    GridStrategy,
    GroupedStrategy,
    STRATEGIES,
    get_strategy,
)

from .layout_engine import (
    LayoutEngine,
    compute_layout,
    select_strategy,
    apply_layout,
)

__all__ = [
    # Configuration
    'LayoutConfig',
    'SizingConfig',
    'SpacingConfig',
    'RadialConfig',
    'GroupConfig',
    'GridConfig',
    'CanvasConfig',
    'OverlapConfig',
    'SizeSpec',
    'create_layout_config',
    'default_config',
    # Input graph
    'Point',
    'Element',
    'Group',
    'DependencyEdge',
    'DiagramGraph',
    # Results
    'ElementPosition',
    'Region',
    'Bounds',
    'CanvasSize',
    'LayoutResult',
    # Errors
    'LayoutError',
    'InvalidGraphError',
    'UnknownParentError',
    'ParentCycleError',
    'UnknownElementError',
    'UnknownStrategyError',
    'InvalidConfigError',
    # Components
    'GroupOrder',
    'resolve_group_order',
    'IntraGroupLayout',
    'IntraGroupResult',
    'compute_region',
    'compute_regions',
    'find_overlaps',
    'resolve_overlaps',
    # Strategies
    'BaseLayoutStrategy',
    'RadialStrategy',
    'HierarchicalStrategy',
    'LayeredStrategy',
    'GridStrategy',
    'GroupedStrategy',
    'STRATEGIES',
    'get_strategy',
    # Engine
    'LayoutEngine',
    'compute_layout',
    'select_strategy',
    'apply_layout',
]
