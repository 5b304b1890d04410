"""
config.py — Immutable layout configuration.

Every numeric constant the strategies use lives here. A LayoutConfig is
passed explicitly into every layout call; nothing reads module globals.

All distances are in canvas pixels. Angles are in degrees, 0° pointing
right and -90° pointing up (screen coordinates, y grows downward).
"""

from functools import lru_cache
from typing import Any, Dict, Literal, Mapping, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from .errors import InvalidConfigError


StrategyName = Literal["radial", "hierarchical", "layered", "grid", "grouped"]
ChildLayout = Literal["nested", "expanded", "clustered"]
SizePreset = Literal["xs", "s", "m", "l", "xl"]


# =============================================================================
# SECTIONS
# =============================================================================

class SizeSpec(BaseModel):
    """Width and height of a size preset."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    width: float = Field(gt=0)
    height: float = Field(gt=0)


def _default_presets() -> Dict[str, SizeSpec]:
    return {
        "xs": SizeSpec(width=96, height=40),
        "s": SizeSpec(width=144, height=48),
        "m": SizeSpec(width=192, height=56),
        "l": SizeSpec(width=240, height=64),
        "xl": SizeSpec(width=320, height=80),
    }


def _default_type_presets() -> Dict[str, str]:
    return {
        "actor": "m",
        "action": "m",
        "system": "l",
        "event": "m",
        "decision": "m",
        "state": "m",
        "start": "xs",
        "end": "xs",
    }


class SizingConfig(BaseModel):
    """Element and core dimensions."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    core_size: float = Field(default=120, gt=0, description="Square size of the core element")
    element_size: float = Field(default=80, gt=0, description="Square size of ring satellites")
    child_size: float = Field(default=50, gt=0, description="Square size of nested children")
    node_width: float = Field(default=140, gt=0, description="Grouped/grid element width")
    node_height: float = Field(default=50, gt=0, description="Grouped/grid element height")
    presets: Dict[str, SizeSpec] = Field(default_factory=_default_presets)
    type_presets: Dict[str, str] = Field(default_factory=_default_type_presets)


class SpacingConfig(BaseModel):
    """Gaps used by the ring strategies."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    horizontal: float = Field(default=160, ge=0)
    vertical: float = Field(default=120, ge=0)
    child_gap_vertical: float = Field(default=40, ge=0, description="Parent bottom to child row")
    child_gap_horizontal: float = Field(default=30, ge=0, description="Parent right to child column")
    child_sibling_gap_horizontal: float = Field(default=20, ge=0)
    child_sibling_gap_vertical: float = Field(default=10, ge=0)


class RadialConfig(BaseModel):
    """Ring geometry for the radial strategy."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    base_radius: float = Field(default=180, gt=0)
    ring_spacing: float = Field(default=140, ge=0)
    start_angle: float = Field(default=-90.0, description="Degrees; -90 points up")
    arc_spread: float = Field(default=360.0, gt=0, le=360)
    child_orbit_radius: float = Field(default=60, gt=0)
    child_arc_spread: float = Field(default=120.0, gt=0, le=360)


def _default_layer_bands() -> Dict[str, float]:
    return {
        "orchestration": 80,
        "domain": 260,
        "infrastructure": 440,
    }


class GroupConfig(BaseModel):
    """Grouped (context column) layout constants."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    column_min_width: float = Field(default=320, gt=0)
    node_gap: float = Field(default=60, ge=0)
    band_height: float = Field(default=90, gt=0, description="Vertical distance between ranks")
    rank_margin: float = Field(default=20, ge=0)
    region_padding: float = Field(default=30, ge=0)
    group_gap: float = Field(default=60, ge=0)
    margin: float = Field(default=40, ge=0, description="Offset of the first column and of every column top")
    external_gap: float = Field(default=40, ge=0, description="Vertical gap between ungrouped elements")
    crossing_sweeps: int = Field(default=4, ge=0)
    layer_bands: Dict[str, float] = Field(default_factory=_default_layer_bands)
    default_color: str = "#9E9E9E"


def _default_type_priority() -> Dict[str, int]:
    return {
        "aggregate": 1, "entity": 1, "state": 1,
        "service": 2, "system": 2, "conductor": 2,
        "handler": 3, "action": 3, "orchestrator-step": 3,
        "event": 4,
        "bus": 5, "infrastructure": 5, "external": 5,
    }


class GridConfig(BaseModel):
    """Adaptive grid fallback constants."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    start_x: float = 150
    start_y: float = 120
    cell_width: float = Field(default=200, gt=0)
    cell_height: float = Field(default=70, gt=0)
    gap_x: float = Field(default=80, ge=0)
    gap_y: float = Field(default=100, ge=0)
    nodes_per_row: int = Field(default=5, ge=1)
    compact_threshold: int = Field(default=12, ge=0)
    layer_gap: float = Field(default=40, ge=0)
    layer_order: Tuple[str, ...] = ("orchestration", "domain", "infrastructure", "default")
    default_layer: str = "domain"
    type_priority: Dict[str, int] = Field(default_factory=_default_type_priority)
    unknown_priority: int = 10


class CanvasConfig(BaseModel):
    """Overall canvas sizing."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    padding: float = Field(default=60, ge=0)
    min_width: float = Field(default=800, ge=0)
    min_height: float = Field(default=600, ge=0)


class OverlapConfig(BaseModel):
    """Optional nudging of overlapping rectangles after placement."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    resolve: bool = Field(default=False, description="Nudge auto-placed elements off collisions")
    padding: float = Field(default=10, ge=0)
    max_iterations: int = Field(default=10, ge=1)


# =============================================================================
# LAYOUT CONFIG
# =============================================================================

class LayoutConfig(BaseModel):
    """
    Complete, immutable configuration for one layout call.

    Build with create_layout_config() rather than mutating; pydantic frozen
    models reject attribute assignment.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    strategy: Optional[StrategyName] = None
    child_layout: ChildLayout = "nested"
    sizing: SizingConfig = Field(default_factory=SizingConfig)
    spacing: SpacingConfig = Field(default_factory=SpacingConfig)
    radial: RadialConfig = Field(default_factory=RadialConfig)
    groups: GroupConfig = Field(default_factory=GroupConfig)
    grid: GridConfig = Field(default_factory=GridConfig)
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    overlap: OverlapConfig = Field(default_factory=OverlapConfig)

    def preset_size(self, preset: str) -> Optional[SizeSpec]:
        """Look up a named size preset."""
        return self.sizing.presets.get(preset)

    def type_default_size(self, element_type: str) -> Optional[SizeSpec]:
        """Size preset registered for an element type, if any."""
        preset = self.sizing.type_presets.get(element_type)
        if preset is None:
            return None
        return self.preset_size(preset)


def _deep_merge(base: Dict[str, Any], overrides: Mapping[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, Mapping):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def create_layout_config(
    overrides: Optional[Mapping[str, Any]] = None,
    **kwargs: Any,
) -> LayoutConfig:
    """
    Build a LayoutConfig from defaults plus nested overrides.

    Overrides are merged section by section, so
    ``create_layout_config({"radial": {"ring_spacing": 100}})`` keeps every
    other radial default.

    Raises:
        InvalidConfigError: If any merged value fails validation
    """
    data: Dict[str, Any] = LayoutConfig().model_dump()
    if overrides:
        data = _deep_merge(data, overrides)
    if kwargs:
        data = _deep_merge(data, kwargs)

    try:
        return LayoutConfig.model_validate(data)
    except ValidationError as e:
        raise InvalidConfigError(str(e)) from e


@lru_cache()
def default_config() -> LayoutConfig:
    """Get the cached default configuration."""
    return LayoutConfig()
