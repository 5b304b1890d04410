"""
data_models.py — Input graph consumed by every layout strategy.

Elements form an arena keyed by id. Parent, group and core links are id
references, never embedded objects, so groups, rings and parents can all
point at the same element without ownership cycles.
"""

from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .config import LayoutConfig, SizePreset
from .errors import ParentCycleError, UnknownElementError, UnknownParentError


# =============================================================================
# ELEMENTS
# =============================================================================

class Point(BaseModel):
    """A manual canvas position (top-left corner)."""

    model_config = ConfigDict(frozen=True)

    x: float
    y: float

    @property
    def is_origin(self) -> bool:
        return self.x == 0 and self.y == 0


class Element(BaseModel):
    """A single diagram element."""

    model_config = ConfigDict(frozen=True)

    id: str
    type: str = "default"
    width: Optional[float] = Field(default=None, gt=0)
    height: Optional[float] = Field(default=None, gt=0)
    size: Optional[SizePreset] = None
    group: Optional[str] = None
    ring: Optional[int] = Field(default=None, ge=0, description="Distance tier; 0 marks the core")
    layer: Optional[str] = None  # Named band, e.g. "domain"
    parent_id: Optional[str] = None
    position: Optional[Point] = None  # Manual override, honoured verbatim
    metadata: Dict[str, Any] = Field(default_factory=dict)

    @property
    def has_manual_position(self) -> bool:
        return self.position is not None

    def resolve_size(
        self,
        config: LayoutConfig,
        fallback: Tuple[float, float],
        use_type_defaults: bool = True,
    ) -> Tuple[float, float]:
        """
        Resolve (width, height) for this element.

        Precedence per axis: explicit width/height, the element's size
        preset, the preset registered for its type, then the fallback.
        Ring strategies pass use_type_defaults=False so role sizes (core,
        satellite, child) win over type presets.
        """
        preset = None
        if self.size is not None:
            preset = config.preset_size(self.size)
        if preset is None and use_type_defaults:
            preset = config.type_default_size(self.type)

        base_w, base_h = (preset.width, preset.height) if preset else fallback
        width = self.width if self.width is not None else base_w
        height = self.height if self.height is not None else base_h
        return (width, height)


class Group(BaseModel):
    """A named context (swimlane). Label and colour pass through untouched."""

    model_config = ConfigDict(frozen=True)

    id: str
    label: Optional[str] = None
    color: Optional[str] = None
    metadata: Dict[str, Any] = Field(default_factory=dict)


class DependencyEdge(BaseModel):
    """Directed dependency between two elements."""

    model_config = ConfigDict(frozen=True)

    source: str
    target: str
    id: Optional[str] = None

    @property
    def edge_id(self) -> str:
        return self.id or f"{self.source}->{self.target}"


# =============================================================================
# GRAPH
# =============================================================================

class DiagramGraph(BaseModel):
    """
    Complete input for one layout call.

    Element order is significant: it is the declaration order used to break
    ties everywhere in the engine.
    """

    model_config = ConfigDict(frozen=True)

    elements: List[Element] = Field(default_factory=list)
    edges: List[DependencyEdge] = Field(default_factory=list)
    groups: List[Group] = Field(default_factory=list)
    core_id: Optional[str] = None

    def element_map(self) -> Dict[str, Element]:
        """Elements keyed by id, in declaration order."""
        return {e.id: e for e in self.elements}

    def get_element(self, element_id: str) -> Optional[Element]:
        for element in self.elements:
            if element.id == element_id:
                return element
        return None

    def children_of(self, element_id: str) -> List[Element]:
        """Direct children of an element, in declaration order."""
        return [e for e in self.elements if e.parent_id == element_id]

    def descendants_of(self, element_id: str, stop_at: Optional[str] = None) -> List[Element]:
        """
        All descendants, depth-first in declaration order.

        The element named by stop_at and its whole subtree are excluded.
        """
        result: List[Element] = []
        for child in self.children_of(element_id):
            if child.id == stop_at:
                continue
            result.append(child)
            result.extend(self.descendants_of(child.id, stop_at))
        return result

    def group_ids(self) -> List[str]:
        return [g.id for g in self.groups]

    def members_of(self, group_id: str) -> List[Element]:
        """Elements assigned to a group, in declaration order."""
        return [e for e in self.elements if e.group == group_id]

    def group_of(self, element_id: str) -> Optional[str]:
        element = self.get_element(element_id)
        return element.group if element else None

    def has_ring_metadata(self) -> bool:
        return any(e.ring is not None or e.parent_id is not None for e in self.elements)

    def resolve_core(self) -> Optional[Element]:
        """
        Find the focal element.

        Explicit core_id wins; otherwise the first element on ring 0, then
        the first top-level element.
        """
        if self.core_id is not None:
            core = self.get_element(self.core_id)
            if core is None:
                raise UnknownElementError(self.core_id, role="core")
            return core

        for element in self.elements:
            if element.ring == 0:
                return element
        for element in self.elements:
            if element.parent_id is None:
                return element
        return None

    def validate_references(self) -> None:
        """
        Fail fast on a broken reference contract.

        Raises:
            UnknownParentError: If a parent_id names a missing element
            ParentCycleError: If parent links loop back on themselves
            UnknownElementError: If core_id names a missing element
        """
        by_id = self.element_map()

        if self.core_id is not None and self.core_id not in by_id:
            raise UnknownElementError(self.core_id, role="core")

        for element in self.elements:
            if element.parent_id is not None and element.parent_id not in by_id:
                raise UnknownParentError(element.id, element.parent_id)

        for element in self.elements:
            chain = [element.id]
            seen = {element.id}
            current = element
            while current.parent_id is not None:
                chain.append(current.parent_id)
                if current.parent_id in seen:
                    raise ParentCycleError(chain)
                seen.add(current.parent_id)
                current = by_id[current.parent_id]
