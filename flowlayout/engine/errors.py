"""
errors.py — Exceptions raised by the layout engine.

The engine degrades gracefully on ordinary missing data (cyclic group order,
empty groups, unsized elements). Only a broken input contract raises.
"""


class LayoutError(Exception):
    """Base class for all layout engine errors."""


class InvalidGraphError(LayoutError):
    """The element graph violates its reference contract."""


class UnknownParentError(InvalidGraphError):
    """An element references a parent id that does not exist."""

    def __init__(self, element_id: str, parent_id: str):
        self.element_id = element_id
        self.parent_id = parent_id
        super().__init__(
            f"Element '{element_id}' references unknown parent '{parent_id}'"
        )


class ParentCycleError(InvalidGraphError):
    """Parent links form a cycle (including an element parenting itself)."""

    def __init__(self, chain):
        self.chain = list(chain)
        super().__init__(f"Parent cycle detected: {' -> '.join(self.chain)}")


class UnknownElementError(InvalidGraphError):
    """A graph-level reference (e.g. core_id) names a missing element."""

    def __init__(self, element_id: str, role: str = "element"):
        self.element_id = element_id
        super().__init__(f"Unknown {role} id: '{element_id}'")


class UnknownStrategyError(LayoutError, ValueError):
    """Strategy identifier outside the known set."""

    def __init__(self, name, available):
        self.name = name
        self.available = list(available)
        super().__init__(f"Unknown strategy: {name}. Available: {self.available}")


class InvalidConfigError(LayoutError, ValueError):
    """Configuration overrides failed validation."""
