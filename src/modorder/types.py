"""Core data types: ModuleRecord, DependencySpec, DependencyOrder, ResolvedModule."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple

__all__ = [
    "DependencyOrder",
    "DependencySpec",
    "ModuleRecord",
    "ResolvedModule",
]


class DependencyOrder(str, Enum):
    """Which side of a dependency has to load first.

    AFTER: the declaring module loads after its target (the usual case).
    BEFORE: the declaring module loads before its target.
    """

    AFTER = "after"
    BEFORE = "before"


@dataclass(frozen=True)
class DependencySpec:
    """One declared relationship from a module to another module.

    Attributes:
        target_id: Id of the module depended upon.
        version_constraint: Constraint expression the target's version must satisfy.
        optional: Whether a missing target is tolerated.
        order: Ordering direction between the declaring module and the target.
    """

    target_id: str
    version_constraint: str
    optional: bool = False
    order: DependencyOrder = DependencyOrder.AFTER


@dataclass(frozen=True)
class ModuleRecord:
    """Input descriptor for one module, as handed over by the loader."""

    module_id: str
    version: str
    source_label: str = ""
    dependencies: tuple[DependencySpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        # Accept any sequence but store an immutable tuple
        if not isinstance(self.dependencies, tuple):
            object.__setattr__(self, "dependencies", tuple(self.dependencies))


class ResolvedModule(NamedTuple):
    """One entry of a resolved load order."""

    module_id: str
    source_label: str
