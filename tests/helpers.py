"""Record-building helpers shared by the core tests."""

from __future__ import annotations

from modorder.types import DependencyOrder, DependencySpec, ModuleRecord


def dep(
    target_id: str,
    constraint: str = "0+",
    optional: bool = False,
    order: DependencyOrder = DependencyOrder.AFTER,
) -> DependencySpec:
    """Shorthand for building a DependencySpec."""
    return DependencySpec(
        target_id=target_id,
        version_constraint=constraint,
        optional=optional,
        order=order,
    )


def before(target_id: str, constraint: str = "0+") -> DependencySpec:
    """Shorthand for "load me before target_id"."""
    return dep(target_id, constraint, order=DependencyOrder.BEFORE)


def record(module_id: str, *deps: DependencySpec, version: str = "1.0") -> ModuleRecord:
    """Shorthand for building a ModuleRecord labelled after its id."""
    return ModuleRecord(
        module_id=module_id,
        version=version,
        source_label=f"{module_id.lower()}_file",
        dependencies=deps,
    )
