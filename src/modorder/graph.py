"""Dependency graph construction from module records."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from modorder.errors import (
    DuplicateModuleError,
    IncompatibleDependencyError,
    InvalidInputError,
    MissingRequiredDependencyError,
)
from modorder.types import DependencyOrder, ModuleRecord
from modorder.version import is_compatible

logger = logging.getLogger(__name__)

__all__ = ["ROOT_ID", "DependencyGraph", "ModuleNode", "build_graph"]

# Reserved for the synthetic root; records must have a non-empty id.
ROOT_ID = ""


@dataclass
class ModuleNode:
    """Graph node for one module.

    ``edges`` holds ids of nodes that must be resolved before this one.
    The synthetic root is the only node without a record.
    """

    module_id: str
    record: ModuleRecord | None = None
    edges: list[str] = field(default_factory=list)

    @property
    def is_root(self) -> bool:
        return self.record is None

    @property
    def source_label(self) -> str:
        return self.record.source_label if self.record is not None else ""


@dataclass
class DependencyGraph:
    """Id-keyed node table plus the synthetic root that reaches every node."""

    nodes: dict[str, ModuleNode]
    root: ModuleNode

    def __len__(self) -> int:
        return len(self.nodes)

    def __contains__(self, module_id: object) -> bool:
        return module_id in self.nodes

    def __iter__(self) -> Iterator[ModuleNode]:
        return iter(self.nodes.values())

    def node(self, module_id: str) -> ModuleNode:
        """Look up a node by id, the synthetic root included."""
        if module_id == ROOT_ID:
            return self.root
        return self.nodes[module_id]


def _index_records(records: Iterable[ModuleRecord]) -> dict[str, ModuleRecord]:
    """Key records by id, sorted by id."""
    by_id: dict[str, list[ModuleRecord]] = {}
    for record in records:
        if not record.module_id:
            raise InvalidInputError(
                message=f"Module record from '{record.source_label}' has an empty id"
            )
        by_id.setdefault(record.module_id, []).append(record)

    indexed: dict[str, ModuleRecord] = {}
    for module_id in sorted(by_id):
        duplicates = by_id[module_id]
        if len(duplicates) > 1:
            raise DuplicateModuleError(
                module_id=module_id,
                sources=[r.source_label for r in duplicates],
            )
        indexed[module_id] = duplicates[0]
    return indexed


def build_graph(records: Iterable[ModuleRecord]) -> DependencyGraph:
    """Build the ordering graph for a set of module records.

    Nodes are created and linked in lexicographic id order, so the result
    does not depend on the order of ``records``.

    Version checks pass the target as the candidate owner and the dependent
    as the constraint owner, so each diagnostic names the module that owns
    the string it quotes.

    Args:
        records: Module records to link. Ids must be unique and non-empty.

    Returns:
        The linked graph, with a synthetic root pointing at every node.

    Raises:
        InvalidInputError: If a record has an empty id.
        DuplicateModuleError: If two records share an id.
        MissingRequiredDependencyError: If a required dependency is absent.
        IncompatibleDependencyError: If a dependency's version is rejected.
        InvalidVersionError: If a module version is malformed.
        InvalidConstraintError: If a version constraint is malformed.
    """
    indexed = _index_records(records)
    nodes = {
        module_id: ModuleNode(module_id=module_id, record=record)
        for module_id, record in indexed.items()
    }

    for module_id, record in indexed.items():
        node = nodes[module_id]
        for spec in record.dependencies:
            target = nodes.get(spec.target_id)
            if target is None:
                if spec.optional:
                    logger.warning(
                        "Optional dependency '%s' for module '%s' not found, skipping",
                        spec.target_id,
                        node.module_id,
                    )
                    continue
                raise MissingRequiredDependencyError(
                    module_id=node.module_id, target_id=spec.target_id
                )

            target_version = indexed[spec.target_id].version
            if not is_compatible(
                target.module_id, target_version, node.module_id, spec.version_constraint
            ):
                raise IncompatibleDependencyError(
                    module_id=node.module_id,
                    target_id=spec.target_id,
                    constraint=spec.version_constraint,
                    version=target_version,
                )

            if spec.order is DependencyOrder.BEFORE:
                target.edges.append(node.module_id)
            else:
                node.edges.append(target.module_id)

    root = ModuleNode(module_id=ROOT_ID, edges=list(nodes))
    logger.debug(
        "Built dependency graph: %d modules, %d edges",
        len(nodes),
        sum(len(n.edges) for n in nodes.values()),
    )
    return DependencyGraph(nodes=nodes, root=root)
