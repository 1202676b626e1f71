"""Load order resolution via depth-first topological sort."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator

from modorder.errors import CircularDependencyError
from modorder.graph import DependencyGraph, ModuleNode, build_graph
from modorder.types import ModuleRecord, ResolvedModule

logger = logging.getLogger(__name__)

__all__ = ["resolve", "resolve_load_order"]


def resolve(graph: DependencyGraph) -> list[ModuleNode]:
    """Order the nodes of ``graph`` so every prerequisite precedes its dependents.

    Walks the graph depth-first from the synthetic root and emits each node
    after all of its edges (post-order). A node reached again while still on
    the active path closes a cycle.

    Args:
        graph: Graph produced by ``build_graph``. It is not modified.

    Returns:
        Module nodes in load order, synthetic root excluded.

    Raises:
        CircularDependencyError: On the first edge that closes a cycle.
    """
    resolved: list[ModuleNode] = []
    resolved_ids: set[str] = set()

    # Active DFS path, kept as a list for cycle reporting and a set for lookups
    path: list[str] = [graph.root.module_id]
    on_path: set[str] = {graph.root.module_id}
    stack: list[tuple[ModuleNode, Iterator[str]]] = [(graph.root, iter(graph.root.edges))]

    while stack:
        node, pending = stack[-1]
        for dependency_id in pending:
            if dependency_id in resolved_ids:
                continue
            if dependency_id in on_path:
                cycle_path = path[path.index(dependency_id):] + [dependency_id]
                raise CircularDependencyError(
                    from_id=node.module_id,
                    to_id=dependency_id,
                    cycle_path=cycle_path,
                )
            dependency = graph.node(dependency_id)
            path.append(dependency_id)
            on_path.add(dependency_id)
            stack.append((dependency, iter(dependency.edges)))
            break
        else:
            stack.pop()
            path.pop()
            on_path.discard(node.module_id)
            resolved_ids.add(node.module_id)
            if not node.is_root:
                resolved.append(node)

    logger.debug("Resolved load order: %s", [n.module_id for n in resolved])
    return resolved


def resolve_load_order(records: Iterable[ModuleRecord]) -> list[ResolvedModule]:
    """Build the graph for ``records`` and return (module_id, source_label) pairs in load order."""
    graph = build_graph(records)
    return [ResolvedModule(node.module_id, node.source_label) for node in resolve(graph)]
