"""Graph store - Persistence interface for artifact nodes and edges.

This module provides:
- GraphStore: Protocol consumed by the graph model builder
- InMemoryGraphStore: Dictionary-backed store with undoable transactions

Reads always return detached copies. A change made to a returned node or
edge is persisted only through update_node()/update_edge(), mirroring a
database-backed store.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Protocol, runtime_checkable

from depgraph.errors import StoreError
from depgraph.graph.ArtifactNode import ArtifactNode
from depgraph.graph.mutations import (
    CREATE_EDGE,
    CREATE_NODE,
    UPDATE_EDGE,
    UPDATE_NODE,
    MutationEntry,
    MutationLog,
)
from depgraph.graph.relations import ConfigurationKind, DependsOn, ResolutionKind

logger = logging.getLogger(__name__)

NODE_FILTER_FIELDS = frozenset({"group_id", "artifact_id", "artifact_type"})
EDGE_FILTER_FIELDS = frozenset({"specified_version", "resolved_version"})


@runtime_checkable
class GraphStore(Protocol):
    """Store operations the graph model builder relies on.

    Transactions are scoped to one input file: begin_transaction() before
    the first line, commit() after the last, rollback() on a fatal error.
    """

    def begin_transaction(self) -> None: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...

    def find_nodes(self, **filters: Any) -> list[ArtifactNode]: ...

    def create_node(
        self,
        group_id: str | None,
        artifact_id: str,
        artifact_type: str,
        labels: Iterable[str] | None = None,
    ) -> ArtifactNode: ...

    def update_node(self, node: ArtifactNode) -> ArtifactNode: ...

    def find_edges(self, dependant_id: int, dependee_id: int, **filters: Any) -> list[DependsOn]: ...

    def create_edge(
        self,
        dependant: ArtifactNode,
        dependee: ArtifactNode,
        specified_version: str | None,
        resolved_version: str | None,
    ) -> DependsOn: ...

    def update_edge(self, edge: DependsOn) -> DependsOn: ...

    def purge_all(self) -> None: ...


def _check_filters(filters: dict[str, Any], allowed: frozenset[str]) -> None:
    unknown = set(filters) - allowed
    if unknown:
        raise StoreError(f"Unsupported filter field(s): {', '.join(sorted(unknown))}")


def _matches(obj: object, filters: dict[str, Any]) -> bool:
    return all(getattr(obj, key) == value for key, value in filters.items())


class InMemoryGraphStore:
    """Dictionary-backed GraphStore.

    Mutations made while a transaction is open are journaled in a
    MutationLog; rollback() undoes them most-recent-first, commit() drops
    the journal. Mutations outside a transaction apply immediately.
    Results of find operations are ordered by creation (store id).
    """

    def __init__(self) -> None:
        self._nodes: dict[int, ArtifactNode] = {}
        self._edges: dict[int, DependsOn] = {}
        self._next_id = 1
        self._mutation_log = MutationLog()
        self._in_transaction = False

    # ─────────────────────────────────────────────────────────────────────
    # Transactions
    # ─────────────────────────────────────────────────────────────────────

    @property
    def in_transaction(self) -> bool:
        return self._in_transaction

    @property
    def mutation_log(self) -> MutationLog:
        """Journal of the open transaction."""
        return self._mutation_log

    def begin_transaction(self) -> None:
        if self._in_transaction:
            raise StoreError("A transaction is already open")
        self._mutation_log.clear()
        self._in_transaction = True

    def commit(self) -> None:
        if not self._in_transaction:
            raise StoreError("No open transaction to commit")
        logger.debug("Committing %d mutation(s)", len(self._mutation_log))
        self._mutation_log.clear()
        self._in_transaction = False

    def rollback(self) -> None:
        if not self._in_transaction:
            raise StoreError("No open transaction to roll back")
        logger.debug("Rolling back %d mutation(s)", len(self._mutation_log))
        entry = self._mutation_log.pop()
        while entry is not None:
            self._apply_undo(entry)
            entry = self._mutation_log.pop()
        self._in_transaction = False

    def _record(
        self,
        operation: str,
        target_id: int,
        before_state: dict[str, Any],
        after_state: dict[str, Any],
    ) -> None:
        if self._in_transaction:
            self._mutation_log.append(
                MutationEntry(
                    operation=operation,
                    target_id=target_id,
                    before_state=before_state,
                    after_state=after_state,
                )
            )

    def _apply_undo(self, entry: MutationEntry) -> None:
        """Reverse one journaled mutation using its before_state."""
        op = entry.operation

        if op == CREATE_NODE:
            self._nodes.pop(entry.target_id, None)
        elif op == CREATE_EDGE:
            self._edges.pop(entry.target_id, None)
        elif op == UPDATE_NODE:
            node = self._nodes[entry.target_id]
            node.group_id = entry.before_state["group_id"]
            node.artifact_type = entry.before_state["artifact_type"]
            node.labels = set(entry.before_state["labels"])
        elif op == UPDATE_EDGE:
            edge = self._edges[entry.target_id]
            edge.configurations = {
                ConfigurationKind(v) for v in entry.before_state["configurations"]
            }
            edge.resolution_kinds = {
                ResolutionKind(v) for v in entry.before_state["resolution_kinds"]
            }
            edge.sources = set(entry.before_state["sources"])
        else:
            raise StoreError(f"Cannot undo unknown operation {op!r}")

    def _allocate_id(self) -> int:
        allocated = self._next_id
        self._next_id += 1
        return allocated

    # ─────────────────────────────────────────────────────────────────────
    # Nodes
    # ─────────────────────────────────────────────────────────────────────

    def find_nodes(self, **filters: Any) -> list[ArtifactNode]:
        """Find nodes whose fields equal every given filter value.

        Args:
            **filters: Any of group_id, artifact_id, artifact_type.

        Returns:
            Detached copies of the matching nodes, in creation order.
        """
        _check_filters(filters, NODE_FILTER_FIELDS)
        return [node.copy() for node in self._nodes.values() if _matches(node, filters)]

    def get_node(self, node_id: int) -> ArtifactNode:
        try:
            return self._nodes[node_id].copy()
        except KeyError as exc:
            raise StoreError(f"Artifact node {node_id} does not exist") from exc

    def create_node(
        self,
        group_id: str | None,
        artifact_id: str,
        artifact_type: str,
        labels: Iterable[str] | None = None,
    ) -> ArtifactNode:
        node = ArtifactNode(
            group_id=group_id,
            artifact_id=artifact_id,
            artifact_type=artifact_type,
            labels=set(labels) if labels is not None else {artifact_type},
            id=self._allocate_id(),
        )
        self._nodes[node.id] = node
        self._record(CREATE_NODE, node.id, {}, node.to_state())
        logger.debug("Created node %s", node)
        return node.copy()

    def update_node(self, node: ArtifactNode) -> ArtifactNode:
        stored = self._nodes.get(node.id) if node.id is not None else None
        if stored is None:
            raise StoreError(f"Cannot update unknown artifact node {node.id}")
        before = stored.to_state()
        self._nodes[node.id] = node.copy()
        self._record(UPDATE_NODE, node.id, before, node.to_state())
        return node

    def iter_nodes(self) -> Iterable[ArtifactNode]:
        """Iterate copies of all nodes in creation order."""
        for node in self._nodes.values():
            yield node.copy()

    def node_count(self) -> int:
        return len(self._nodes)

    # ─────────────────────────────────────────────────────────────────────
    # Edges
    # ─────────────────────────────────────────────────────────────────────

    def find_edges(self, dependant_id: int, dependee_id: int, **filters: Any) -> list[DependsOn]:
        """Find edges between two nodes matching the given version filters.

        Args:
            dependant_id: Id of the depending artifact.
            dependee_id: Id of the artifact depended upon.
            **filters: Any of specified_version, resolved_version.

        Returns:
            Detached copies of the matching edges, in creation order.
        """
        _check_filters(filters, EDGE_FILTER_FIELDS)
        return [
            edge.copy()
            for edge in self._edges.values()
            if edge.dependant_id == dependant_id
            and edge.dependee_id == dependee_id
            and _matches(edge, filters)
        ]

    def create_edge(
        self,
        dependant: ArtifactNode,
        dependee: ArtifactNode,
        specified_version: str | None,
        resolved_version: str | None,
    ) -> DependsOn:
        for endpoint in (dependant, dependee):
            if endpoint.id not in self._nodes:
                raise StoreError(f"Cannot link unknown artifact node {endpoint}")
        edge = DependsOn(
            dependant_id=dependant.id,
            dependee_id=dependee.id,
            specified_version=specified_version,
            resolved_version=resolved_version,
            id=self._allocate_id(),
        )
        self._edges[edge.id] = edge
        self._record(CREATE_EDGE, edge.id, {}, edge.to_state())
        logger.debug("Created edge %s -[%s]-> %s", dependant, edge.name, dependee)
        return edge.copy()

    def update_edge(self, edge: DependsOn) -> DependsOn:
        stored = self._edges.get(edge.id) if edge.id is not None else None
        if stored is None:
            raise StoreError(f"Cannot update unknown depends-on edge {edge.id}")
        before = stored.to_state()
        self._edges[edge.id] = edge.copy()
        self._record(UPDATE_EDGE, edge.id, before, edge.to_state())
        return edge

    def iter_edges(self) -> Iterable[DependsOn]:
        """Iterate copies of all edges in creation order."""
        for edge in self._edges.values():
            yield edge.copy()

    def edge_count(self) -> int:
        return len(self._edges)

    # ─────────────────────────────────────────────────────────────────────
    # Maintenance
    # ─────────────────────────────────────────────────────────────────────

    def purge_all(self) -> None:
        """Remove every node and edge."""
        if self._in_transaction:
            raise StoreError("Cannot purge while a transaction is open")
        self._nodes.clear()
        self._edges.clear()
        self._mutation_log.clear()


__all__ = ["GraphStore", "InMemoryGraphStore"]
