"""Graph Serialization - Export the dependency graph to JSON-compatible dicts."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from depgraph.graph.ArtifactNode import ArtifactNode
    from depgraph.graph.relations import DependsOn
    from depgraph.graph.store import InMemoryGraphStore


def serialize_node(node: ArtifactNode) -> dict[str, Any]:
    """Serialize an ArtifactNode to a JSON-compatible dict."""
    return {
        "id": node.id,
        "group_id": node.group_id,
        "artifact_id": node.artifact_id,
        "name": node.name,
        "type": node.artifact_type,
        "labels": sorted(node.labels),
    }


def serialize_edge(edge: DependsOn) -> dict[str, Any]:
    """Serialize a DependsOn edge to a JSON-compatible dict.

    Set-valued attributes are emitted as sorted lists.
    """
    result: dict[str, Any] = {
        "id": edge.id,
        "dependant": edge.dependant_id,
        "dependee": edge.dependee_id,
        "name": edge.name,
        "configurations": sorted(c.value for c in edge.configurations),
        "resolution_kinds": sorted(r.value for r in edge.resolution_kinds),
        "sources": sorted(edge.sources),
    }
    if edge.specified_version is not None:
        result["specified_version"] = edge.specified_version
    if edge.resolved_version is not None:
        result["resolved_version"] = edge.resolved_version
    return result


def serialize_graph(store: InMemoryGraphStore) -> dict[str, Any]:
    """Serialize every node and edge of a store.

    Returns:
        Dict with "nodes", "edges" and a "summary" of counts.
    """
    nodes = [serialize_node(node) for node in store.iter_nodes()]
    edges = [serialize_edge(edge) for edge in store.iter_edges()]
    return {
        "nodes": nodes,
        "edges": edges,
        "summary": {
            "artifacts": len(nodes),
            "dependencies": len(edges),
        },
    }


__all__ = ["serialize_node", "serialize_edge", "serialize_graph"]
