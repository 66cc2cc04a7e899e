"""Graph Model Builder - Idempotent upserts of artifacts and dependencies.

This module resolves parsed coordinates against a GraphStore so that an
artifact or dependency seen many times (within one report or across
reports) is stored once:
- resolve(): find-or-create an artifact node
- promote_or_create_project(): obtain the node for a report's root project
- resolve_edge(): find-or-create a depends-on edge and merge its metadata
"""

from __future__ import annotations

import logging

from depgraph.config.mapping import DEFAULT_TYPE_MAPPING, TypeMapping
from depgraph.errors import GrammarError
from depgraph.graph.ArtifactNode import INTERNAL, PROJECT, PROJECT_GROUP_ID, ArtifactNode
from depgraph.graph.relations import ConfigurationKind, DependsOn, ResolutionKind
from depgraph.graph.store import GraphStore

logger = logging.getLogger(__name__)


class GraphModelBuilder:
    """Builds the dependency graph model inside a GraphStore.

    The type mapping is captured once at construction and never changes
    for the lifetime of the builder.

    Attributes:
        store: Store receiving nodes and edges.
        type_mapping: Ordered prefix -> type table used to classify new artifacts.
    """

    def __init__(self, store: GraphStore, type_mapping: TypeMapping | None = None) -> None:
        self.store = store
        self.type_mapping = type_mapping if type_mapping else DEFAULT_TYPE_MAPPING

    def classify(self, group_id: str | None) -> str:
        """Artifact type for a group, EXTERNAL when no prefix matches."""
        return self.type_mapping.classify(group_id)

    def resolve(self, group_id: str, artifact_id: str) -> ArtifactNode:
        """Find or create the node for an artifact.

        A project can be referenced by another report before its own
        report declares it; in that case the project node whose group is
        still the placeholder receives the now-known group. A project node
        with a known group is never rewritten.

        Args:
            group_id: Group from the dependency line.
            artifact_id: Artifact id from the dependency line.

        Returns:
            The existing, back-filled or newly created node.
        """
        found = self.store.find_nodes(group_id=group_id, artifact_id=artifact_id)
        if found:
            return found[0]

        projects = self.store.find_nodes(
            group_id=PROJECT_GROUP_ID, artifact_type=PROJECT, artifact_id=artifact_id
        )
        if projects:
            project = projects[0]
            logger.debug("Back-filling group %s for project %s", group_id, project)
            project.group_id = group_id
            return self.store.update_node(project)

        artifact_type = self.classify(group_id)
        return self.store.create_node(group_id, artifact_id, artifact_type, {artifact_type})

    def promote_or_create_project(self, project_name: str) -> ArtifactNode:
        """Return the node representing a report's root project.

        Only the artifact id is known for a project. A node already
        labeled PROJECT is reused. Otherwise the first INTERNAL node with
        that artifact id is promoted in place. A same-named node with any
        other label is not promoted and a separate project node is
        created.

        Args:
            project_name: Name from the "Root project" declaration.

        Returns:
            The reused, promoted or newly created project node.
        """
        candidates = self.store.find_nodes(artifact_id=project_name)

        for node in candidates:
            if node.is_project():
                return node

        for node in candidates:
            if INTERNAL in node.labels:
                logger.debug("Promoting %s to project", node)
                node.labels.discard(INTERNAL)
                node.labels.add(PROJECT)
                node.artifact_type = PROJECT
                return self.store.update_node(node)

        return self.store.create_node(PROJECT_GROUP_ID, project_name, PROJECT, {PROJECT})

    def resolve_edge(
        self,
        dependee: ArtifactNode,
        dependant: ArtifactNode,
        specified_version: str | None,
        resolved_version: str | None,
        *,
        configuration: ConfigurationKind,
        resolution: ResolutionKind,
        source: str,
    ) -> DependsOn:
        """Find or create the edge dependant -> dependee and record an observation.

        Existing edges are matched on whichever version fields are set,
        so an edge stored with only one version can match a later
        observation that carries both.

        Args:
            dependee: Artifact being depended upon.
            dependant: Artifact that has the dependency.
            specified_version: Requested version, if any.
            resolved_version: Resolved version, if any.
            configuration: Configuration the observation came from.
            resolution: How the dependency resolved in this observation.
            source: Root project of the report containing the observation.

        Returns:
            The stored edge after its metadata sets were extended.

        Raises:
            GrammarError: If neither version is given.
        """
        filters: dict[str, str] = {}
        if specified_version is not None:
            filters["specified_version"] = specified_version
        if resolved_version is not None:
            filters["resolved_version"] = resolved_version
        if not filters:
            raise GrammarError(
                f"Dependency {dependant.name} -> {dependee.name} has no version"
            )

        existing = self.store.find_edges(dependant.id, dependee.id, **filters)
        if existing:
            edge = existing[0]
        else:
            edge = self.store.create_edge(dependant, dependee, specified_version, resolved_version)

        edge.add_configuration(configuration)
        edge.add_resolution_kind(resolution)
        edge.add_source(source)
        return self.store.update_edge(edge)


__all__ = ["GraphModelBuilder"]
