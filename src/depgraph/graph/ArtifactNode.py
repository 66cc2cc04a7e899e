"""ArtifactNode - Node representation for the dependency graph.

This module provides the node data structures:
- Reserved artifact type tags (EXTERNAL, INTERNAL, PROJECT)
- ArtifactNode: an artifact identified by group/artifact coordinates
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

# Reserved artifact types; anything else comes from the type mapping.
EXTERNAL = "EXTERNAL"
INTERNAL = "INTERNAL"
PROJECT = "PROJECT"

# Placeholder group for a project node whose real group is not known yet.
PROJECT_GROUP_ID = PROJECT


@dataclass
class ArtifactNode:
    """An artifact node in the dependency graph.

    Attributes:
        id: Store-assigned identity, None until the node is persisted.
        group_id: Group from the artifact's coordinates, None if unknown.
        artifact_id: Artifact id from the artifact's coordinates.
        artifact_type: Type tag used for classification.
        labels: Tags attached to the node, initially {artifact_type}.
    """

    group_id: str | None
    artifact_id: str
    artifact_type: str = EXTERNAL
    labels: set[str] = field(default_factory=set)
    id: int | None = None

    def __post_init__(self) -> None:
        if not self.labels:
            self.labels = {self.artifact_type}

    @property
    def name(self) -> str:
        """Display name; the artifact id."""
        return self.artifact_id

    @property
    def coordinates(self) -> str:
        """Return "group:artifact", or just the artifact id if the group is unknown."""
        if self.group_id is None:
            return self.artifact_id
        return f"{self.group_id}:{self.artifact_id}"

    def is_project(self) -> bool:
        return PROJECT in self.labels

    def copy(self) -> ArtifactNode:
        """Return a detached copy, including a fresh label set."""
        return ArtifactNode(
            group_id=self.group_id,
            artifact_id=self.artifact_id,
            artifact_type=self.artifact_type,
            labels=set(self.labels),
            id=self.id,
        )

    def to_state(self) -> dict[str, Any]:
        """Snapshot of the mutable fields, used for undo."""
        return {
            "group_id": self.group_id,
            "artifact_type": self.artifact_type,
            "labels": sorted(self.labels),
        }

    def __str__(self) -> str:
        return f"{self.coordinates} [{self.artifact_type}]"


__all__ = [
    "EXTERNAL",
    "INTERNAL",
    "PROJECT",
    "PROJECT_GROUP_ID",
    "ArtifactNode",
]
