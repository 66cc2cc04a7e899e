"""Graph module - Core dependency graph data structures.

Exports:
- ArtifactNode: Artifact vertex identified by group/artifact coordinates
- EXTERNAL, INTERNAL, PROJECT: Reserved artifact type tags
- DependsOn: Directed dependant -> dependee edge
- ConfigurationKind: Gradle configuration of a dependency tree
- ResolutionKind: Resolution status of a dependency line
- MutationEntry / MutationLog: Transaction journal
- GraphStore / InMemoryGraphStore: Store protocol and in-memory implementation

Note: GraphModelBuilder is in depgraph.graph.builder
"""

from depgraph.graph.ArtifactNode import (
    EXTERNAL,
    INTERNAL,
    PROJECT,
    PROJECT_GROUP_ID,
    ArtifactNode,
)
from depgraph.graph.mutations import MutationEntry, MutationLog
from depgraph.graph.relations import ConfigurationKind, DependsOn, ResolutionKind
from depgraph.graph.store import GraphStore, InMemoryGraphStore

__all__ = [
    "EXTERNAL",
    "INTERNAL",
    "PROJECT",
    "PROJECT_GROUP_ID",
    "ArtifactNode",
    "ConfigurationKind",
    "DependsOn",
    "ResolutionKind",
    "MutationEntry",
    "MutationLog",
    "GraphStore",
    "InMemoryGraphStore",
]
