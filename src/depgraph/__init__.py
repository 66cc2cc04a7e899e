"""
depgraph - Gradle dependency reports as a dependency graph

depgraph reads the text printed by `gradle dependencies`, rebuilds the
dependency tree of every configuration, and loads it into a
deduplicated graph of artifacts and depends-on edges.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("depgraph")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"  # Not installed

from depgraph.errors import (
    ConfigError,
    DependencyGraphError,
    GrammarError,
    MalformedIndentation,
    StoreError,
)
from depgraph.graph import ArtifactNode, DependsOn, InMemoryGraphStore

__all__ = [
    "__version__",
    "ArtifactNode",
    "DependsOn",
    "InMemoryGraphStore",
    "DependencyGraphError",
    "GrammarError",
    "MalformedIndentation",
    "StoreError",
    "ConfigError",
]
