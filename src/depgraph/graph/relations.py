"""Relations - Depends-on edges and their metadata kinds.

This module defines the edge between artifact nodes:
- ConfigurationKind: Gradle configuration that produced a dependency tree
- ResolutionKind: How Gradle resolved a dependency line
- DependsOn: A directed dependant -> dependee edge with accumulated metadata
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ConfigurationKind(Enum):
    """Gradle configurations recognized when loading dependency trees.

    Trees generated for any other configuration are skipped.
    """

    COMPILE = "compileClasspath"
    RUNTIME = "runtimeClasspath"
    TEST_COMPILE = "testCompileClasspath"
    TEST_RUNTIME = "testRuntimeClasspath"
    UNKNOWN = "unknown"

    @classmethod
    def from_gradle(cls, name: str) -> ConfigurationKind:
        """Look up a configuration by its Gradle name.

        Args:
            name: Configuration name as printed by Gradle (e.g. "compileClasspath").

        Returns:
            The matching kind, or UNKNOWN if the name is not recognized.
        """
        for kind in cls:
            if kind is not cls.UNKNOWN and kind.value == name:
                return kind
        return cls.UNKNOWN


class ResolutionKind(Enum):
    """Resolution status of a dependency line.

    Gradle appends a marker to lines that were not resolved normally:
    - CONSTRAINED "(c)": dependency constraint, not a real dependency
    - OMITTED "(*)": subtree already listed earlier in the report
    - NOT_RESOLVED "(n)": dependency that cannot be resolved
    NORMAL lines carry no marker. SKIPPED marks a line whose kind is
    disabled and must not reach the graph.
    """

    CONSTRAINED = "constrained"
    OMITTED = "omitted"
    NORMAL = "normal"
    NOT_RESOLVED = "not_resolved"
    SKIPPED = "skipped"

    @property
    def marker(self) -> str | None:
        """Trailing marker Gradle prints for this kind, if any."""
        return _MARKERS.get(self)

    @classmethod
    def marked(cls) -> tuple[ResolutionKind, ...]:
        """Kinds identified by a trailing marker, in matching order."""
        return tuple(kind for kind in cls if kind.marker is not None)


_MARKERS = {
    ResolutionKind.CONSTRAINED: "(c)",
    ResolutionKind.OMITTED: "(*)",
    ResolutionKind.NOT_RESOLVED: "(n)",
}


def edge_name(specified_version: str | None, resolved_version: str | None) -> str:
    """Derive the display name of a depends-on edge from its versions."""
    if resolved_version is None:
        return specified_version or ""
    if specified_version is None:
        return f"-> {resolved_version}"
    return f"{specified_version} -> {resolved_version}"


@dataclass
class DependsOn:
    """A directed edge: dependant depends on dependee.

    The identity key is (dependant_id, dependee_id, specified_version,
    resolved_version). The three set attributes accumulate every
    configuration, resolution kind and source project the edge was seen
    with; values are only ever added.

    Attributes:
        dependant_id: Id of the artifact that requires the dependency.
        dependee_id: Id of the artifact that provides it.
        specified_version: Version requested in the build, if any.
        resolved_version: Version Gradle resolved to, if different/only one known.
        configurations: Configurations that pulled the dependency in.
        resolution_kinds: How the dependency resolved across observations.
        sources: Root projects whose reports contained the dependency.
        id: Store-assigned identity, None until persisted.
    """

    dependant_id: int
    dependee_id: int
    specified_version: str | None = None
    resolved_version: str | None = None
    configurations: set[ConfigurationKind] = field(default_factory=set)
    resolution_kinds: set[ResolutionKind] = field(default_factory=set)
    sources: set[str] = field(default_factory=set)
    id: int | None = None

    @property
    def name(self) -> str:
        return edge_name(self.specified_version, self.resolved_version)

    def add_configuration(self, configuration: ConfigurationKind) -> None:
        self.configurations.add(configuration)

    def add_resolution_kind(self, resolution: ResolutionKind) -> None:
        self.resolution_kinds.add(resolution)

    def add_source(self, source: str) -> None:
        self.sources.add(source)

    def copy(self) -> DependsOn:
        """Return a detached copy with fresh sets."""
        return DependsOn(
            dependant_id=self.dependant_id,
            dependee_id=self.dependee_id,
            specified_version=self.specified_version,
            resolved_version=self.resolved_version,
            configurations=set(self.configurations),
            resolution_kinds=set(self.resolution_kinds),
            sources=set(self.sources),
            id=self.id,
        )

    def to_state(self) -> dict[str, Any]:
        """Snapshot of the accumulating sets, used for undo."""
        return {
            "configurations": [c.value for c in self.configurations],
            "resolution_kinds": [r.value for r in self.resolution_kinds],
            "sources": sorted(self.sources),
        }
