"""Resolution classification of dependency lines.

Gradle marks lines that did not resolve normally with a trailing marker
such as "(*)". Each marked kind is loaded only when enabled; a line with
a disabled marker is SKIPPED and must not reach the graph.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from depgraph.graph.relations import ResolutionKind

# Length of every trailing marker, e.g. "(c)".
MARKER_WIDTH = 3


@dataclass(frozen=True)
class ResolutionMatch:
    """Outcome of classifying one tree line.

    Attributes:
        kind: The resolution kind, SKIPPED if the marker is disabled.
        line: The line with an enabled marker (and its leading space) removed.
    """

    kind: ResolutionKind
    line: str

    @property
    def skipped(self) -> bool:
        return self.kind is ResolutionKind.SKIPPED


class ResolutionClassifier:
    """Maps trailing line markers to resolution kinds.

    Args:
        enablement: Which marked kinds are loaded; kinds not listed are disabled.
    """

    def __init__(self, enablement: Mapping[ResolutionKind, bool] | None = None) -> None:
        self.enablement = MappingProxyType(dict(enablement or {}))

    def is_enabled(self, kind: ResolutionKind) -> bool:
        if kind.marker is None:
            return kind is ResolutionKind.NORMAL
        return bool(self.enablement.get(kind, False))

    def classify(self, line: str) -> ResolutionMatch:
        """Classify a tree line by its last characters.

        Args:
            line: A tree line (trailing whitespace is ignored).

        Returns:
            ResolutionMatch with the kind and the line to parse further.
        """
        text = line.rstrip()
        tail = text[-MARKER_WIDTH:]
        for kind in ResolutionKind.marked():
            if tail.endswith(kind.marker):
                if not self.is_enabled(kind):
                    return ResolutionMatch(ResolutionKind.SKIPPED, line)
                return ResolutionMatch(kind, text[: -len(kind.marker)].rstrip())
        return ResolutionMatch(ResolutionKind.NORMAL, line)


__all__ = ["MARKER_WIDTH", "ResolutionMatch", "ResolutionClassifier"]
