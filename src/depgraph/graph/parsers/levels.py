"""Tree depth reconstruction from fixed-width indentation.

Gradle prints every level of the tree as a five character unit:

    +--- a:a:1          depth 1
    |    +--- b:b:1     depth 2
    |    |    \\--- c:c:1   depth 3
    |    \\--- d:d:1     depth 2
    \\--- e:e:1          depth 1

The LevelStack keeps the ancestry path from the root project to the most
recently processed artifact. Before an artifact is resolved, the path is
cut back so its top is the parent at depth - 1; once resolved, the
artifact is pushed and becomes the candidate parent of the next line.
"""

from __future__ import annotations

from collections.abc import Iterator

from depgraph.errors import MalformedIndentation
from depgraph.graph.ArtifactNode import ArtifactNode
from depgraph.graph.parsers import CURRENT_LEVEL, LAST_LEVEL, LEVEL_WIDTH, NEXT_LEVEL


def measure_line(line: str) -> tuple[int, str]:
    """Compute the depth of a tree line and extract its coordinate text.

    Args:
        line: A tree line, resolution marker already removed.

    Returns:
        (depth, coordinate_text), depth being 1 for top-level dependencies.

    Raises:
        MalformedIndentation: If the indentation never reaches a "+" or "\\"
            marker or contains something other than "|" and spaces.
    """
    depth = 1
    remainder = line
    while not remainder.startswith((CURRENT_LEVEL, LAST_LEVEL)):
        unit = remainder[:LEVEL_WIDTH]
        if len(unit) < LEVEL_WIDTH or unit.strip() not in ("", NEXT_LEVEL):
            raise MalformedIndentation(f"Indentation does not reach a tree marker at depth {depth}")
        remainder = remainder[LEVEL_WIDTH:]
        depth += 1
    return depth, remainder[LEVEL_WIDTH:]


class LevelStack:
    """Ancestry path of the line being processed.

    The bottom of the stack is the root project; each entry above it is
    one level deeper. `depth` is the depth of the top artifact (0 when
    only the root project is on the stack).
    """

    def __init__(self) -> None:
        self._path: list[ArtifactNode] = []

    def reset(self, root: ArtifactNode) -> None:
        """Start a new tree rooted at a project node."""
        self._path = [root]

    @property
    def depth(self) -> int:
        return len(self._path) - 1

    @property
    def root(self) -> ArtifactNode | None:
        return self._path[0] if self._path else None

    def top(self) -> ArtifactNode:
        if not self._path:
            raise MalformedIndentation("Dependency line before any root project")
        return self._path[-1]

    def enter(self, depth: int) -> ArtifactNode:
        """Reconcile the path for a line at depth and return its dependant.

        Pops while the number of open levels differs from depth; this
        both ascends after a leaf and closes the previous sibling.

        Args:
            depth: Depth of the line about to be processed (>= 1).

        Returns:
            The artifact at depth - 1, i.e. the dependant of the line.

        Raises:
            MalformedIndentation: If there is no root project, or depth skips a level.
        """
        self.top()
        if depth > len(self._path):
            raise MalformedIndentation(
                f"Depth {depth} skips a level (deepest open level is {self.depth})"
            )
        while len(self._path) != depth:
            self._path.pop()
        return self._path[-1]

    def push(self, node: ArtifactNode) -> None:
        self._path.append(node)

    def __len__(self) -> int:
        return len(self._path)

    def __iter__(self) -> Iterator[ArtifactNode]:
        """Iterate from the root project to the top."""
        yield from self._path


__all__ = ["measure_line", "LevelStack"]
