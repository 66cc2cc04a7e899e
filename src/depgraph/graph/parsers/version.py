"""Version grammar for artifact coordinates.

Gradle prints a dependency as colon-delimited coordinates:

    group:artifact                  (not allowed: no version)
    group:artifact -> 2.0           no version requested, resolved directly
    group:artifact:1.0              requested version used as is
    group:artifact:1.0 -> 2.0       requested version resolved to another

For the 2-field form the arrowed version is stored as the specified
version and the resolved version stays unset.
"""

from __future__ import annotations

from typing import NamedTuple

from depgraph.errors import GrammarError
from depgraph.graph.parsers import ARTIFACT_SEPARATOR, RESOLVED_INDICATOR


class Coordinate(NamedTuple):
    """Parsed coordinates of one dependency line."""

    group_id: str
    artifact_id: str
    specified_version: str | None
    resolved_version: str | None


def _split_resolution(text: str) -> tuple[str, str | None]:
    left, arrow, right = text.partition(RESOLVED_INDICATOR)
    if not arrow:
        return left.strip(), None
    return left.strip(), right.strip()


def parse_coordinate(text: str) -> Coordinate:
    """Parse coordinate text into its group, artifact and versions.

    Args:
        text: Coordinate text with the tree glyphs already removed.

    Returns:
        The parsed Coordinate; at least one version is set.

    Raises:
        GrammarError: If the text has other than 2 or 3 fields, or no version.
    """
    parts = [part.strip() for part in text.split(ARTIFACT_SEPARATOR)]

    specified: str | None = None
    resolved: str | None = None
    if len(parts) == 2:
        group_id, artifact_field = parts
        artifact_id, specified = _split_resolution(artifact_field)
    elif len(parts) == 3:
        group_id, artifact_id, version_text = parts
        specified, resolved = _split_resolution(version_text)
    else:
        raise GrammarError(
            f"Expected group:artifact[:version], got {len(parts)} field(s) in {text.strip()!r}"
        )

    specified = specified or None
    resolved = resolved or None
    if specified is None and resolved is None:
        raise GrammarError(f"No version for {text.strip()!r}")
    if not group_id or not artifact_id:
        raise GrammarError(f"Missing group or artifact in {text.strip()!r}")

    return Coordinate(group_id, artifact_id, specified, resolved)


__all__ = ["Coordinate", "parse_coordinate"]
