"""Artifact type mapping.

An ordered list of (groupId prefix, type) entries classifies artifacts
when they are first created. The first entry whose prefix matches the
artifact's group wins; unmatched groups are EXTERNAL.

Mapping files use one "prefix=TYPE" entry per line. Blank lines and
lines starting with "#" are ignored.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable

from depgraph.errors import ConfigError
from depgraph.graph.ArtifactNode import EXTERNAL, INTERNAL


@dataclass(frozen=True)
class TypeMapping:
    """Immutable ordered prefix -> type table.

    Attributes:
        entries: (prefix, type) pairs in matching order.
    """

    entries: tuple[tuple[str, str], ...] = ()

    @classmethod
    def from_pairs(cls, pairs: Iterable[tuple[str, str]]) -> TypeMapping:
        return cls(tuple((prefix, artifact_type) for prefix, artifact_type in pairs))

    def classify(self, group_id: str | None) -> str:
        """Return the type of the first entry whose prefix starts group_id."""
        if group_id is None:
            return EXTERNAL
        for prefix, artifact_type in self.entries:
            if group_id.startswith(prefix):
                return artifact_type
        return EXTERNAL

    def __len__(self) -> int:
        return len(self.entries)

    def __bool__(self) -> bool:
        return bool(self.entries)


DEFAULT_TYPE_MAPPING = TypeMapping.from_pairs(
    [
        ("com.mrll", INTERNAL),
        ("com.datasite", INTERNAL),
        ("org.springframework", "SPRING"),
        ("io.pivotal", "SPRING"),
        ("org.apache", "APACHE"),
    ]
)


def _parse_entry(entry: str, where: str) -> tuple[str, str]:
    prefix, sep, artifact_type = entry.partition("=")
    prefix, artifact_type = prefix.strip(), artifact_type.strip()
    if not sep or not prefix or not artifact_type:
        raise ConfigError(f"{where}: expected 'prefix=TYPE', got {entry!r}")
    return prefix, artifact_type


def parse_type_mapping(text: str, source: str = "<mapping>") -> TypeMapping:
    """Parse mapping file content.

    Args:
        text: File content, one "prefix=TYPE" entry per line.
        source: Name used in error messages.

    Returns:
        The parsed mapping (possibly empty).

    Raises:
        ConfigError: If a non-comment line is not a "prefix=TYPE" entry.
    """
    pairs = []
    for line_number, line in enumerate(text.splitlines(), start=1):
        stripped = line.strip()
        if not stripped or stripped.startswith("#"):
            continue
        pairs.append(_parse_entry(stripped, f"{source}:{line_number}"))
    return TypeMapping.from_pairs(pairs)


def load_type_mapping(path: Path) -> TypeMapping | None:
    """Load a mapping file.

    Returns:
        The mapping, or None when the file does not exist (a warning is printed).

    Raises:
        ConfigError: If the file cannot be read or is malformed.
    """
    if not path.is_file():
        print(f"Warning: type mapping file not found: {path}", file=sys.stderr)
        return None
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read type mapping file {path}: {e}") from e
    return parse_type_mapping(content, source=str(path))


def mapping_from_config(config: dict[str, Any], override_path: Path | None = None) -> TypeMapping:
    """Choose the type mapping for a run.

    Precedence: override_path (CLI argument), then types.mapping_file,
    then the inline types.prefixes list, then DEFAULT_TYPE_MAPPING. A
    source that is missing or yields no entries falls through to the next.

    Args:
        config: Loaded configuration dict.
        override_path: Mapping file given on the command line, if any.

    Returns:
        A non-empty TypeMapping.
    """
    types_config = config.get("types", {})

    candidates: list[Path] = []
    if override_path is not None:
        candidates.append(Path(override_path))
    if types_config.get("mapping_file"):
        candidates.append(Path(types_config["mapping_file"]))

    for candidate in candidates:
        mapping = load_type_mapping(candidate)
        if mapping:
            return mapping

    prefixes = types_config.get("prefixes") or []
    if prefixes:
        return TypeMapping.from_pairs(
            _parse_entry(str(entry), "types.prefixes") for entry in prefixes
        )

    return DEFAULT_TYPE_MAPPING


__all__ = [
    "TypeMapping",
    "DEFAULT_TYPE_MAPPING",
    "parse_type_mapping",
    "load_type_mapping",
    "mapping_from_config",
]
