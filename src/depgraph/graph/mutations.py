"""Mutation records for graph store transactions.

Every node or edge mutation made inside a transaction is journaled as a
MutationEntry whose before_state is enough to reverse it. Rolling back
a transaction replays the journal backwards.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any
from uuid import uuid4

CREATE_NODE = "create_node"
UPDATE_NODE = "update_node"
CREATE_EDGE = "create_edge"
UPDATE_EDGE = "update_edge"


@dataclass
class MutationEntry:
    """Single mutation operation record.

    Attributes:
        operation: Operation type (one of the module-level constants).
        target_id: Store id of the mutated node or edge.
        before_state: State before mutation (for undo); empty for creations.
        after_state: State after mutation.
        id: Unique mutation ID (UUID4).
        timestamp: When the mutation occurred.
    """

    operation: str
    target_id: int
    before_state: dict[str, Any]
    after_state: dict[str, Any]
    id: str = field(default_factory=lambda: uuid4().hex)
    timestamp: datetime = field(default_factory=datetime.now)

    def __str__(self) -> str:
        """Human-readable representation."""
        return f"[{self.id[:8]}] {self.operation}({self.target_id})"


class MutationLog:
    """Append-only mutation journal for the open transaction.

    Example:
        >>> log = MutationLog()
        >>> log.append(MutationEntry("create_node", 1, {}, {"artifact_id": "core"}))
        >>> len(log)
        1
    """

    def __init__(self) -> None:
        """Initialize an empty mutation log."""
        self._entries: list[MutationEntry] = []

    def append(self, entry: MutationEntry) -> None:
        """Append a mutation entry to the log."""
        self._entries.append(entry)

    def iter_entries(self) -> Iterator[MutationEntry]:
        """Iterate over all entries in chronological order."""
        yield from self._entries

    def __len__(self) -> int:
        return len(self._entries)

    def last(self) -> MutationEntry | None:
        """Return the most recent entry, or None if empty."""
        return self._entries[-1] if self._entries else None

    def pop(self) -> MutationEntry | None:
        """Remove and return the most recent entry, or None if empty."""
        return self._entries.pop() if self._entries else None

    def clear(self) -> None:
        """Clear all entries from the log."""
        self._entries.clear()


__all__ = [
    "CREATE_NODE",
    "UPDATE_NODE",
    "CREATE_EDGE",
    "UPDATE_EDGE",
    "MutationEntry",
    "MutationLog",
]
