"""Errors raised while loading dependency reports.

Every fatal condition derives from DependencyGraphError so the loader
can roll back a file's transaction with a single handler.
"""

from __future__ import annotations


class DependencyGraphError(RuntimeError):
    """Base class for depgraph failures."""


class ParseError(DependencyGraphError):
    """A report line could not be parsed.

    Attributes:
        line_number: 1-based line number in the report, if known.
        line: Raw text of the offending line, if known.
    """

    def __init__(
        self, message: str, line_number: int | None = None, line: str | None = None
    ) -> None:
        super().__init__(message)
        self.line_number = line_number
        self.line = line

    def at(self, line_number: int, line: str) -> ParseError:
        """Attach the position of the offending line and return self."""
        self.line_number = line_number
        self.line = line
        return self

    def __str__(self) -> str:
        message = super().__str__()
        if self.line_number is None:
            return message
        return f"line {self.line_number}: {message} ({self.line!r})"


class GrammarError(ParseError):
    """Coordinate text does not match the group:artifact[:version] grammar."""


class MalformedIndentation(ParseError):
    """Indentation never reaches a tree marker or skips a level."""


class StoreError(DependencyGraphError):
    """The graph store rejected an operation."""


class ConfigError(DependencyGraphError):
    """Configuration or type-mapping input is unusable."""


__all__ = [
    "DependencyGraphError",
    "ParseError",
    "GrammarError",
    "MalformedIndentation",
    "StoreError",
    "ConfigError",
]
