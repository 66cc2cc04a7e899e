"""TreeParser - Loads one Gradle dependency report into the graph.

Each line runs through the pipeline:

    classify_line -> ResolutionClassifier -> measure_line / LevelStack
        -> parse_coordinate -> GraphModelBuilder

A report is one transaction. parse() folds every line into a FileResult;
a loaded result is committed, a failed one is rolled back so the store
keeps nothing from the report.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from depgraph.errors import DependencyGraphError, ParseError, StoreError
from depgraph.graph.builder import GraphModelBuilder
from depgraph.graph.parsers import ParseContext, ParseMode
from depgraph.graph.parsers.levels import LevelStack, measure_line
from depgraph.graph.parsers.lines import (
    LineKind,
    classify_line,
    parse_configuration,
    parse_root_project,
)
from depgraph.graph.parsers.resolution import ResolutionClassifier
from depgraph.graph.parsers.version import parse_coordinate
from depgraph.graph.relations import ConfigurationKind

logger = logging.getLogger(__name__)


class LineOutcome(Enum):
    """What processing a single line did."""

    APPLIED = "applied"  # node/edge upserted
    SKIPPED = "skipped"  # disabled resolution kind
    IGNORED = "ignored"  # not part of a recognized tree
    CONTEXT = "context"  # root declaration or configuration header


@dataclass
class FileResult:
    """Outcome of loading one report.

    Attributes:
        source: Report name.
        loaded: True if the report was committed.
        error: The fatal error when loaded is False.
        project_name: Last root project declared by the report.
        lines: Number of lines read before finishing or failing.
        applied: Dependency lines written to the graph.
        skipped: Dependency lines dropped for a disabled resolution kind.
    """

    source: str
    loaded: bool = True
    error: DependencyGraphError | None = None
    project_name: str | None = None
    lines: int = 0
    applied: int = 0
    skipped: int = 0

    @property
    def failed(self) -> bool:
        return not self.loaded

    def __str__(self) -> str:
        if self.loaded:
            return f"{self.source} completed ({self.applied} dependencies, {self.skipped} skipped)."
        return f"{self.source} failed: {self.error}"


class TreeParser:
    """Stateful parser for one report at a time.

    Args:
        builder: Builder (and through it, the store) receiving the graph.
        resolution: Classifier for trailing resolution markers; by
            default every marked kind is disabled.
    """

    def __init__(
        self,
        builder: GraphModelBuilder,
        resolution: ResolutionClassifier | None = None,
    ) -> None:
        self.builder = builder
        self.resolution = resolution or ResolutionClassifier()
        self.context = ParseContext(source="<none>")
        self.stack = LevelStack()

    def begin(self, source: str) -> None:
        """Reset per-report state before the first line."""
        self.context = ParseContext(source=source)
        self.stack = LevelStack()

    def process_line(self, line: str) -> LineOutcome:
        """Process one report line.

        Args:
            line: Line text without its newline.

        Returns:
            The LineOutcome.

        Raises:
            GrammarError, MalformedIndentation, StoreError: On fatal problems.
        """
        ctx = self.context
        kind = classify_line(line, ctx.mode, ctx.configuration)

        if kind is LineKind.ROOT_DECLARATION:
            project_name = parse_root_project(line)
            self.stack.reset(self.builder.promote_or_create_project(project_name))
            ctx.project_name = project_name
            ctx.configuration = ConfigurationKind.UNKNOWN
            ctx.mode = ParseMode.AWAITING_CONFIGURATION
            return LineOutcome.CONTEXT

        if kind is LineKind.CONFIGURATION_HEADER:
            ctx.configuration = parse_configuration(line)
            if ctx.configuration is ConfigurationKind.UNKNOWN:
                ctx.mode = ParseMode.AWAITING_CONFIGURATION
            else:
                ctx.mode = ParseMode.READING_TREE
            return LineOutcome.CONTEXT

        if kind is LineKind.IGNORE:
            return LineOutcome.IGNORED

        match = self.resolution.classify(line)
        if match.skipped:
            return LineOutcome.SKIPPED

        depth, coordinate_text = measure_line(match.line)
        dependant = self.stack.enter(depth)
        coordinate = parse_coordinate(coordinate_text)

        dependee = self.builder.resolve(coordinate.group_id, coordinate.artifact_id)
        self.builder.resolve_edge(
            dependee,
            dependant,
            coordinate.specified_version,
            coordinate.resolved_version,
            configuration=ctx.configuration,
            resolution=match.kind,
            source=ctx.project_name,
        )
        self.stack.push(dependee)
        return LineOutcome.APPLIED

    def _fold(self, lines: Iterable[str], source: str) -> FileResult:
        """Process every line, turning the first fatal error into a failed result."""
        self.begin(source)
        result = FileResult(source=source)
        for number, raw in enumerate(lines, start=1):
            line = raw.rstrip("\r\n")
            result.lines = number
            try:
                outcome = self.process_line(line)
            except ParseError as e:
                return self._failed(result, e.at(number, line))
            except DependencyGraphError as e:
                return self._failed(result, e)
            if outcome is LineOutcome.APPLIED:
                result.applied += 1
            elif outcome is LineOutcome.SKIPPED:
                result.skipped += 1
        result.project_name = self.context.project_name
        return result

    def _failed(self, result: FileResult, error: DependencyGraphError) -> FileResult:
        result.loaded = False
        result.error = error
        result.project_name = self.context.project_name
        return result

    def parse(self, lines: Iterable[str], source: str = "<report>") -> FileResult:
        """Load a whole report inside one store transaction.

        Args:
            lines: Report lines, with or without trailing newlines.
            source: Report name used in results and messages.

        Returns:
            FileResult; when it is not loaded the store was rolled back.
            An unexpected exception also rolls the store back before it
            propagates.
        """
        store = self.builder.store
        try:
            store.begin_transaction()
        except StoreError as e:
            return FileResult(source=source, loaded=False, error=e)

        try:
            result = self._fold(lines, source)
        except BaseException:
            store.rollback()
            raise
        if result.loaded:
            try:
                store.commit()
            except StoreError as e:
                return self._failed(result, e)
            logger.debug("%s: committed %d dependency line(s)", source, result.applied)
        else:
            store.rollback()
            logger.debug("%s: rolled back after %s", source, result.error)
        return result


__all__ = ["LineOutcome", "FileResult", "TreeParser"]
