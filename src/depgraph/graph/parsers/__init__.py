"""Gradle dependency report parsers.

This module provides the shared vocabulary of the line-oriented parsing
pipeline (lines -> resolution -> levels -> version -> builder):
- Constants describing the `gradle dependencies` text format
- ParseMode: Where the parser is within a report
- ParseContext: Per-file state carried from line to line

Report excerpt:

    Root project 'app'
    compileClasspath - Compile classpath for source set 'main'.
    +--- com.foo:bar:1.0
    |    \\--- com.foo:qux:1.1 -> 1.2
    \\--- com.foo:baz -> 2.0 (*)
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from depgraph.graph.relations import ConfigurationKind

ROOT_PROJECT = "Root project"
CLASSPATH_MARKER = "Classpath"
CURRENT_LEVEL = "+"
LAST_LEVEL = "\\"
NEXT_LEVEL = "|"
# Each tree level is one glyph plus four padding characters.
LEVEL_WIDTH = 5
BLANK_LEVEL = " " * LEVEL_WIDTH
ARTIFACT_SEPARATOR = ":"
RESOLVED_INDICATOR = "->"


class ParseMode(Enum):
    """Position of the parser within a report."""

    BEFORE_ROOT = "before-root"
    AWAITING_CONFIGURATION = "awaiting-configuration"
    READING_TREE = "reading-tree"


@dataclass
class ParseContext:
    """Context carried across the lines of one report.

    Attributes:
        source: Name of the report (usually the file name), for messages.
        mode: Current parse mode.
        configuration: Configuration of the tree being read.
        project_name: Root project declared by the report, once seen.
    """

    source: str
    mode: ParseMode = ParseMode.BEFORE_ROOT
    configuration: ConfigurationKind = ConfigurationKind.UNKNOWN
    project_name: str | None = None


__all__ = [
    "ROOT_PROJECT",
    "CLASSPATH_MARKER",
    "CURRENT_LEVEL",
    "LAST_LEVEL",
    "NEXT_LEVEL",
    "LEVEL_WIDTH",
    "BLANK_LEVEL",
    "ARTIFACT_SEPARATOR",
    "RESOLVED_INDICATOR",
    "ParseMode",
    "ParseContext",
]
