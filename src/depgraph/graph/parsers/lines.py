"""Line classification for Gradle dependency reports."""

from __future__ import annotations

import re
from enum import Enum

from depgraph.graph.parsers import (
    BLANK_LEVEL,
    CLASSPATH_MARKER,
    CURRENT_LEVEL,
    LAST_LEVEL,
    NEXT_LEVEL,
    ROOT_PROJECT,
    ParseMode,
)
from depgraph.graph.relations import ConfigurationKind

ROOT_PROJECT_PATTERN = re.compile(r"^Root project '(?P<name>[^']+)'")


class LineKind(Enum):
    """Category of a report line."""

    ROOT_DECLARATION = "root"
    CONFIGURATION_HEADER = "configuration"
    TREE_LINE = "tree"
    IGNORE = "ignore"


def classify_line(line: str, mode: ParseMode, configuration: ConfigurationKind) -> LineKind:
    """Categorize a raw report line.

    Args:
        line: The line without its newline.
        mode: Current parse mode.
        configuration: Configuration of the tree being read.

    Returns:
        The LineKind; IGNORE for anything the parser does not act on.
    """
    if line.startswith(ROOT_PROJECT):
        return LineKind.ROOT_DECLARATION
    if mode is ParseMode.BEFORE_ROOT:
        return LineKind.IGNORE
    if CLASSPATH_MARKER in line:
        return LineKind.CONFIGURATION_HEADER
    if configuration is ConfigurationKind.UNKNOWN:
        return LineKind.IGNORE
    if line.startswith((CURRENT_LEVEL, LAST_LEVEL, NEXT_LEVEL, BLANK_LEVEL)):
        return LineKind.TREE_LINE
    return LineKind.IGNORE


def parse_root_project(line: str) -> str:
    """Extract the project name from a "Root project 'name'" line.

    Gradle may append " - description"; only the quoted name is kept.
    """
    match = ROOT_PROJECT_PATTERN.match(line)
    if match:
        return match.group("name")
    return line[len(ROOT_PROJECT) :].strip().strip("'")


def parse_configuration(line: str) -> ConfigurationKind:
    """Determine the configuration named by a header line.

    "compileClasspath - Compile classpath for source set 'main'." names
    compileClasspath; the name runs up to and including the classpath marker.
    """
    end = line.index(CLASSPATH_MARKER) + len(CLASSPATH_MARKER)
    return ConfigurationKind.from_gradle(line[:end].strip())


__all__ = [
    "LineKind",
    "classify_line",
    "parse_root_project",
    "parse_configuration",
]
