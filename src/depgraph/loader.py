"""
Report loading utilities.

Centralized functions for loading Gradle dependency reports from disk.
Each report file is parsed in its own store transaction; files in a
batch are processed strictly one after another.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Iterator, List, Optional

from depgraph.config import mapping_from_config, resolution_enablement
from depgraph.errors import DependencyGraphError
from depgraph.graph.builder import GraphModelBuilder
from depgraph.graph.parsers.resolution import ResolutionClassifier
from depgraph.graph.parsers.tree import FileResult, TreeParser
from depgraph.graph.store import GraphStore, InMemoryGraphStore

logger = logging.getLogger(__name__)


def create_tree_parser(
    config: dict[str, Any],
    store: Optional[GraphStore] = None,
    mapping_path: Optional[Path] = None,
) -> TreeParser:
    """Create a TreeParser from configuration.

    This is the standard way to wire a store, the type mapping and the
    resolution enablement table together.

    Args:
        config: Configuration dict with 'resolution' and 'types' sections.
        store: Store to load into (default: a new InMemoryGraphStore).
        mapping_path: Type mapping file overriding the configuration.

    Returns:
        Configured TreeParser instance
    """
    if store is None:
        store = InMemoryGraphStore()
    builder = GraphModelBuilder(store, mapping_from_config(config, mapping_path))
    classifier = ResolutionClassifier(resolution_enablement(config))
    return TreeParser(builder, classifier)


def iter_report_files(path: Path) -> Iterator[Path]:
    """Yield the report files named by path.

    A file yields itself; a directory yields its immediate files sorted by
    name (subdirectories are not entered).
    """
    if path.is_file():
        yield path
    elif path.is_dir():
        for child in sorted(path.iterdir()):
            if child.is_file():
                yield child


def load_file(path: Path, parser: TreeParser) -> FileResult:
    """Load one report file.

    An unreadable file produces a failed result without touching the store.
    """
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        return FileResult(
            source=path.name,
            loaded=False,
            error=DependencyGraphError(f"Cannot read {path}: {e}"),
        )
    logger.debug("Loading %s", path)
    return parser.parse(content.splitlines(), source=path.name)


def load_path(path: Path, parser: TreeParser, purge: bool = True) -> List[FileResult]:
    """Load a report file or every report file in a directory.

    Args:
        path: File or directory.
        parser: Parser wired to the target store.
        purge: Clear the store once before the batch.

    Returns:
        One FileResult per file, in processing order. A failed file does
        not stop the batch.
    """
    if purge:
        parser.builder.store.purge_all()
    return [load_file(report, parser) for report in iter_report_files(path)]
