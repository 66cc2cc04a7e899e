"""
depgraph.cli - Command-line interface.

Main entry point for the depgraph CLI tool.
"""

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional

from depgraph import __version__
from depgraph.config import get_config
from depgraph.errors import DependencyGraphError
from depgraph.graph.serialize import serialize_graph
from depgraph.graph.store import InMemoryGraphStore
from depgraph.loader import create_tree_parser, load_path

INCLUDE_CHOICES = {
    "constrained": "constrained",
    "omitted": "omitted",
    "not-resolved": "not_resolved",
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        prog="depgraph",
        description="Load Gradle dependency reports into a dependency graph",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  gradle -q dependencies > reports/app.txt
  depgraph reports/app.txt                 # Load one report
  depgraph reports/                        # Load every file in a directory
  depgraph reports/ types.properties       # Classify artifacts with a mapping file
  depgraph reports/ --include omitted      # Also load "(*)" lines
  depgraph reports/ -o graph.json          # Export the loaded graph

Type mapping file (first matching prefix wins, default type EXTERNAL):
  # groupId prefix = TYPE
  com.example=INTERNAL
  org.springframework=SPRING

Configuration:
  .depgraph.toml in the current directory or a parent, or --config PATH.
  Environment overrides: DEPGRAPH_RESOLUTION_OMITTED=true, ...
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"depgraph {__version__}",
    )
    parser.add_argument(
        "path",
        type=Path,
        help="Dependency report file, or directory of report files",
    )
    parser.add_argument(
        "mapping",
        type=Path,
        nargs="?",
        help="Artifact type mapping file (prefix=TYPE per line)",
    )
    parser.add_argument(
        "--config",
        type=Path,
        help="Path to configuration file",
        metavar="PATH",
    )
    parser.add_argument(
        "--include",
        action="append",
        choices=sorted(INCLUDE_CHOICES),
        default=[],
        help="Load lines with this resolution marker (can be repeated)",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the loaded graph as JSON",
        metavar="PATH",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Verbose output",
    )
    parser.add_argument(
        "-q",
        "--quiet",
        action="store_true",
        help="Suppress non-error output",
    )

    return parser


def _configure_logging(args: argparse.Namespace) -> None:
    if args.verbose:
        level = logging.DEBUG
    elif args.quiet:
        level = logging.ERROR
    else:
        level = logging.WARNING
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def run(args: argparse.Namespace) -> int:
    """Load the reports named by args and report per-file outcomes."""
    path: Path = args.path
    if not path.exists():
        print(f"Error: {path} does not exist", file=sys.stderr)
        return 1

    config = get_config(args.config)
    for choice in args.include:
        config.setdefault("resolution", {})[INCLUDE_CHOICES[choice]] = True

    store = InMemoryGraphStore()
    parser = create_tree_parser(config, store=store, mapping_path=args.mapping)
    results = load_path(path, parser)

    for result in results:
        if result.loaded:
            if not args.quiet:
                print(result)
        else:
            print(f"Error: {result}", file=sys.stderr)

    failed = sum(1 for result in results if result.failed)
    if not args.quiet:
        print(
            f"{len(results) - failed} files loaded, {failed} failed; "
            f"{store.node_count()} artifacts, {store.edge_count()} dependencies"
        )

    if args.output:
        args.output.write_text(json.dumps(serialize_graph(store), indent=2) + "\n")
        if not args.quiet:
            print(f"Graph written to {args.output}")

    return 1 if failed else 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 when every report loaded, non-zero otherwise)
    """
    parser = create_parser()

    # Enable shell tab-completion if argcomplete is installed
    # Install with: pip install depgraph[completion]
    # Then activate: eval "$(register-python-argcomplete depgraph)"
    try:
        import argcomplete

        argcomplete.autocomplete(parser)
    except ImportError:
        pass

    args = parser.parse_args(argv)
    _configure_logging(args)

    try:
        return run(args)
    except KeyboardInterrupt:
        print("\nOperation cancelled.", file=sys.stderr)
        return 130
    except (DependencyGraphError, OSError) as e:
        if args.verbose:
            raise
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
