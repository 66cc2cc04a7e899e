"""Entry point for running depgraph directly.

Usage:
    python -m depgraph PATH [MAPPING]
"""

import sys

from depgraph.cli import main

if __name__ == "__main__":
    sys.exit(main())
