"""Default configuration values for depgraph."""

from __future__ import annotations

from typing import Any

CONFIG_FILE_NAME = ".depgraph.toml"

ENV_PREFIX = "DEPGRAPH_"

DEFAULT_CONFIG: dict[str, Any] = {
    # Lines carrying a resolution marker are dropped unless enabled here.
    "resolution": {
        "constrained": False,
        "omitted": False,
        "not_resolved": False,
    },
    "types": {
        "mapping_file": None,
        "prefixes": [],
    },
}
