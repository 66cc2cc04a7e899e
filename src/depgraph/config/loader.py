"""Configuration loading.

Configuration comes from three layers, later layers winning:
1. DEFAULT_CONFIG
2. A .depgraph.toml file (explicit path, or found by walking up from cwd)
3. DEPGRAPH_<SECTION>_<KEY> environment variables
"""

from __future__ import annotations

import copy
import json
import os
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

import tomlkit
from tomlkit.exceptions import ParseError as TomlParseError

from depgraph.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG, ENV_PREFIX
from depgraph.errors import ConfigError
from depgraph.graph.relations import ResolutionKind


def parse_toml_document(content: str) -> tomlkit.TOMLDocument:
    """Parse TOML content, keeping comments and formatting."""
    try:
        return tomlkit.parse(content)
    except TomlParseError as e:
        raise ConfigError(f"Invalid TOML: {e}") from e


def parse_toml(content: str) -> dict[str, Any]:
    """Parse TOML content into plain Python containers."""
    return parse_toml_document(content).unwrap()


def find_config_file(start: Path | None = None) -> Path | None:
    """Find .depgraph.toml in start or one of its parents.

    Args:
        start: Directory to start from (default: current directory).

    Returns:
        Path to the config file, or None if not found.
    """
    current = (start or Path.cwd()).resolve()
    while True:
        candidate = current / CONFIG_FILE_NAME
        if candidate.is_file():
            return candidate
        if current == current.parent:
            return None
        current = current.parent


def merge_configs(base: dict[str, Any], override: Mapping[str, Any]) -> dict[str, Any]:
    """Deep-merge override into a copy of base."""
    result = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, Mapping) and isinstance(result.get(key), dict):
            result[key] = merge_configs(result[key], value)
        else:
            result[key] = copy.deepcopy(value)
    return result


def _try_parse_env_value(value: str) -> Any:
    """Interpret an environment variable value.

    "true"/"false" (any case) become booleans, JSON arrays and objects
    are decoded, anything else (including malformed JSON) stays a string.
    """
    lowered = value.strip().lower()
    if lowered == "true":
        return True
    if lowered == "false":
        return False
    if value.strip().startswith(("[", "{")):
        try:
            return json.loads(value)
        except json.JSONDecodeError:
            return value
    return value


def _apply_env_overrides(config: dict[str, Any]) -> dict[str, Any]:
    """Apply DEPGRAPH_<SECTION>_<KEY> overrides to known sections.

    The section is matched against the config's top-level tables; the
    rest of the variable name, lowercased, is the key. For example
    DEPGRAPH_RESOLUTION_NOT_RESOLVED=true sets resolution.not_resolved.
    """
    for name, raw in os.environ.items():
        if not name.startswith(ENV_PREFIX):
            continue
        remainder = name[len(ENV_PREFIX) :].lower()
        for section, table in config.items():
            if not isinstance(table, dict):
                continue
            prefix = f"{section}_"
            if remainder.startswith(prefix) and len(remainder) > len(prefix):
                table[remainder[len(prefix) :]] = _try_parse_env_value(raw)
                break
    return config


def load_config(config_path: Path) -> dict[str, Any]:
    """Load a config file merged over the defaults, then apply env overrides.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    try:
        content = Path(config_path).read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read config file {config_path}: {e}") from e
    config = merge_configs(DEFAULT_CONFIG, parse_toml(content))
    return _apply_env_overrides(config)


def get_config(config_path: Path | None = None, start: Path | None = None) -> dict[str, Any]:
    """Return the effective configuration.

    Args:
        config_path: Explicit config file; if None one is searched for.
        start: Directory where the search starts (default: cwd).
    """
    if config_path is None:
        config_path = find_config_file(start)
    if config_path is None:
        return _apply_env_overrides(copy.deepcopy(DEFAULT_CONFIG))
    return load_config(config_path)


def resolution_enablement(config: dict[str, Any]) -> Mapping[ResolutionKind, bool]:
    """Build the read-only table of which marked resolution kinds are loaded."""
    section = config.get("resolution", {})
    table = {kind: bool(section.get(kind.value, False)) for kind in ResolutionKind.marked()}
    return MappingProxyType(table)


__all__ = [
    "parse_toml",
    "parse_toml_document",
    "find_config_file",
    "merge_configs",
    "load_config",
    "get_config",
    "resolution_enablement",
]
