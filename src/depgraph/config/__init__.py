"""
depgraph.config - Configuration loading, defaults and type mapping
"""

from depgraph.config.defaults import CONFIG_FILE_NAME, DEFAULT_CONFIG
from depgraph.config.loader import (
    _apply_env_overrides,
    _try_parse_env_value,
    find_config_file,
    get_config,
    load_config,
    merge_configs,
    parse_toml,
    parse_toml_document,
    resolution_enablement,
)
from depgraph.config.mapping import (
    DEFAULT_TYPE_MAPPING,
    TypeMapping,
    load_type_mapping,
    mapping_from_config,
    parse_type_mapping,
)

__all__ = [
    "CONFIG_FILE_NAME",
    "DEFAULT_CONFIG",
    "DEFAULT_TYPE_MAPPING",
    "TypeMapping",
    "find_config_file",
    "get_config",
    "load_config",
    "load_type_mapping",
    "mapping_from_config",
    "merge_configs",
    "parse_toml",
    "parse_toml_document",
    "parse_type_mapping",
    "resolution_enablement",
]
