"""Tests for the artifact type mapping."""

from __future__ import annotations

from pathlib import Path

import pytest

from depgraph.config import (
    DEFAULT_TYPE_MAPPING,
    TypeMapping,
    load_type_mapping,
    mapping_from_config,
    parse_type_mapping,
)
from depgraph.errors import ConfigError


class TestTypeMapping:
    def test_default_entries(self):
        assert DEFAULT_TYPE_MAPPING.classify("com.mrll.core") == "INTERNAL"
        assert DEFAULT_TYPE_MAPPING.classify("com.datasite.api") == "INTERNAL"
        assert DEFAULT_TYPE_MAPPING.classify("io.pivotal.cf") == "SPRING"
        assert DEFAULT_TYPE_MAPPING.classify("org.apache.kafka") == "APACHE"
        assert DEFAULT_TYPE_MAPPING.classify("io.netty") == "EXTERNAL"

    def test_no_group_is_external(self):
        assert DEFAULT_TYPE_MAPPING.classify(None) == "EXTERNAL"

    def test_empty_mapping_is_falsy(self):
        assert not TypeMapping()
        assert len(DEFAULT_TYPE_MAPPING) == 5

    def test_immutable(self):
        with pytest.raises(AttributeError):
            DEFAULT_TYPE_MAPPING.entries = ()


class TestParseTypeMapping:
    def test_entries_in_order(self):
        mapping = parse_type_mapping(
            "# vendors\n\ncom.example = INTERNAL\norg.springframework=SPRING\n"
        )

        assert mapping.entries == (("com.example", "INTERNAL"), ("org.springframework", "SPRING"))

    @pytest.mark.parametrize("line", ["com.example", "=INTERNAL", "com.example="])
    def test_malformed_entry(self, line):
        with pytest.raises(ConfigError, match="types.properties:2"):
            parse_type_mapping(f"a=B\n{line}\n", source="types.properties")


class TestLoadTypeMapping:
    def test_reads_file(self, tmp_path: Path):
        path = tmp_path / "types.properties"
        path.write_text("com.example=INTERNAL\n")

        assert load_type_mapping(path).classify("com.example.x") == "INTERNAL"

    def test_missing_file_warns(self, tmp_path: Path, capsys):
        assert load_type_mapping(tmp_path / "absent.properties") is None

        assert "type mapping file not found" in capsys.readouterr().err


class TestMappingFromConfig:
    def test_override_path_wins(self, tmp_path: Path):
        override = tmp_path / "cli.properties"
        override.write_text("com.example=CLI\n")
        configured = tmp_path / "config.properties"
        configured.write_text("com.example=CONFIG\n")
        config = {"types": {"mapping_file": str(configured), "prefixes": ["com.example=INLINE"]}}

        assert mapping_from_config(config, override).classify("com.example") == "CLI"

    def test_configured_file(self, tmp_path: Path):
        configured = tmp_path / "config.properties"
        configured.write_text("com.example=CONFIG\n")

        mapping = mapping_from_config({"types": {"mapping_file": str(configured)}})

        assert mapping.classify("com.example") == "CONFIG"

    def test_inline_prefixes(self):
        mapping = mapping_from_config({"types": {"prefixes": ["com.example=INLINE"]}})

        assert mapping.classify("com.example") == "INLINE"

    def test_missing_file_falls_back_to_default(self, tmp_path: Path, capsys):
        mapping = mapping_from_config({"types": {}}, tmp_path / "absent.properties")

        assert mapping is DEFAULT_TYPE_MAPPING
        assert "Warning" in capsys.readouterr().err

    def test_empty_file_falls_back_to_default(self, tmp_path: Path):
        empty = tmp_path / "empty.properties"
        empty.write_text("# nothing yet\n")

        assert mapping_from_config({}, empty) is DEFAULT_TYPE_MAPPING
