"""Unit tests for the configuration loader."""

from pathlib import Path

import pytest
import yaml

from src.utils.config import get_section, load_config


class TestLoadConfig:
    """Test suite for load_config."""

    def test_load_yaml(self, tmp_path):
        """Test loading a YAML mapping."""
        path = tmp_path / "lanes.yaml"
        path.write_text("batch:\n  on_bad_override: skip\n", encoding="utf-8")
        assert load_config(str(path)) == {"batch": {"on_bad_override": "skip"}}

    def test_missing_file(self, tmp_path):
        """Test that a missing file gives an empty config."""
        assert load_config(str(tmp_path / "nope.yaml")) == {}
        assert load_config(None) == {}

    def test_empty_file(self, tmp_path):
        """Test that an empty file gives an empty config."""
        path = tmp_path / "empty.yaml"
        path.write_text("", encoding="utf-8")
        assert load_config(str(path)) == {}

    def test_invalid_yaml(self, tmp_path):
        """Test that syntax errors propagate."""
        path = tmp_path / "bad.yaml"
        path.write_text("batch: [unclosed\n", encoding="utf-8")
        with pytest.raises(yaml.YAMLError):
            load_config(str(path))

    def test_non_mapping(self, tmp_path):
        """Test that the top level must be a mapping."""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_config(str(path))

    def test_shipped_defaults(self):
        """Test the defaults shipped in configs/lanes.yaml."""
        path = Path(__file__).resolve().parents[2] / "configs" / "lanes.yaml"
        cfg = load_config(str(path))
        assert get_section(cfg, "batch")["on_bad_override"] == "raise"
        assert get_section(cfg, "logging")["level"] == "INFO"


class TestGetSection:
    """Test suite for get_section."""

    def test_missing_section(self):
        """Test that a missing section is empty."""
        assert get_section({}, "batch") == {}
        assert get_section({"batch": None}, "batch") == {}

    def test_non_mapping_section(self):
        """Test that a section must be a mapping."""
        with pytest.raises(ValueError):
            get_section({"batch": "skip"}, "batch")
