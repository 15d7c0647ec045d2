#!/usr/bin/env python3
"""Tests for configuration loading and store selection."""

import logging

import pytest
import yaml

from models import (
    CategoryConfig,
    FileRecordStore,
    SqlRecordStore,
    load_category_config,
    open_store,
    save_category_config,
)
from models.loader import default_database_url

# =============================================================================
# load_category_config tests
# =============================================================================


class TestLoadCategoryConfig:
    """Tests for load_category_config function."""

    def test_loads_yaml(self, tmp_path):
        path = tmp_path / "recommended.yaml"
        path.write_text("""
Plumbing:
  description: Check pipes and drains
  intervalDays: 180
Electrical:
  description: Test GFCI outlets
  intervalDays: 365
""")
        config = load_category_config(path)

        assert list(config) == ["Plumbing", "Electrical"]
        assert isinstance(config["Plumbing"], CategoryConfig)
        assert config["Plumbing"].name == "Plumbing"
        assert config["Plumbing"].description == "Check pipes and drains"
        assert config["Plumbing"].interval_days == 180

    def test_loads_json(self, tmp_path):
        """JSON config files load through the YAML parser."""
        path = tmp_path / "recommended.json"
        path.write_text('{"Heating": {"description": "Furnace", "intervalDays": 365}}')
        config = load_category_config(path)
        assert config["Heating"].interval_days == 365

    def test_missing_file_is_empty(self, tmp_path, caplog):
        with caplog.at_level(logging.WARNING):
            assert load_category_config(tmp_path / "nope.yaml") == {}
        assert "not found" in caplog.text

    def test_empty_file_is_empty(self, tmp_path):
        path = tmp_path / "recommended.yaml"
        path.write_text("")
        assert load_category_config(path) == {}

    def test_drops_unusable_intervals(self, tmp_path, caplog):
        path = tmp_path / "recommended.yaml"
        path.write_text("""
Good:
  description: fine
  intervalDays: 30
NoInterval:
  description: missing
Zero:
  intervalDays: 0
Text:
  intervalDays: soon
Flag:
  intervalDays: true
NotAMapping: 42
""")
        with caplog.at_level(logging.WARNING):
            config = load_category_config(path)
        assert list(config) == ["Good"]
        assert "NoInterval" in caplog.text

    def test_missing_description_defaults_to_empty(self, tmp_path):
        path = tmp_path / "recommended.yaml"
        path.write_text("Gutters:\n  intervalDays: 90\n")
        assert load_category_config(path)["Gutters"].description == ""

    def test_non_mapping_raises(self, tmp_path):
        path = tmp_path / "recommended.yaml"
        path.write_text("- Plumbing\n- Electrical\n")
        with pytest.raises(ValueError, match="mapping"):
            load_category_config(path)

    def test_malformed_yaml_raises(self, tmp_path):
        path = tmp_path / "recommended.yaml"
        path.write_text("Plumbing: [unclosed\n")
        with pytest.raises(yaml.YAMLError):
            load_category_config(path)


class TestSaveCategoryConfig:
    """Tests for save_category_config function."""

    def test_writes_camel_case(self, tmp_path):
        path = tmp_path / "config" / "recommended.yaml"
        save_category_config(path, {"Plumbing": CategoryConfig("Plumbing", "Pipes", 180)})

        with open(path) as f:
            data = yaml.safe_load(f)
        assert data == {"Plumbing": {"description": "Pipes", "intervalDays": 180}}

    def test_load_reads_saved_file(self, tmp_path):
        path = tmp_path / "recommended.yaml"
        save_category_config(path, {"Heating": CategoryConfig("Heating", "Furnace", 365)})
        assert load_category_config(path)["Heating"].interval_days == 365


# =============================================================================
# open_store tests
# =============================================================================


class TestOpenStore:
    """Tests for open_store function."""

    def test_file_backend(self, tmp_path):
        store = open_store("file", tmp_path)
        assert isinstance(store, FileRecordStore)
        assert store.home == tmp_path

    def test_sql_backend_default_url(self, tmp_path):
        store = open_store("sql", tmp_path)
        assert isinstance(store, SqlRecordStore)
        assert (tmp_path / "database.sqlite").exists()

    def test_sql_backend_explicit_url(self, tmp_path):
        store = open_store("sql", tmp_path, "sqlite://")
        assert isinstance(store, SqlRecordStore)
        assert not (tmp_path / "database.sqlite").exists()

    def test_unknown_backend(self, tmp_path):
        with pytest.raises(ValueError, match="Unknown backend"):
            open_store("mongo", tmp_path)

    def test_default_database_url(self, tmp_path):
        assert default_database_url(tmp_path) == f"sqlite:///{tmp_path / 'database.sqlite'}"
