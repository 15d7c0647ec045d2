#!/usr/bin/env python3
"""Tests for environment settings."""

from pathlib import Path

import pytest

from settings import DEFAULT_HOME, load_settings


class TestLoadSettings:
    """Tests for load_settings."""

    def test_defaults(self):
        settings = load_settings({})
        assert settings.home == DEFAULT_HOME
        assert settings.backend == "file"
        assert settings.database_url == f"sqlite:///{DEFAULT_HOME / 'database.sqlite'}"
        assert settings.config_file == DEFAULT_HOME / "config" / "recommended.yaml"
        assert settings.due_soon_days == 30

    def test_paths_follow_home(self):
        settings = load_settings({"MAINT_HOME": "/srv/house"})
        assert settings.home == Path("/srv/house")
        assert settings.config_file == Path("/srv/house/config/recommended.yaml")
        assert settings.database_url == "sqlite:////srv/house/database.sqlite"

    def test_overrides(self):
        settings = load_settings({
            "MAINT_BACKEND": "sql",
            "MAINT_DATABASE_URL": "sqlite://",
            "MAINT_CONFIG": "/etc/maint.json",
            "MAINT_DUE_SOON_DAYS": "14",
            "SECRET_KEY": "s3cret",
        })
        assert settings.backend == "sql"
        assert settings.database_url == "sqlite://"
        assert settings.config_file == Path("/etc/maint.json")
        assert settings.due_soon_days == 14
        assert settings.secret_key == "s3cret"

    def test_invalid_due_soon_days(self):
        with pytest.raises(ValueError, match="MAINT_DUE_SOON_DAYS"):
            load_settings({"MAINT_DUE_SOON_DAYS": "soon"})
