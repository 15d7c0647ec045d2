#!/usr/bin/env python3
"""Tests for CategoryConfig class."""

from models import CategoryConfig


class TestCategoryConfig:
    """Tests for CategoryConfig class."""

    def test_attributes(self):
        """All attributes are stored correctly."""
        config = CategoryConfig("Plumbing", "Check pipes and drains", 180)
        assert config.name == "Plumbing"
        assert config.description == "Check pipes and drains"
        assert config.interval_days == 180

    def test_repr_names_category(self):
        config = CategoryConfig("Heating", "Furnace service", 365)
        assert "Heating" in repr(config)
        assert "365" in repr(config)
