"""Tests for settings loaded from the environment."""

import pytest
from pydantic import ValidationError

from py_voronoi.config import Settings, settings
from py_voronoi.core.circumcenters import VoronoiOptions
from py_voronoi.core.geometry import Bound


class TestSettings:
    """Test defaults and environment overrides."""

    def test_defaults(self):
        """Test the default settings."""
        defaults = Settings()
        assert defaults.default_bound() == Bound(0, 0, 960, 500)
        assert defaults.degenerate_center_scale == 1e8
        assert defaults.collinear_epsilon == 1e-10

    def test_module_singleton(self):
        """Test the module level settings object."""
        assert isinstance(settings, Settings)

    def test_env_override(self, monkeypatch):
        """Test that prefixed environment variables override defaults."""
        monkeypatch.setenv("PY_VORONOI_BOUND_RIGHT", "100")
        monkeypatch.setenv("PY_VORONOI_LOG_LEVEL", "debug")
        overridden = Settings()
        assert overridden.default_bound().right == 100
        assert overridden.log_level == "DEBUG"

    def test_voronoi_options(self):
        """Test building VoronoiOptions from settings."""
        options = Settings(degenerate_center_scale=1e6, near_degenerate_threshold=1e-6).voronoi_options()
        assert options == VoronoiOptions(degenerate_center_scale=1e6, near_degenerate_threshold=1e-6)

    @pytest.mark.parametrize("field,value", [
        ("log_format", "xml"),
        ("log_level", "verbose"),
        ("degenerate_center_scale", 0),
        ("jitter_scale", -1),
    ])
    def test_invalid_values(self, field, value):
        """Test that invalid values fail validation."""
        with pytest.raises(ValidationError):
            Settings(**{field: value})
