"""Tests for logging setup."""

import logging

import pytest
import structlog

from py_voronoi.core.delaunay import Delaunay
from py_voronoi.utils.log import configure_logging


@pytest.fixture(autouse=True)
def reset_structlog():
    yield
    structlog.reset_defaults()


class TestConfigureLogging:
    """Test structlog configuration."""

    def test_console(self):
        """Test the console renderer setup."""
        configure_logging("DEBUG", "console")
        assert logging.getLogger().level == logging.DEBUG
        assert structlog.is_configured()

    def test_json_default(self):
        """Test the level with the default JSON renderer."""
        configure_logging("warning")
        assert logging.getLogger().level == logging.WARNING

    def test_collinear_warning_is_logged(self, capsys):
        """Test that the collinear jitter warning reaches stderr."""
        configure_logging("INFO", "json")
        Delaunay([0, 0, 1, 0, 2, 0])
        assert "Collinear points detected" in capsys.readouterr().err
