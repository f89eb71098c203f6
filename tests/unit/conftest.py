"""
Unit Test Fixtures.

Unit tests run against in-memory doubles (see tests/conftest.py) and never
touch data/notes.db or the network.
"""

from unittest.mock import MagicMock

import pytest

from notepad.core.config import get_app_config, get_settings


@pytest.fixture
def clear_config_cache():
    """Drop the cached Settings/AppConfig before and after a test."""
    get_settings.cache_clear()
    get_app_config.cache_clear()
    yield
    get_settings.cache_clear()
    get_app_config.cache_clear()


@pytest.fixture
def mock_logger() -> MagicMock:
    """
    Stand-in for a module-level structlog logger.

    Usage:
        with patch("notepad.state.shell.logger", mock_logger):
            ...
        mock_logger.warning.assert_called_once()
    """
    return MagicMock()
