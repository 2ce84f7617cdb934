"""Shared pytest fixtures for metatile tests."""

from unittest.mock import MagicMock, patch

import pytest

from metatile import Metatile, TileAddress, config


@pytest.fixture
def single():
    """Provide a calculator without grouping (size=1)."""
    return Metatile(size=1)


@pytest.fixture
def quad():
    """Provide a calculator grouping 2 x 2 tiles (size=4)."""
    return Metatile(size=4)


@pytest.fixture
def ragged():
    """Provide a 3 x 3 calculator whose cells overrun the pyramid edge."""
    return Metatile(size=9)


@pytest.fixture
def sample_addresses():
    """Provide valid tile addresses across a range of zoom levels."""
    return [
        TileAddress(0, 0, 0),
        TileAddress(1, 1, 0),
        TileAddress(2, 2, 2),
        TileAddress(2, 3, 1),
        TileAddress(3, 5, 6),
        TileAddress(5, 17, 30),
        TileAddress(8, 255, 128),
    ]


@pytest.fixture
def mock_settings():
    """Patch the Dynaconf settings with a MagicMock."""
    with patch.object(config, "settings") as settings:
        settings.get = MagicMock(return_value=config.DEFAULT_SIZE)
        yield settings
