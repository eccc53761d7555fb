"""
Reusable pytest fixtures

Provides fixtures for:
- The seeded locale registry and a two-region registry
- In-memory entity stores
- A recording tracking channel
"""

import pytest

from utils.mock_utils import make_registry
from utils.mocks import InMemoryEntityStore, RecordingChannel

US_FR_REGIONS = [
    {"code": "US", "name": "United States", "languages": ["en"], "default_language": "en"},
    {"code": "FR", "name": "France", "languages": ["fr", "en"], "default_language": "fr"},
]


@pytest.fixture
def registry():
    """Full seed catalogue."""
    return make_registry()


@pytest.fixture
def us_fr_registry():
    """Two regions: US [en] and FR [fr, en]."""
    return make_registry(US_FR_REGIONS, [("en", "English"), ("fr", "Français")])


@pytest.fixture
def recording_channel():
    channel = RecordingChannel()
    yield channel
    channel.clear()


@pytest.fixture
def empty_store():
    return InMemoryEntityStore()
