"""
Shared pytest fixtures.
"""

import pytest

from golf_genius.config import reset_settings
from golf_genius.core.error_handler import error_handler

from test_utils import GolfGeniusDataFactory, MockTransport, make_client


@pytest.fixture
def transport():
    return MockTransport()


@pytest.fixture
def client(transport):
    return make_client(transport)


@pytest.fixture
def data():
    return GolfGeniusDataFactory()


@pytest.fixture(autouse=True)
def isolated_state(monkeypatch):
    """Keep environment keys and retry statistics from leaking between tests."""
    monkeypatch.delenv("GOLF_GENIUS_API_KEY", raising=False)
    error_handler.reset_stats()
    reset_settings()
    yield
    reset_settings()
