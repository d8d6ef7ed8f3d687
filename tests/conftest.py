"""Pytest configuration and fixtures."""

import sys
from pathlib import Path

import pytest

# Add project root to sys.path for imports
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from config import Config  # noqa: E402


@pytest.fixture
def config():
    """Config with fixed test secrets."""
    return Config(
        channel_secret="test_channel_secret",
        channel_access_token="test_access_token",
    )


@pytest.fixture
def isolate_config():
    """Config that isolates per-event failures."""
    return Config(
        channel_secret="test_channel_secret",
        channel_access_token="test_access_token",
        failure_policy="isolate",
    )
