"""
Pytest configuration and fixtures.

This file provides pytest-specific configuration and fixtures.
For child/household builders, see tests/fixtures/children.py
"""

import pytest

from core.config_loader import MatchingConfig
from core.scorer import MatchingService


@pytest.fixture
def matching_config():
    """Default matching configuration."""
    return MatchingConfig()


@pytest.fixture
def matching_service(matching_config):
    return MatchingService(matching_config)
