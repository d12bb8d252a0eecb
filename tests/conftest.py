"""
Shared fixtures for the sqlmap_config test suite.

The sample_app package next to this file provides the domain classes, mappers,
interceptors and fake data sources that configuration documents in the tests refer to.
"""

from pathlib import Path

import pytest

FIXTURES_DIR = Path(__file__).parent / "fixtures"


@pytest.fixture
def fixtures_dir():
    """Directory holding the sample property files and mapper documents."""
    return FIXTURES_DIR


@pytest.fixture
def sample_config_path():
    return FIXTURES_DIR / "sample_config.xml"
