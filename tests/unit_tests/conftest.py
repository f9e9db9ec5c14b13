"""
Pytest fixtures for the vector store node unit tests.
"""

import pytest

from langchain_hana_nodes.config import get_settings


@pytest.fixture(autouse=True)
def fresh_settings():
    """Re-read node settings from the environment for every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
