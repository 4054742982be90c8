"""Shared test fixtures for mizan."""

import os
import tempfile

import pytest

from mizan.core.config import reset_config
from mizan.financial.models import MetalPriceQuote


@pytest.fixture
def tmp_dir():
    """Provide a temporary directory that is cleaned up after the test."""
    with tempfile.TemporaryDirectory() as d:
        yield d


@pytest.fixture
def tmp_config_file(tmp_dir):
    """Create a temporary YAML config file."""
    import yaml

    config_data = {
        "obligations": {
            "school": "Shafi'i",
            "threshold_standard": "silver",
            "include_jewelry": True,
        },
        "pricing": {
            "gold_per_gram": 75,
            "silver_per_gram": 0.9,
        },
    }
    config_path = os.path.join(tmp_dir, "config.yaml")
    with open(config_path, "w") as f:
        yaml.dump(config_data, f)
    return config_path


@pytest.fixture(autouse=True)
def _reset_singleton():
    """Reset config singleton between tests."""
    reset_config()
    yield
    reset_config()


@pytest.fixture
def prices():
    """Gold at 75/g (nisab 6,375), silver at 0.90/g (nisab 535.50)."""
    return MetalPriceQuote(gold_per_gram=75, silver_per_gram="0.90")


@pytest.fixture
def zero_prices():
    return MetalPriceQuote(gold_per_gram=0, silver_per_gram=0)
