"""
Shared test fixtures — isolated aggregator, shared-aggregator reset, test client.
"""

import pytest
from fastapi.testclient import TestClient

from catering_pricing.main import app
from catering_pricing.pricing_engine import PricingAggregator, pricing_aggregator


@pytest.fixture(autouse=True)
def reset_shared_aggregator():
    """The HTTP layer uses one module-level aggregator; start every test clean."""
    pricing_aggregator.reset()
    yield
    pricing_aggregator.reset()


@pytest.fixture
def aggregator():
    """A private aggregator, independent of the HTTP layer."""
    return PricingAggregator()


@pytest.fixture
def client():
    """FastAPI test client."""
    return TestClient(app)
