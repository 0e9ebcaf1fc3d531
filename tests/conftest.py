"""Shared fixtures for transaction tests."""
import json
from pathlib import Path

import pytest


@pytest.fixture
def response_payload():
    """Load a successful transaction response."""
    fixture_path = Path(__file__).parent / "fixtures" / "transaction_response.json"
    with open(fixture_path, "r") as f:
        return json.load(f)


@pytest.fixture
def transaction_payload(response_payload):
    """Inner transaction record of the sample response."""
    return response_payload["transaction"]
