"""
Pytest configuration and fixtures for Boarding Sequencer Backend tests.
"""

import os

import pytest
from fastapi.testclient import TestClient

# Tests run against the packaged defaults only
os.environ.pop("BOARDING_CONFIG_PATH", None)

from boarding_sequencer_backend.main import app


@pytest.fixture
def client():
    """Create a test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture
def sample_bookings():
    """Booking file in the documented upload format."""
    return "Booking   Seats\n101       A1,B1\n120       A20, C2\n"


@pytest.fixture
def demo_bookings():
    """Booking file that only uses the four demonstration seats."""
    return "1 A2\n2 B1\n3 A1,B2\n"


@pytest.fixture
def override_config(tmp_path):
    """Write a YAML override file and return its path."""

    def _write(content: str):
        path = tmp_path / "override.yaml"
        path.write_text(content, encoding="utf-8")
        return path

    return _write
