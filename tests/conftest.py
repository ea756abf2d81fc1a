"""Pytest fixtures and configuration."""
import pytest
from fastapi.testclient import TestClient

from geoscore.main import app, get_rng


class FixedSource:
    """Random source that always returns the same draw and counts calls."""

    def __init__(self, value: float):
        self.value = value
        self.calls = 0

    def random(self) -> float:
        self.calls += 1
        return self.value


@pytest.fixture
def fixed_source():
    return FixedSource


@pytest.fixture
def client():
    """Test client with the default per-request random source."""
    with TestClient(app) as c:
        yield c


@pytest.fixture
def client_with_draw():
    """Factory for a test client whose random source always returns ``value``."""
    def _make(value: float) -> TestClient:
        app.dependency_overrides[get_rng] = lambda: FixedSource(value)
        return TestClient(app)

    yield _make
    app.dependency_overrides.clear()
