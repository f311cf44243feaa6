import pytest
from fastapi.testclient import TestClient

from travel_wishlist.main import app
from travel_wishlist.storage import DestinationFields, SQLiteDestinationStore, get_store


@pytest.fixture
def store(tmp_path):
    """A fresh SQLite-backed store in a temporary directory."""
    return SQLiteDestinationStore(str(tmp_path / "data" / "travel-wishlist.db"))


@pytest.fixture
def client(store):
    app.dependency_overrides[get_store] = lambda: store
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def make_fields():
    def _make(**overrides):
        values = {
            "rank": 1,
            "destination": "Tokyo",
            "country": "Japan",
            "latitude": 35.6762,
            "longitude": 139.6503,
            "reason": "food",
            "budget": "moderate",
            "timeline": "someday",
        }
        values.update(overrides)
        return DestinationFields(**values)
    return _make
