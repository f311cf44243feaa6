"""Tests for the destination store."""

from datetime import datetime
from decimal import Decimal

import pytest
from pydantic import ValidationError
from sqlalchemy import text

from travel_wishlist.core.config import Settings
from travel_wishlist.storage import (
    MAX_INTEGER,
    DestinationRecord,
    PostgresDestinationStore,
    RankUpdate,
    SQLiteDestinationStore,
    StorageError,
    create_store,
)
from travel_wishlist.storage.sql_store import normalize_postgres_url


class TestCreateAndRead:
    """Tests for create / get / list_all."""

    def test_create_then_get_round_trip(self, store, make_fields):
        created = store.create(make_fields())
        fetched = store.get(created.id)

        assert fetched is not None
        assert fetched.id == created.id
        assert fetched.destination == "Tokyo"
        assert fetched.country == "Japan"
        assert fetched.latitude == pytest.approx(35.6762)
        assert fetched.longitude == pytest.approx(139.6503)
        assert isinstance(fetched.latitude, float)
        assert isinstance(fetched.longitude, float)
        assert fetched.reason == "food"
        assert fetched.timeline == "someday"
        assert fetched.image_url is None
        assert isinstance(fetched.created_at, datetime)
        assert fetched.updated_at >= fetched.created_at

    def test_empty_image_url_is_stored_as_null(self, store, make_fields):
        created = store.create(make_fields(image_url=""))
        assert created.image_url is None

    def test_get_unknown_id_returns_none(self, store):
        assert store.get(999) is None

    def test_list_is_sorted_by_rank(self, store, make_fields):
        store.create(make_fields(rank=3, destination="Lima", country="Peru"))
        store.create(make_fields(rank=1, destination="Oslo", country="Norway"))
        store.create(make_fields(rank=2, destination="Cairo", country="Egypt"))

        ranks = [d.rank for d in store.list_all()]
        assert ranks == sorted(ranks)
        assert [d.destination for d in store.list_all()] == ["Oslo", "Cairo", "Lima"]

    def test_list_empty_store(self, store):
        assert store.list_all() == []

    def test_ids_are_not_reused_after_delete(self, store, make_fields):
        first = store.create(make_fields())
        second = store.create(make_fields(destination="Osaka"))
        assert store.remove(second.id)

        third = store.create(make_fields(destination="Nara"))
        assert third.id > second.id > first.id


class TestUpdate:
    """Tests for partial updates."""

    def test_empty_update_only_touches_updated_at(self, store, make_fields):
        created = store.create(make_fields())
        updated = store.update(created.id, {})

        assert updated is not None
        assert updated.updated_at > created.updated_at
        unchanged = updated.model_dump(exclude={"updated_at"})
        assert unchanged == created.model_dump(exclude={"updated_at"})

    def test_partial_update_keeps_other_fields(self, store, make_fields):
        created = store.create(make_fields())
        updated = store.update(created.id, {"reason": "ramen", "rank": 4})

        assert updated.reason == "ramen"
        assert updated.rank == 4
        assert updated.destination == "Tokyo"
        assert updated.latitude == pytest.approx(35.6762)

    def test_none_for_required_column_is_ignored(self, store, make_fields):
        created = store.create(make_fields())
        updated = store.update(created.id, {"destination": None, "timeline": None})

        assert updated.destination == "Tokyo"
        assert updated.timeline == "someday"

    def test_image_url_can_be_set_and_cleared(self, store, make_fields):
        created = store.create(make_fields())
        with_image = store.update(created.id, {"image_url": "https://example.com/tokyo.jpg"})
        assert with_image.image_url == "https://example.com/tokyo.jpg"

        cleared = store.update(created.id, {"image_url": None})
        assert cleared.image_url is None

    def test_update_unknown_id_does_not_create(self, store):
        assert store.update(999, {"destination": "Nowhere"}) is None
        assert store.list_all() == []


class TestRemove:
    """Tests for hard deletes."""

    def test_remove_then_get(self, store, make_fields):
        created = store.create(make_fields())

        assert store.remove(created.id) is True
        assert store.get(created.id) is None

    def test_remove_absent_id_returns_false(self, store, make_fields):
        created = store.create(make_fields())
        store.remove(created.id)

        assert store.remove(created.id) is False
        assert store.remove(12345) is False


class TestUpdateRanks:
    """Tests for the bulk reorder."""

    def test_swapping_ranks_changes_order(self, store, make_fields):
        a = store.create(make_fields(rank=1, destination="A"))
        b = store.create(make_fields(rank=2, destination="B"))

        assert store.update_ranks([RankUpdate(id=a.id, rank=2), RankUpdate(id=b.id, rank=1)])
        assert [d.id for d in store.list_all()] == [b.id, a.id]

    def test_reorder_is_idempotent(self, store, make_fields):
        ids = [store.create(make_fields(rank=i + 1, destination=f"D{i}")).id for i in range(3)]
        mapping = [RankUpdate(id=ids[2], rank=1), RankUpdate(id=ids[0], rank=2), RankUpdate(id=ids[1], rank=3)]

        store.update_ranks(mapping)
        first = [d.id for d in store.list_all()]
        store.update_ranks(mapping)
        second = [d.id for d in store.list_all()]

        assert first == second == [ids[2], ids[0], ids[1]]
        assert [d.rank for d in store.list_all()] == [1, 2, 3]

    def test_unknown_ids_are_ignored(self, store, make_fields):
        a = store.create(make_fields(rank=1))

        assert store.update_ranks([RankUpdate(id=999, rank=1), RankUpdate(id=a.id, rank=5)])
        assert store.get(a.id).rank == 5

    def test_empty_batch_succeeds(self, store):
        assert store.update_ranks([]) is True

    def test_failed_batch_is_rolled_back(self, store, make_fields):
        a = store.create(make_fields(rank=1, destination="A"))
        b = store.create(make_fields(rank=2, destination="B"))

        with store._engine.begin() as conn:
            conn.execute(text(
                "CREATE TRIGGER reject_rank BEFORE UPDATE OF rank ON travel_destinations "
                "WHEN NEW.rank = 99 BEGIN SELECT RAISE(ABORT, 'rejected'); END"
            ))

        assert store.update_ranks([RankUpdate(id=a.id, rank=2), RankUpdate(id=b.id, rank=99)]) is False
        assert store.get(a.id).rank == 1
        assert store.get(b.id).rank == 2


class TestIntegerRange:
    """Ids and ranks are bounded to what a BIGINT column holds on both backends."""

    def test_out_of_range_id_is_never_found(self, store, make_fields):
        store.create(make_fields())

        assert store.get(2**64) is None
        assert store.get(-(2**64)) is None
        assert store.update(2**64, {"destination": "Nowhere"}) is None
        assert store.remove(2**64) is False
        assert len(store.list_all()) == 1

    def test_largest_rank_is_stored(self, store, make_fields):
        a = store.create(make_fields())

        assert store.update_ranks([RankUpdate(id=a.id, rank=MAX_INTEGER)])
        assert store.get(a.id).rank == MAX_INTEGER

    @pytest.mark.parametrize("values", [
        {"id": 1, "rank": 2**64},
        {"id": 2**64, "rank": 1},
        {"id": 1, "rank": 0},
    ])
    def test_rank_update_out_of_range_is_rejected(self, values):
        with pytest.raises(ValidationError):
            RankUpdate(**values)

    def test_fields_rank_out_of_range_is_rejected(self, make_fields):
        with pytest.raises(ValidationError):
            make_fields(rank=MAX_INTEGER + 1)


class TestBackendFailures:
    """An unusable database path stands in for a broken backend."""

    @pytest.fixture
    def broken_store(self, tmp_path):
        blocker = tmp_path / "not-a-directory"
        blocker.write_text("")
        return SQLiteDestinationStore(str(blocker / "travel-wishlist.db"))

    def test_reads_degrade_to_empty(self, broken_store):
        assert broken_store.list_all() == []
        assert broken_store.get(1) is None
        assert broken_store.ping() is False

    def test_writes_raise_storage_error(self, broken_store, make_fields):
        with pytest.raises(StorageError):
            broken_store.create(make_fields())
        with pytest.raises(StorageError):
            broken_store.update(1, {})
        with pytest.raises(StorageError):
            broken_store.remove(1)

    def test_rank_update_reports_failure(self, broken_store):
        assert broken_store.update_ranks([RankUpdate(id=1, rank=1)]) is False


class TestBackendSelection:
    """Tests for choosing the backend from configuration."""

    def test_connection_string_selects_postgres(self):
        store = create_store(Settings(_env_file=None, postgres_url="postgres://user:pw@db.example.com/wishlist"))

        assert isinstance(store, PostgresDestinationStore)
        assert store.url == "postgresql://user:pw@db.example.com/wishlist"

    def test_no_connection_string_selects_sqlite(self, tmp_path):
        path = str(tmp_path / "local.db")
        store = create_store(Settings(_env_file=None, postgres_url=None, sqlite_path=path))

        assert isinstance(store, SQLiteDestinationStore)
        assert store.path == path

    def test_sqlite_store_creates_database_lazily(self, tmp_path):
        path = tmp_path / "nested" / "local.db"
        store = SQLiteDestinationStore(str(path))
        assert not path.exists()

        assert store.ping() is True
        assert path.exists()

    def test_normalize_postgres_url(self):
        assert normalize_postgres_url("postgres://h/db") == "postgresql://h/db"
        assert normalize_postgres_url("postgresql://h/db") == "postgresql://h/db"


class TestRecordNormalization:
    """Driver values are coerced to numbers before leaving the store."""

    def test_decimal_and_text_values_become_numbers(self):
        record = DestinationRecord.model_validate({
            "id": "7",
            "rank": "2",
            "destination": "Tokyo",
            "country": "Japan",
            "latitude": Decimal("35.67620000"),
            "longitude": "139.65030000",
            "reason": "",
            "budget": "moderate",
            "timeline": "someday",
            "image_url": None,
            "created_at": datetime(2025, 1, 1),
            "updated_at": datetime(2025, 1, 1),
        })

        assert record.id == 7
        assert record.rank == 2
        assert isinstance(record.latitude, float)
        assert record.latitude == pytest.approx(35.6762)
        assert record.longitude == pytest.approx(139.6503)
