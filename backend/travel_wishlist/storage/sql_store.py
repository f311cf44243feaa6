import logging
import os
import threading
from abc import abstractmethod
from contextlib import contextmanager
from datetime import datetime, timedelta
from typing import Any, Dict, Iterator, List, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from travel_wishlist.core.database import Base
from travel_wishlist.models import Destination
from travel_wishlist.models.base import utcnow
from .base import MAX_INTEGER, DestinationFields, DestinationRecord, DestinationStore, RankUpdate, StorageError

logger = logging.getLogger(__name__)

# Failures of the backing store itself; creating the SQLite directory can raise OSError
# and the sqlite3 driver raises OverflowError for integers wider than 64 bits
BACKEND_ERRORS = (SQLAlchemyError, OSError, OverflowError)

UPDATABLE_FIELDS = (
    "rank",
    "destination",
    "country",
    "latitude",
    "longitude",
    "reason",
    "budget",
    "timeline",
    "image_url",
)
NULLABLE_FIELDS = {"image_url"}


def _next_timestamp(previous: Optional[datetime]) -> datetime:
    """Current time, nudged past ``previous`` so updates strictly advance."""
    now = utcnow()
    if previous is not None and now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def normalize_postgres_url(url: str) -> str:
    """Hosted providers hand out postgres:// URLs which SQLAlchemy rejects."""
    if url.startswith("postgres://"):
        return "postgresql://" + url[len("postgres://"):]
    return url


def _storable_id(destination_id: int) -> bool:
    """Ids outside the BIGINT range can never match a stored row."""
    return -MAX_INTEGER - 1 <= destination_id <= MAX_INTEGER


class SQLAlchemyDestinationStore(DestinationStore):
    """Destination storage over a SQLAlchemy engine.

    The engine is created on first use and kept for the lifetime of the
    process. The table is created with ``CREATE TABLE IF NOT EXISTS`` the
    first time the store is touched.
    """

    def __init__(self):
        self._engine: Optional[Engine] = None
        self._session_factory: Optional[sessionmaker] = None
        self._schema_ready = False
        self._lock = threading.Lock()

    @abstractmethod
    def _create_engine(self) -> Engine:
        """Build the engine for this backend."""
        pass

    def _initialize(self):
        with self._lock:
            if self._engine is None:
                self._engine = self._create_engine()
                self._session_factory = sessionmaker(
                    bind=self._engine, autoflush=False, expire_on_commit=False
                )
                logger.info("Opened %s destination store", self.name)
            if not self._schema_ready:
                Base.metadata.create_all(bind=self._engine, checkfirst=True)
                self._schema_ready = True

    @contextmanager
    def _session(self) -> Iterator[Session]:
        if self._engine is None or not self._schema_ready:
            self._initialize()
        db = self._session_factory()
        try:
            yield db
        finally:
            db.close()

    def list_all(self) -> List[DestinationRecord]:
        try:
            with self._session() as db:
                rows = (
                    db.query(Destination)
                    .order_by(Destination.rank.asc(), Destination.id.asc())
                    .all()
                )
                return [DestinationRecord.model_validate(row) for row in rows]
        except BACKEND_ERRORS:
            logger.exception("Error listing destinations from %s store", self.name)
            return []

    def get(self, destination_id: int) -> Optional[DestinationRecord]:
        if not _storable_id(destination_id):
            return None
        try:
            with self._session() as db:
                row = db.get(Destination, destination_id)
                return DestinationRecord.model_validate(row) if row else None
        except BACKEND_ERRORS:
            logger.exception("Error fetching destination %s from %s store", destination_id, self.name)
            return None

    def create(self, fields: DestinationFields) -> DestinationRecord:
        try:
            with self._session() as db:
                values = fields.model_dump()
                values["image_url"] = values.get("image_url") or None
                now = utcnow()
                row = Destination(**values, created_at=now, updated_at=now)
                db.add(row)
                db.commit()
                db.refresh(row)
                logger.info("Created destination %s (%s, %s)", row.id, row.destination, row.country)
                return DestinationRecord.model_validate(row)
        except BACKEND_ERRORS as e:
            logger.exception("Error creating destination in %s store", self.name)
            raise StorageError("create", str(e)) from e

    def update(self, destination_id: int, fields: Dict[str, Any]) -> Optional[DestinationRecord]:
        if not _storable_id(destination_id):
            return None
        try:
            with self._session() as db:
                row = db.get(Destination, destination_id)
                if row is None:
                    return None

                for field in UPDATABLE_FIELDS:
                    if field not in fields:
                        continue
                    value = fields[field]
                    if value is None and field not in NULLABLE_FIELDS:
                        continue
                    if field == "image_url":
                        value = value or None
                    setattr(row, field, value)
                row.updated_at = _next_timestamp(row.updated_at)

                db.commit()
                db.refresh(row)
                return DestinationRecord.model_validate(row)
        except BACKEND_ERRORS as e:
            logger.exception("Error updating destination %s in %s store", destination_id, self.name)
            raise StorageError("update", str(e)) from e

    def remove(self, destination_id: int) -> bool:
        if not _storable_id(destination_id):
            return False
        try:
            with self._session() as db:
                deleted = (
                    db.query(Destination)
                    .filter(Destination.id == destination_id)
                    .delete(synchronize_session=False)
                )
                db.commit()
                if deleted:
                    logger.info("Deleted destination %s", destination_id)
                return deleted > 0
        except BACKEND_ERRORS as e:
            logger.exception("Error deleting destination %s from %s store", destination_id, self.name)
            raise StorageError("remove", str(e)) from e

    def update_ranks(self, ranks: List[RankUpdate]) -> bool:
        # One transaction for the whole batch; a failure rolls every pair back
        try:
            with self._session() as db:
                now = utcnow()
                for pair in ranks:
                    db.query(Destination).filter(Destination.id == pair.id).update(
                        {Destination.rank: pair.rank, Destination.updated_at: now},
                        synchronize_session=False,
                    )
                db.commit()
            return True
        except BACKEND_ERRORS:
            logger.exception("Error updating %d ranks in %s store", len(ranks), self.name)
            return False

    def ping(self) -> bool:
        try:
            with self._session() as db:
                db.execute(text("SELECT 1")).fetchone()
            return True
        except BACKEND_ERRORS as e:
            logger.warning("%s store is unreachable: %s", self.name, e)
            return False


class SQLiteDestinationStore(SQLAlchemyDestinationStore):
    """Zero-infrastructure store backed by a local SQLite file."""

    name = "sqlite"

    def __init__(self, path: str):
        super().__init__()
        self.path = path

    def _create_engine(self) -> Engine:
        directory = os.path.dirname(os.path.abspath(self.path))
        os.makedirs(directory, exist_ok=True)
        return create_engine(
            f"sqlite:///{self.path}",
            connect_args={"check_same_thread": False},
        )


class PostgresDestinationStore(SQLAlchemyDestinationStore):
    """Store backed by a hosted PostgreSQL database."""

    name = "postgres"

    def __init__(self, url: str):
        super().__init__()
        self.url = normalize_postgres_url(url)

    def _create_engine(self) -> Engine:
        return create_engine(self.url, pool_pre_ping=True)
