from datetime import datetime, timezone

from sqlalchemy import Column, BigInteger, Integer, DateTime
from sqlalchemy.sql import func
from travel_wishlist.core.database import Base


def utcnow() -> datetime:
    """Naive UTC timestamp, comparable across SQLite and PostgreSQL."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


class BaseModel(Base):
    __abstract__ = True

    # SQLite only autoincrements an INTEGER primary key
    id = Column(BigInteger().with_variant(Integer(), "sqlite"), primary_key=True, autoincrement=True)
    created_at = Column(DateTime, nullable=False, default=utcnow, server_default=func.now())
    updated_at = Column(DateTime, nullable=False, default=utcnow, server_default=func.now())
