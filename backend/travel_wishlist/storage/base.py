from abc import ABC, abstractmethod
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from pydantic import BaseModel, Field, field_validator

# Largest value an INTEGER/BIGINT column holds on either backend
MAX_INTEGER = 2**63 - 1


class StorageError(Exception):
    """Raised when a write against the backing store fails."""

    def __init__(self, operation: str, message: str):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation


class DestinationFields(BaseModel):
    """Fields required to create a destination."""
    rank: int = Field(..., ge=1, le=MAX_INTEGER, description="1-based priority position")
    destination: str = Field(..., min_length=1, description="Place name")
    country: str = Field(..., min_length=1, description="Country")
    latitude: float = Field(..., description="Latitude")
    longitude: float = Field(..., description="Longitude")
    reason: str = Field("", description="Why this place is on the list")
    budget: str = Field("moderate", description="Budget category")
    timeline: str = Field("someday", description="Target quarter or 'someday'")
    image_url: Optional[str] = Field(None, description="Optional picture")


class RankUpdate(BaseModel):
    """One (id, rank) pair of a bulk reorder."""
    id: int = Field(..., le=MAX_INTEGER)
    rank: int = Field(..., ge=1, le=MAX_INTEGER)


class DestinationRecord(BaseModel):
    """Canonical stored destination as handed to callers."""
    id: int
    rank: int
    destination: str
    country: str
    latitude: float
    longitude: float
    reason: str
    budget: str
    timeline: str
    image_url: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    @field_validator("latitude", "longitude", mode="before")
    @classmethod
    def normalize_decimal(cls, value: Any) -> Any:
        # DECIMAL columns come back as Decimal (or text from some drivers)
        if isinstance(value, (Decimal, str)):
            return float(value)
        return value

    @field_validator("id", "rank", mode="before")
    @classmethod
    def normalize_integer(cls, value: Any) -> Any:
        if isinstance(value, str):
            return int(value, 10)
        return value

    class Config:
        from_attributes = True


class DestinationStore(ABC):
    """Uniform storage interface for destinations, independent of backend."""

    name: str = "abstract"

    @abstractmethod
    def list_all(self) -> List[DestinationRecord]:
        """All destinations ascending by rank. Returns [] on backend failure."""
        pass

    @abstractmethod
    def get(self, destination_id: int) -> Optional[DestinationRecord]:
        """A single destination, or None when it does not exist."""
        pass

    @abstractmethod
    def create(self, fields: DestinationFields) -> DestinationRecord:
        """Insert a destination. Raises StorageError when the write fails."""
        pass

    @abstractmethod
    def update(self, destination_id: int, fields: Dict[str, Any]) -> Optional[DestinationRecord]:
        """Merge the given fields into an existing destination.

        Fields that are not supplied keep their stored value and
        ``updated_at`` is always refreshed. Returns None for an unknown id.
        """
        pass

    @abstractmethod
    def remove(self, destination_id: int) -> bool:
        """Delete a destination. False when the id does not exist."""
        pass

    @abstractmethod
    def update_ranks(self, ranks: List[RankUpdate]) -> bool:
        """Apply a batch of (id, rank) pairs. Unknown ids are ignored."""
        pass

    @abstractmethod
    def ping(self) -> bool:
        """Check that the backend is reachable."""
        pass
