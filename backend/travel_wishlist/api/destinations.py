import logging
from fastapi import APIRouter, HTTPException, Depends, Path, status
from pydantic import BaseModel, Field
from typing import List, Optional

from travel_wishlist.storage import (
    MAX_INTEGER,
    DestinationFields,
    DestinationRecord,
    DestinationStore,
    RankUpdate,
    StorageError,
    get_store,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/destinations", tags=["destinations"])


class DestinationPayload(BaseModel):
    """Body of create and replace requests. Presence of destination/country is checked by the handlers."""
    destination: Optional[str] = Field(None, description="Place name")
    country: Optional[str] = Field(None, description="Country")
    rank: Optional[int] = Field(None, ge=0, le=MAX_INTEGER, description="1-based priority position; 0 counts as unset")
    latitude: Optional[float] = Field(None, description="Latitude")
    longitude: Optional[float] = Field(None, description="Longitude")
    reason: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    image_url: Optional[str] = None


class RanksPayload(BaseModel):
    ranks: Optional[List[RankUpdate]] = Field(None, description="Complete (id, rank) mapping")


def _require_place(payload: DestinationPayload):
    if not payload.destination or not payload.country:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Destination and country are required"
        )


def _not_found() -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND,
        detail="Destination not found"
    )


@router.get("", response_model=List[DestinationRecord])
def get_destinations(store: DestinationStore = Depends(get_store)):
    """Get the whole wishlist, ascending by rank."""
    return store.list_all()


@router.post("", response_model=DestinationRecord, status_code=status.HTTP_201_CREATED)
def create_destination(
    payload: DestinationPayload,
    store: DestinationStore = Depends(get_store)
):
    """Create a new destination."""
    _require_place(payload)

    fields = DestinationFields(
        rank=payload.rank or 1,
        destination=payload.destination,
        country=payload.country,
        latitude=payload.latitude or 0,
        longitude=payload.longitude or 0,
        reason=payload.reason or "",
        budget=payload.budget or "",
        timeline=payload.timeline or "",
        image_url=payload.image_url or "",
    )

    try:
        return store.create(fields)
    except StorageError as e:
        logger.error(f"Error creating travel destination: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to create travel destination"
        )


@router.patch("")
def update_destination_ranks(
    payload: RanksPayload,
    store: DestinationStore = Depends(get_store)
):
    """Apply a complete rank mapping in one batch."""
    if payload.ranks is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Ranks array is required"
        )

    if not store.update_ranks(payload.ranks):
        logger.error(f"Error updating ranks for {len(payload.ranks)} destinations")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update ranks"
        )

    return {"success": True}


@router.get("/{destination_id}", response_model=DestinationRecord)
def get_destination(
    destination_id: int = Path(..., le=MAX_INTEGER),
    store: DestinationStore = Depends(get_store)
):
    """Get a specific destination by ID."""
    destination = store.get(destination_id)
    if destination is None:
        raise _not_found()
    return destination


@router.put("/{destination_id}", response_model=DestinationRecord)
def update_destination(
    payload: DestinationPayload,
    destination_id: int = Path(..., le=MAX_INTEGER),
    store: DestinationStore = Depends(get_store)
):
    """Update a destination. Fields missing from the body keep their stored values."""
    _require_place(payload)

    fields = payload.model_dump(exclude_unset=True)
    if not fields.get("rank"):
        fields.pop("rank", None)

    try:
        destination = store.update(destination_id, fields)
    except StorageError as e:
        logger.error(f"Error updating travel destination {destination_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to update travel destination"
        )

    if destination is None:
        raise _not_found()
    return destination


@router.delete("/{destination_id}")
def delete_destination(
    destination_id: int = Path(..., le=MAX_INTEGER),
    store: DestinationStore = Depends(get_store)
):
    """Hard delete a destination."""
    try:
        deleted = store.remove(destination_id)
    except StorageError as e:
        logger.error(f"Error deleting travel destination {destination_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete travel destination"
        )

    if not deleted:
        raise _not_found()
    return {"success": True}
