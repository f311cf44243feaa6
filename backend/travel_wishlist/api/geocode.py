from fastapi import APIRouter, HTTPException, Depends, Query, status

from travel_wishlist.services.geocoding import GeocodeResult, GeocodingClient, GeocodingError, get_geocoder

router = APIRouter(tags=["geocoding"])


@router.get("/geocode", response_model=GeocodeResult)
async def geocode(
    destination: str = Query(..., description="Place name"),
    country: str = Query(..., description="Country"),
    geocoder: GeocodingClient = Depends(get_geocoder)
):
    """Resolve a place name to coordinates before it is saved."""
    if not destination.strip() or not country.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Destination and country are required"
        )

    try:
        result = await geocoder.geocode(destination.strip(), country.strip())
    except GeocodingError:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Geocoding service unavailable"
        )

    if result is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Location not found"
        )
    return result
