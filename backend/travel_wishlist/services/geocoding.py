import asyncio
import logging
from typing import Any, Dict, List, Optional

import aiohttp
from pydantic import BaseModel, Field

from travel_wishlist.core.config import settings

logger = logging.getLogger(__name__)


class GeocodingError(Exception):
    """The geocoding service could not be reached or answered with an error."""


class GeocodeResult(BaseModel):
    """Best match for a place name."""
    latitude: float = Field(..., description="Latitude of the best match")
    longitude: float = Field(..., description="Longitude of the best match")
    display_name: str = Field(..., description="Full name reported by the provider")


class GeocodingClient:
    """Looks up coordinates with OpenStreetMap Nominatim. No retries, no caching."""

    def __init__(
        self,
        base_url: str = settings.geocoding_url,
        user_agent: str = settings.geocoding_user_agent,
        timeout_seconds: int = settings.geocoding_timeout_seconds,
    ):
        self.base_url = base_url
        self.user_agent = user_agent
        self.timeout_seconds = timeout_seconds

    async def geocode(self, destination: str, country: str) -> Optional[GeocodeResult]:
        """Return the best match for ``destination, country`` or None when nothing matches."""
        params = {
            "format": "json",
            "q": f"{destination}, {country}",
            "limit": "1",
        }
        headers = {"User-Agent": self.user_agent}

        try:
            async with aiohttp.ClientSession(headers=headers) as session:
                async with session.get(
                    self.base_url,
                    params=params,
                    timeout=aiohttp.ClientTimeout(total=self.timeout_seconds),
                ) as response:
                    if response.status != 200:
                        raise GeocodingError(f"Geocoding request failed with HTTP {response.status}")
                    data = await response.json(content_type=None)
        except (aiohttp.ClientError, asyncio.TimeoutError, ValueError) as e:
            logger.error(f"Geocoding error for {params['q']!r}: {e}")
            raise GeocodingError(str(e)) from e

        return self._parse_response(data)

    def _parse_response(self, data: List[Dict[str, Any]]) -> Optional[GeocodeResult]:
        """Parse a Nominatim search response (a list of places, best first).

        Anything that is not a list of places with ``lat``/``lon`` raises
        GeocodingError, the same as an unreachable service.
        """
        if not isinstance(data, list):
            raise GeocodingError(f"Unexpected geocoding response: {type(data).__name__}")
        if not data:
            return None

        try:
            place = data[0]
            return GeocodeResult(
                latitude=float(place["lat"]),
                longitude=float(place["lon"]),
                display_name=place.get("display_name") or "",
            )
        except (KeyError, TypeError, ValueError, AttributeError) as e:
            logger.error(f"Unparseable geocoding response: {e!r}")
            raise GeocodingError(f"Unexpected geocoding response: {e!r}") from e


def get_geocoder() -> GeocodingClient:
    return GeocodingClient()
