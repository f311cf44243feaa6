from .geocoding import GeocodeResult, GeocodingClient, GeocodingError, get_geocoder

__all__ = ["GeocodeResult", "GeocodingClient", "GeocodingError", "get_geocoder"]
