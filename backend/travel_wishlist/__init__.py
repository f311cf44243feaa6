"""Ranked travel wishlist: storage, HTTP API and geocoding."""

__version__ = "1.0.0"
