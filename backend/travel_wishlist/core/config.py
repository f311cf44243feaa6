from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # Environment
    environment: str = "development"
    log_level: str = "INFO"

    # Database: a hosted connection string switches to PostgreSQL,
    # otherwise a local SQLite file is used
    postgres_url: Optional[str] = None
    sqlite_path: str = "data/travel-wishlist.db"

    # Geocoding (OpenStreetMap Nominatim)
    geocoding_url: str = "https://nominatim.openstreetmap.org/search"
    geocoding_user_agent: str = "TravelWishlistApp/1.0"
    geocoding_timeout_seconds: int = 8

    # CORS
    allowed_origins: list[str] = ["*"]

    class Config:
        env_file = ".env"


settings = Settings()
