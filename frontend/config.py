import os
from dotenv import load_dotenv

load_dotenv()

# Backend API configuration
API_BASE_URL = os.getenv("API_BASE_URL", "http://localhost:8000")
REQUEST_TIMEOUT_SECONDS = int(os.getenv("API_TIMEOUT_SECONDS", "15"))

# Streamlit configuration
PAGE_TITLE = "Travel Wishlist"
PAGE_ICON = "✈️"
LAYOUT = "wide"

# Flights on the map start here
ORIGIN_NAME = "San Francisco"
ORIGIN_LATITUDE = 37.7749
ORIGIN_LONGITUDE = -122.4194

DEFAULT_BUDGET = "moderate"

TIMELINE_OPTIONS = {
    "2025-q1": "🌸 Q1 2025 (Jan-Mar)",
    "2025-q2": "☀️ Q2 2025 (Apr-Jun)",
    "2025-q3": "🍂 Q3 2025 (Jul-Sep)",
    "2025-q4": "❄️ Q4 2025 (Oct-Dec)",
    "2026": "🗓️ 2026",
    "someday": "✨ Someday",
}
DEFAULT_TIMELINE = "someday"

# Colors (RGB for pydeck layers)
ORIGIN_COLOR = [255, 127, 14]
DESTINATION_COLOR = [31, 119, 180]
ARC_COLOR = [44, 160, 44]
