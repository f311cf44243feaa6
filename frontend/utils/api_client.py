import requests
from typing import Dict, Any, List
import json
from config import API_BASE_URL, REQUEST_TIMEOUT_SECONDS
from utils.ranking import move_item, rank_assignments


class APIClient:
    """Client for communicating with the backend API."""

    def __init__(self, base_url: str = API_BASE_URL, timeout: int = REQUEST_TIMEOUT_SECONDS):
        self.base_url = base_url
        self.timeout = timeout
        self.session = requests.Session()

        # Set default headers
        self.session.headers.update({
            "Content-Type": "application/json"
        })

    def get_destinations(self) -> Dict[str, Any]:
        """Get the wishlist in rank order."""
        return self._request("GET", "/destinations")

    def create_destination(self, destination_data: Dict[str, Any]) -> Dict[str, Any]:
        """Create a new destination."""
        return self._request("POST", "/destinations", json=destination_data)

    def get_destination(self, destination_id: int) -> Dict[str, Any]:
        """Get a specific destination by ID."""
        return self._request("GET", f"/destinations/{destination_id}")

    def update_destination(self, destination_id: int, destination_data: Dict[str, Any]) -> Dict[str, Any]:
        """Update a destination."""
        return self._request("PUT", f"/destinations/{destination_id}", json=destination_data)

    def delete_destination(self, destination_id: int) -> Dict[str, Any]:
        """Delete a destination."""
        return self._request("DELETE", f"/destinations/{destination_id}")

    def update_ranks(self, ranks: List[Dict[str, int]]) -> Dict[str, Any]:
        """Submit a complete (id, rank) mapping."""
        return self._request("PATCH", "/destinations", json={"ranks": ranks})

    def move_destination(self, destinations: List[Dict[str, Any]], index: int, offset: int) -> Dict[str, Any]:
        """Move one destination up (offset -1) or down (offset +1) and renumber the whole list."""
        reordered = move_item(destinations, index, offset)
        if reordered is None:
            return {"success": False, "error": "Destination cannot move further", "status_code": None}
        return self.update_ranks(rank_assignments(reordered))

    def geocode(self, destination: str, country: str) -> Dict[str, Any]:
        """Resolve coordinates for a place before saving it."""
        return self._request("GET", "/geocode", params={"destination": destination, "country": country})

    def get_health(self) -> Dict[str, Any]:
        """Get API health status."""
        return self._request("GET", "/health")

    def _request(self, method: str, path: str, **kwargs) -> Dict[str, Any]:
        try:
            response = self.session.request(method, f"{self.base_url}{path}", timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            return {"success": False, "error": f"Cannot reach API: {e}", "status_code": None}
        return self._handle_response(response)

    def _handle_response(self, response: requests.Response) -> Dict[str, Any]:
        """Handle API response and return JSON data or error."""
        try:
            data = response.json()
        except json.JSONDecodeError:
            data = {"error": "Invalid JSON response"}

        if response.status_code >= 400:
            error_msg = data.get("error", f"HTTP {response.status_code}") if isinstance(data, dict) else f"HTTP {response.status_code}"
            return {"success": False, "error": error_msg, "status_code": response.status_code}

        return {"success": True, "data": data}


# Global API client instance
api_client = APIClient()
