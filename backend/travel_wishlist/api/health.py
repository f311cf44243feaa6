from fastapi import APIRouter, Depends, HTTPException
from datetime import datetime
from typing import Dict, Any

from travel_wishlist.storage import DestinationStore, get_store

router = APIRouter()


def check_database(store: DestinationStore) -> Dict[str, Any]:
    """Check database connectivity."""
    if store.ping():
        return {
            "status": "healthy",
            "backend": store.name,
            "timestamp": datetime.now().isoformat()
        }
    return {
        "status": "unhealthy",
        "backend": store.name,
        "error": "Database unreachable",
        "timestamp": datetime.now().isoformat()
    }


@router.get("/healthz")
def health_check(store: DestinationStore = Depends(get_store)):
    """
    Readiness check.
    Returns 200 when the destination store answers, 503 otherwise.
    """
    db_check = check_database(store)

    response = {
        "status": db_check["status"],
        "timestamp": datetime.now().isoformat(),
        "checks": {
            "database": db_check
        },
        "version": "1.0.0"
    }

    if db_check["status"] != "healthy":
        raise HTTPException(status_code=503, detail=response)

    return response


@router.get("/health")
async def simple_health_check():
    """Simple health check for load balancers."""
    return {"status": "ok", "timestamp": datetime.now().isoformat()}
