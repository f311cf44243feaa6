#!/usr/bin/env python3
"""Seed script to populate an empty wishlist with sample destinations."""

import logging
from typing import List

from travel_wishlist.storage import DestinationFields, DestinationRecord, DestinationStore, get_store

logger = logging.getLogger(__name__)

SAMPLE_DESTINATIONS = [
    DestinationFields(
        rank=1,
        destination="Kyoto",
        country="Japan",
        latitude=35.0116,
        longitude=135.7681,
        reason="Temples, gardens and autumn colours",
        timeline="2026",
    ),
    DestinationFields(
        rank=2,
        destination="Paris",
        country="France",
        latitude=48.8566,
        longitude=2.3522,
        reason="World-class museums",
    ),
    DestinationFields(
        rank=3,
        destination="Tokyo",
        country="Japan",
        latitude=35.6762,
        longitude=139.6503,
        reason="Food",
    ),
]


def create_sample_data(store: DestinationStore) -> List[DestinationRecord]:
    """Insert the sample destinations unless the wishlist already has entries."""
    if store.list_all():
        logger.info("Wishlist already has destinations, skipping seed")
        return []

    created = [store.create(fields) for fields in SAMPLE_DESTINATIONS]
    logger.info(f"Created {len(created)} sample destinations")
    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    create_sample_data(get_store())
