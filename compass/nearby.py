"""
Nearby store ranking.

The place search itself belongs to an external collaborator (a platform map
search, a places API, ...). This module defines the collaborator interface and
turns its raw results into NearbyStore records ranked by straight-line distance
from the user's location.

Flow: user location available -> provider.search(center, query) -> drop nameless
places -> compute distances -> sort ascending.
"""

import logging
from abc import ABC, abstractmethod
from typing import List, Optional

from compass.config import NearbyConfig
from compass.models import NO_ADDRESS_TEXT, Coordinate, NearbyStore, PlaceResult
from compass.utils.geo import haversine_distance_m

logger = logging.getLogger(__name__)


class BaseNearbyPlacesProvider(ABC):
    """Abstract collaborator answering free-text place searches around a coordinate."""

    @abstractmethod
    def search(self, center: Coordinate, query: str) -> List[PlaceResult]:
        """
        Search for places around a coordinate.

        Args:
            center: Coordinate to search around
            query: Free-text category (e.g., "Grocery Store, Liquor Store")

        Returns:
            List of PlaceResult in provider order
        """


def sort_by_distance(stores: List[NearbyStore]) -> List[NearbyStore]:
    """
    Sort stores ascending by distance. Stores without a distance sort first,
    as if they were at the user location.
    """
    return sorted(stores, key=lambda s: s.distance_m or 0.0)


def find_nearby_stores(
    provider: BaseNearbyPlacesProvider,
    user_location: Optional[Coordinate],
    query: Optional[str] = None,
) -> List[NearbyStore]:
    """
    Find stores near the user, closest first.

    Args:
        provider: Place search collaborator
        user_location: Current user coordinate; no search is made without one
        query: Free-text category (optional, reads NEARBY_STORE_QUERY)

    Returns:
        List of NearbyStore sorted ascending by distance_m

    Examples:
        >>> # provider returns places at 300m, 50m and 900m
        >>> [round(s.distance_m) for s in find_nearby_stores(provider, here)]
        [50, 300, 900]
    """
    if user_location is None:
        logger.debug("User location is not available, skipping nearby store search")
        return []

    query = query or NearbyConfig.get_store_query()
    places = provider.search(user_location, query)

    stores: List[NearbyStore] = []
    for place in places:
        if not place.name:
            continue
        distance = haversine_distance_m(
            user_location.latitude,
            user_location.longitude,
            place.coordinate.latitude,
            place.coordinate.longitude,
        )
        stores.append(
            NearbyStore(
                name=place.name,
                address=place.address or NO_ADDRESS_TEXT,
                coordinate=place.coordinate,
                distance_m=distance,
            )
        )

    logger.info("Nearby store search %r returned %d places, %d named", query, len(places), len(stores))
    return sort_by_distance(stores)
