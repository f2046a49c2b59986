from __future__ import annotations

from typing import Iterable

from backend.core.geo import haversine_distance_km
from backend.core.models import ALL_REGIONS, Listing, ObserverLocation, RankedListing, SearchFilter


def rank(
    listings: Iterable[Listing],
    search_filter: SearchFilter | None = None,
    observer: ObserverLocation | None = None,
) -> list[RankedListing]:
    """
    Filter, annotate with distance and order listings for display.

    Without an observer the filtered input order is kept as is. With one,
    premium listings come first, then listings with a distance (nearest
    first), then listings without coordinates in their input order.
    """
    search_filter = search_filter or SearchFilter()
    ranked = [
        RankedListing(listing=listing, distance_km=annotate_distance(listing, observer))
        for listing in listings
        if matches_filter(listing, search_filter)
    ]
    if observer is None:
        return ranked
    # list.sort is stable, ties keep their input order.
    ranked.sort(key=_sort_key)
    return ranked


def matches_filter(listing: Listing, search_filter: SearchFilter) -> bool:
    text = (search_filter.text or "").lower()
    if text and text not in (listing.name or "").lower() and text not in (listing.city or "").lower():
        return False
    region = search_filter.region
    if region and region != ALL_REGIONS and listing.state != region:
        return False
    return True


def annotate_distance(listing: Listing, observer: ObserverLocation | None) -> float | None:
    if observer is None or not listing.has_coordinates:
        return None
    return haversine_distance_km(
        float(listing.latitude),
        float(listing.longitude),
        observer.latitude,
        observer.longitude,
    )


def split_premium(ranked: Iterable[RankedListing]) -> tuple[list[RankedListing], list[RankedListing]]:
    premium: list[RankedListing] = []
    regular: list[RankedListing] = []
    for item in ranked:
        (premium if item.is_premium else regular).append(item)
    return premium, regular


def _sort_key(item: RankedListing) -> tuple[bool, bool, float]:
    distance = item.distance_km
    return (not item.is_premium, distance is None, distance if distance is not None else 0.0)
