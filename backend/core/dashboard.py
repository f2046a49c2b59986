from __future__ import annotations

from typing import Iterable

from backend.core.models import DashboardStats, Listing


def build_dashboard_stats(listings: Iterable[Listing]) -> DashboardStats:
    listing_count = 0
    total_views = 0
    premium_count = 0
    for listing in listings:
        listing_count += 1
        total_views += listing.views_count
        if listing.is_premium:
            premium_count += 1
    return DashboardStats(
        listing_count=listing_count,
        total_views=total_views,
        premium_count=premium_count,
    )
