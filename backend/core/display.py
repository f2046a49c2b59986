from __future__ import annotations

import re
from urllib.parse import quote

from backend.core.models import Listing


WHATSAPP_COUNTRY_CODE = "55"


def format_distance(distance_km: float) -> str:
    if distance_km < 1:
        return f"{distance_km * 1000:.0f}m"
    return f"{distance_km:.1f}km"


def whatsapp_link(number: str) -> str:
    digits = re.sub(r"\D", "", number or "")
    return f"https://wa.me/{WHATSAPP_COUNTRY_CODE}{digits}"


def phone_link(number: str) -> str:
    return f"tel:{number}"


def google_maps_link(listing: Listing) -> str:
    if listing.has_coordinates:
        return (
            "https://www.google.com/maps/dir/?api=1"
            f"&destination={listing.latitude},{listing.longitude}"
        )
    return f"https://www.google.com/maps/search/?api=1&query={_address_query(listing)}"


def waze_link(listing: Listing) -> str:
    if listing.has_coordinates:
        return f"https://waze.com/ul?ll={listing.latitude},{listing.longitude}&navigate=yes"
    return f"https://waze.com/ul?q={_address_query(listing)}&navigate=yes"


def cover_photo_url(listing: Listing) -> str | None:
    return listing.photos[0].url if listing.photos else None


def _address_query(listing: Listing) -> str:
    return quote(f"{listing.address}, {listing.city} - {listing.state}", safe="")
