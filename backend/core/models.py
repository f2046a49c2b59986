from __future__ import annotations

from dataclasses import dataclass, field


ALL_REGIONS = "all"


@dataclass(slots=True, frozen=True)
class Photo:
    url: str
    display_order: int
    id: str | None = None


@dataclass(slots=True, frozen=True)
class Listing:
    id: str
    name: str
    city: str
    state: str  # two-letter region code, e.g. SP
    description: str = ""
    address: str = ""
    phone: str = ""
    whatsapp: str = ""
    zip_code: str | None = None
    website: str | None = None
    instagram: str | None = None
    facebook: str | None = None
    twitter: str | None = None
    tiktok: str | None = None
    youtube: str | None = None
    onlyfans: str | None = None
    privacy_link: str | None = None
    latitude: float | None = None
    longitude: float | None = None
    is_premium: bool = False
    views_count: int = 0
    is_active: bool = True
    owner_id: str | None = None
    photos: tuple[Photo, ...] = field(default_factory=tuple)

    @property
    def has_coordinates(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass(slots=True, frozen=True)
class ObserverLocation:
    latitude: float
    longitude: float


@dataclass(slots=True, frozen=True)
class SearchFilter:
    text: str | None = None
    region: str | None = None  # None or "all" disables the region filter


@dataclass(slots=True, frozen=True)
class RankedListing:
    listing: Listing
    distance_km: float | None = None

    @property
    def id(self) -> str:
        return self.listing.id

    @property
    def is_premium(self) -> bool:
        return self.listing.is_premium


@dataclass(slots=True, frozen=True)
class DashboardStats:
    listing_count: int
    total_views: int
    premium_count: int
