from __future__ import annotations

import argparse
import logging
import os
import sys

from backend.core.display import cover_photo_url, format_distance, phone_link, whatsapp_link
from backend.core.models import ALL_REGIONS, ObserverLocation, RankedListing, SearchFilter
from backend.core.ranking import rank, split_premium
from backend.core.supabase_repo import SupabaseRepo


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
LOGGER = logging.getLogger(__name__)


def run_search(
    repo: SupabaseRepo,
    text: str | None = None,
    region: str | None = None,
    observer: ObserverLocation | None = None,
) -> list[RankedListing]:
    listings = repo.get_active_listings()
    ranked = rank(listings, SearchFilter(text=text, region=region), observer)
    LOGGER.info(
        "Search text=%r region=%s observer=%s fetched=%s matched=%s",
        text,
        region or ALL_REGIONS,
        "yes" if observer else "no",
        len(listings),
        len(ranked),
    )
    return ranked


def format_result_line(item: RankedListing) -> str:
    listing = item.listing
    parts = [
        "[premium]" if listing.is_premium else "         ",
        f"{listing.name} ({listing.city}/{listing.state})",
    ]
    if item.distance_km is not None:
        parts.append(format_distance(item.distance_km))
    parts.append(f"views={listing.views_count}")
    if listing.whatsapp:
        parts.append(whatsapp_link(listing.whatsapp))
    elif listing.phone:
        parts.append(phone_link(listing.phone))
    photo = cover_photo_url(listing)
    if photo:
        parts.append(photo)
    return " | ".join(parts)


def parse_observer(lat: float | None, lng: float | None) -> ObserverLocation | None:
    if lat is None and lng is None:
        return None
    if lat is None or lng is None:
        raise ValueError("--lat and --lng must be given together.")
    return ObserverLocation(latitude=lat, longitude=lng)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Search active motel listings.")
    parser.add_argument("--query", default=None, help="Case-insensitive match on name or city.")
    parser.add_argument("--state", default=ALL_REGIONS, help="Two-letter state code, or 'all'.")
    parser.add_argument("--lat", type=float, default=None, help="Observer latitude.")
    parser.add_argument("--lng", type=float, default=None, help="Observer longitude.")
    parser.add_argument(
        "--limit",
        type=int,
        default=_env_int("SEARCH_RESULT_LIMIT", 0),
        help="Maximum lines to print per section (0 prints all).",
    )
    args = parser.parse_args(argv)

    try:
        observer = parse_observer(args.lat, args.lng)
    except ValueError as exc:
        parser.error(str(exc))

    try:
        ranked = run_search(SupabaseRepo(), text=args.query, region=args.state, observer=observer)
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Search failed: %s", exc)
        return 1

    premium, regular = split_premium(ranked)
    for title, section in (("Premium", premium), ("Nearby" if observer else "All listings", regular)):
        if not section:
            continue
        print(f"== {title} ({len(section)})")
        shown = section[: args.limit] if args.limit > 0 else section
        for item in shown:
            print(format_result_line(item))
    if not ranked:
        print("No listings found.")
    return 0


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        return int(raw.strip())
    except (TypeError, ValueError):
        return default


if __name__ == "__main__":
    sys.exit(main())
