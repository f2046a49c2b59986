from __future__ import annotations

import logging
import os
from typing import Any

from supabase import Client, create_client

from backend.core.models import Listing, Photo
from backend.core.normalize import listing_from_record, photos_from_records


LOGGER = logging.getLogger(__name__)

LISTING_COLUMNS = (
    "id, name, description, address, city, state, zip_code, phone, whatsapp, website, "
    "instagram, facebook, twitter, tiktok, youtube, onlyfans, privacy_link, "
    "latitude, longitude, is_premium, views_count, is_active, owner_id"
)
PHOTO_COLUMNS = "id, url, display_order"


class SupabaseRepo:
    def __init__(self, url: str | None = None, key: str | None = None, client: Client | None = None) -> None:
        if client is not None:
            self.client = client
            return
        supabase_url = url or os.environ.get("SUPABASE_URL")
        supabase_key = (
            key
            or os.environ.get("SUPABASE_SERVICE_ROLE_KEY")
            or os.environ.get("SUPABASE_ANON_KEY")
        )
        if not supabase_url or not supabase_key:
            raise ValueError("SUPABASE_URL and SUPABASE_SERVICE_ROLE_KEY (or SUPABASE_ANON_KEY) are required.")
        self.client = create_client(supabase_url, supabase_key)

    def get_active_listings(self) -> list[Listing]:
        rows = (
            self.client.table("motels")
            .select(f"{LISTING_COLUMNS}, motel_photos ({PHOTO_COLUMNS})")
            .eq("is_active", True)
            .order("is_premium", desc=True)
            .order("views_count", desc=True)
            .execute()
            .data
            or []
        )
        return [listing_from_record(row) for row in rows]

    def get_listing(self, listing_id: str) -> Listing | None:
        rows = (
            self.client.table("motels")
            .select(f"{LISTING_COLUMNS}, motel_photos ({PHOTO_COLUMNS})")
            .eq("id", listing_id)
            .limit(1)
            .execute()
            .data
            or []
        )
        return listing_from_record(rows[0]) if rows else None

    def increment_views(self, listing_id: str) -> bool:
        """
        View counting is best effort: a failed increment must not break a detail page.
        """
        try:
            self.client.rpc("increment_motel_views", {"motel_uuid": listing_id}).execute()
            return True
        except Exception as exc:  # noqa: BLE001
            LOGGER.warning("View increment failed listing_id=%s error=%s", listing_id, exc)
            return False

    def get_owner_listings(self, owner_id: str) -> list[Listing]:
        rows = (
            self.client.table("motels")
            .select(f"{LISTING_COLUMNS}, motel_photos ({PHOTO_COLUMNS})")
            .eq("owner_id", owner_id)
            .order("created_at", desc=True)
            .execute()
            .data
            or []
        )
        return [listing_from_record(row) for row in rows]

    def create_listing(self, record: dict[str, Any]) -> Listing:
        response = self.client.table("motels").insert(record).execute()
        rows = response.data or []
        if not rows:
            raise RuntimeError("Listing insert returned no row.")
        return listing_from_record(rows[0])

    def update_listing(self, listing_id: str, record: dict[str, Any]) -> Listing | None:
        update_row = dict(record)
        # Premium tier and view counter are owned by billing and the view RPC.
        for column in ("id", "is_premium", "views_count"):
            update_row.pop(column, None)
        response = self.client.table("motels").update(update_row).eq("id", listing_id).execute()
        rows = response.data or []
        return listing_from_record(rows[0]) if rows else None

    def delete_listing(self, listing_id: str) -> None:
        self.client.table("motels").delete().eq("id", listing_id).execute()

    def get_listing_photos(self, listing_id: str) -> tuple[Photo, ...]:
        rows = (
            self.client.table("motel_photos")
            .select(PHOTO_COLUMNS)
            .eq("motel_id", listing_id)
            .order("display_order")
            .execute()
            .data
            or []
        )
        return photos_from_records(rows)

    def add_photo(self, listing_id: str, url: str, display_order: int) -> Photo:
        row = {"motel_id": listing_id, "url": url, "display_order": display_order}
        response = self.client.table("motel_photos").insert(row).execute()
        photos = photos_from_records(response.data or [])
        if not photos:
            raise RuntimeError("Photo insert returned no row.")
        return photos[0]

    def delete_photo(self, photo_id: str) -> None:
        self.client.table("motel_photos").delete().eq("id", photo_id).execute()
