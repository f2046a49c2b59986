from __future__ import annotations

from typing import Iterable

from backend.core.models import Photo


MAX_PHOTOS_FREE = 5
MAX_PHOTOS_PREMIUM = 20
ALLOWED_CONTENT_TYPES = frozenset({"image/jpeg", "image/png", "image/webp"})


class PhotoLimitError(ValueError):
    def __init__(self, remaining: int, is_premium: bool) -> None:
        self.remaining = remaining
        self.is_premium = is_premium
        message = f"Only {remaining} more photo(s) allowed."
        if not is_premium:
            message += f" Premium listings can hold up to {MAX_PHOTOS_PREMIUM} photos."
        super().__init__(message)


def max_photos(is_premium: bool) -> int:
    return MAX_PHOTOS_PREMIUM if is_premium else MAX_PHOTOS_FREE


def remaining_photo_slots(current_count: int, is_premium: bool) -> int:
    return max(0, max_photos(is_premium) - current_count)


def check_photo_upload(current_count: int, new_count: int, is_premium: bool) -> None:
    remaining = remaining_photo_slots(current_count, is_premium)
    if new_count > remaining:
        raise PhotoLimitError(remaining, is_premium)


def is_allowed_content_type(content_type: str | None) -> bool:
    return (content_type or "").lower() in ALLOWED_CONTENT_TYPES


def next_display_order(photos: Iterable[Photo]) -> int:
    """
    Append position for a new photo. Orders may have gaps after deletions.
    """
    orders = [photo.display_order for photo in photos]
    return max(orders) + 1 if orders else 0
