import pytest

from backend.core.dashboard import build_dashboard_stats
from backend.core.models import Listing, Photo
from backend.core.photos import (
    PhotoLimitError,
    check_photo_upload,
    is_allowed_content_type,
    next_display_order,
    remaining_photo_slots,
)


def test_remaining_slots_by_tier():
    assert remaining_photo_slots(3, is_premium=False) == 2
    assert remaining_photo_slots(7, is_premium=False) == 0
    assert remaining_photo_slots(3, is_premium=True) == 17


def test_check_photo_upload_rejects_over_limit():
    check_photo_upload(4, 1, is_premium=False)
    with pytest.raises(PhotoLimitError) as excinfo:
        check_photo_upload(4, 2, is_premium=False)
    assert excinfo.value.remaining == 1
    assert "20" in str(excinfo.value)


def test_allowed_content_types():
    assert is_allowed_content_type("image/webp") is True
    assert is_allowed_content_type("IMAGE/JPEG") is True
    assert is_allowed_content_type("image/gif") is False
    assert is_allowed_content_type(None) is False


def test_next_display_order_appends_after_gaps():
    photos = [Photo(url="a", display_order=0), Photo(url="b", display_order=4)]
    assert next_display_order(photos) == 5
    assert next_display_order([]) == 0


def test_dashboard_stats_totals():
    listings = [
        Listing(id="1", name="A", city="B", state="SP", views_count=10, is_premium=True),
        Listing(id="2", name="C", city="D", state="RJ", views_count=5),
    ]
    stats = build_dashboard_stats(listings)
    assert stats.listing_count == 2
    assert stats.total_views == 15
    assert stats.premium_count == 1
