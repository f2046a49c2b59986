import pytest

from backend.core.normalize import ListingValidationError, listing_form_to_record, listing_from_record


def _form(**overrides):
    form = {
        "name": "Blue Motel",
        "description": "Suites com hidromassagem",
        "address": "Av. Paulista, 1000",
        "city": "São Paulo",
        "state": "sp",
        "phone": "(11) 3333-4444",
        "whatsapp": "(11) 99999-8888",
    }
    form.update(overrides)
    return form


def test_listing_from_record_sorts_photos_and_keeps_nulls_distinct():
    listing = listing_from_record(
        {
            "id": "abc",
            "name": "Blue Motel",
            "city": "São Paulo",
            "state": "SP",
            "website": "",
            "instagram": "@bluemotel",
            "latitude": -23.55,
            "longitude": -46.63,
            "is_premium": True,
            "views_count": 42,
            "motel_photos": [
                {"id": "p2", "url": "https://cdn/2.jpg", "display_order": 7},
                {"id": "p1", "url": "https://cdn/1.jpg", "display_order": 2},
            ],
        }
    )

    assert listing.website is None
    assert listing.instagram == "@bluemotel"
    assert [photo.url for photo in listing.photos] == ["https://cdn/1.jpg", "https://cdn/2.jpg"]
    assert listing.is_premium is True
    assert listing.views_count == 42
    assert listing.has_coordinates is True


def test_listing_from_record_drops_partial_coordinates():
    listing = listing_from_record({"id": "x", "name": "A", "city": "B", "state": "RJ", "latitude": -22.9})
    assert listing.latitude is None
    assert listing.longitude is None


def test_listing_from_record_tolerates_missing_fields():
    listing = listing_from_record({"id": 5})
    assert listing.id == "5"
    assert listing.name == ""
    assert listing.photos == ()
    assert listing.views_count == 0


def test_form_to_record_maps_blank_optionals_to_none():
    record = listing_form_to_record(_form(website="  ", instagram="@blue"), owner_id="user-1")
    assert record["state"] == "SP"
    assert record["website"] is None
    assert record["instagram"] == "@blue"
    assert record["owner_id"] == "user-1"
    assert "latitude" not in record


def test_form_to_record_parses_coordinates_together():
    record = listing_form_to_record(_form(latitude="-23.5", longitude=""), owner_id="user-1")
    assert record["latitude"] is None
    assert record["longitude"] is None


def test_form_to_record_reports_missing_and_unknown_state():
    with pytest.raises(ListingValidationError) as excinfo:
        listing_form_to_record(_form(name="", state="XX"), owner_id="user-1")
    assert excinfo.value.errors == {"name": "required", "state": "unknown state code 'XX'"}
