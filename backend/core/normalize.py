from __future__ import annotations

from typing import Any

from backend.core.geo import coordinate_pair
from backend.core.models import Listing, Photo


BRAZILIAN_STATES = (
    "AC", "AL", "AP", "AM", "BA", "CE", "DF", "ES", "GO", "MA",
    "MT", "MS", "MG", "PA", "PB", "PR", "PE", "PI", "RJ", "RN",
    "RS", "RO", "RR", "SC", "SP", "SE", "TO",
)

REQUIRED_FORM_FIELDS = ("name", "description", "address", "city", "state", "phone", "whatsapp")
OPTIONAL_FORM_FIELDS = (
    "zip_code",
    "website",
    "instagram",
    "facebook",
    "twitter",
    "tiktok",
    "youtube",
    "onlyfans",
    "privacy_link",
)


class ListingValidationError(ValueError):
    def __init__(self, errors: dict[str, str]) -> None:
        self.errors = errors
        details = ", ".join(f"{name}: {message}" for name, message in sorted(errors.items()))
        super().__init__(f"Invalid listing form ({details}).")


def listing_from_record(row: dict[str, Any]) -> Listing:
    """
    Build a Listing from a `motels` row, with or without embedded `motel_photos`.
    """
    coords = coordinate_pair(row.get("latitude"), row.get("longitude"))
    raw_photos = row.get("motel_photos")
    if raw_photos is None:
        raw_photos = row.get("photos") or []
    return Listing(
        id=str(row.get("id") or ""),
        name=_text(row.get("name")),
        city=_text(row.get("city")),
        state=_text(row.get("state")).upper(),
        description=_text(row.get("description")),
        address=_text(row.get("address")),
        phone=_text(row.get("phone")),
        whatsapp=_text(row.get("whatsapp")),
        zip_code=_optional_text(row.get("zip_code")),
        website=_optional_text(row.get("website")),
        instagram=_optional_text(row.get("instagram")),
        facebook=_optional_text(row.get("facebook")),
        twitter=_optional_text(row.get("twitter")),
        tiktok=_optional_text(row.get("tiktok")),
        youtube=_optional_text(row.get("youtube")),
        onlyfans=_optional_text(row.get("onlyfans")),
        privacy_link=_optional_text(row.get("privacy_link")),
        latitude=coords[0] if coords else None,
        longitude=coords[1] if coords else None,
        is_premium=bool(row.get("is_premium")),
        views_count=max(0, _safe_int(row.get("views_count")) or 0),
        is_active=bool(row.get("is_active", True)),
        owner_id=_optional_text(row.get("owner_id")),
        photos=photos_from_records(raw_photos),
    )


def photos_from_records(rows: list[dict[str, Any]]) -> tuple[Photo, ...]:
    photos = []
    for row in rows:
        url = _optional_text(row.get("url"))
        if not url:
            continue
        photo_id = row.get("id")
        photos.append(
            Photo(
                url=url,
                display_order=_safe_int(row.get("display_order")) or 0,
                id=str(photo_id) if photo_id is not None else None,
            )
        )
    # sorted() is stable, equal display_order keeps row order.
    return tuple(sorted(photos, key=lambda photo: photo.display_order))


def listing_form_to_record(form: dict[str, Any], owner_id: str) -> dict[str, Any]:
    """
    Dashboard form -> `motels` insert/update payload. Blank optional fields become None.
    """
    errors: dict[str, str] = {}
    record: dict[str, Any] = {}
    for name in REQUIRED_FORM_FIELDS:
        value = _optional_text(form.get(name))
        if value is None:
            errors[name] = "required"
            continue
        record[name] = value

    state = record.get("state")
    if state is not None:
        state = state.upper()
        if state not in BRAZILIAN_STATES:
            errors["state"] = f"unknown state code {state!r}"
        record["state"] = state

    if errors:
        raise ListingValidationError(errors)

    for name in OPTIONAL_FORM_FIELDS:
        record[name] = _optional_text(form.get(name))

    if "latitude" in form or "longitude" in form:
        coords = coordinate_pair(form.get("latitude"), form.get("longitude"))
        record["latitude"] = coords[0] if coords else None
        record["longitude"] = coords[1] if coords else None

    record["owner_id"] = owner_id
    return record


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def _optional_text(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _safe_int(value: Any) -> int | None:
    try:
        return int(value) if value is not None else None
    except (TypeError, ValueError):
        return None
