from __future__ import annotations

import argparse
import logging
import mimetypes
import os
import sys
from typing import Any
from urllib.parse import urlsplit

from backend.core.dashboard import build_dashboard_stats
from backend.core.mailer import send_verification_email
from backend.core.models import Listing
from backend.core.normalize import (
    OPTIONAL_FORM_FIELDS,
    REQUIRED_FORM_FIELDS,
    ListingValidationError,
    listing_form_to_record,
)
from backend.core.photos import (
    PhotoLimitError,
    check_photo_upload,
    is_allowed_content_type,
    next_display_order,
)
from backend.core.supabase_repo import SupabaseRepo


logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(message)s")
LOGGER = logging.getLogger(__name__)

EDITABLE_FIELDS = REQUIRED_FORM_FIELDS + OPTIONAL_FORM_FIELDS + ("latitude", "longitude")
OWNER_COMMANDS = frozenset({"list", "create", "update", "delete", "add-photo", "remove-photo"})


def parse_fields(pairs: list[str] | None) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    for pair in pairs or []:
        if "=" not in pair:
            raise ValueError(f"Expected name=value, got {pair!r}.")
        name, value = pair.split("=", 1)
        fields[name.strip()] = value
    return fields


def guess_photo_content_type(url: str) -> str | None:
    # Storage URLs may carry cache-busting query strings.
    return mimetypes.guess_type(urlsplit(url).path)[0]


def cmd_list(repo: SupabaseRepo, args: argparse.Namespace) -> int:
    listings = repo.get_owner_listings(args.owner)
    for listing in listings:
        flag = "premium" if listing.is_premium else "free"
        status = "active" if listing.is_active else "inactive"
        print(f"{listing.id} | {listing.name} | {listing.city}/{listing.state} | {flag} | {status} | views={listing.views_count}")
    stats = build_dashboard_stats(listings)
    print(f"listings={stats.listing_count} views={stats.total_views} premium={stats.premium_count}")
    return 0


def cmd_create(repo: SupabaseRepo, args: argparse.Namespace) -> int:
    record = listing_form_to_record(parse_fields(args.set), owner_id=args.owner)
    listing = repo.create_listing(record)
    LOGGER.info("Listing created id=%s owner=%s", listing.id, args.owner)
    print(listing.id)
    return 0


def cmd_update(repo: SupabaseRepo, args: argparse.Namespace) -> int:
    existing = _owned_listing(repo, args)
    if existing is None:
        return 1
    form = {name: getattr(existing, name) for name in EDITABLE_FIELDS}
    form.update(parse_fields(args.set))
    record = listing_form_to_record(form, owner_id=args.owner)
    repo.update_listing(args.listing_id, record)
    LOGGER.info("Listing updated id=%s", args.listing_id)
    return 0


def cmd_delete(repo: SupabaseRepo, args: argparse.Namespace) -> int:
    if _owned_listing(repo, args) is None:
        return 1
    repo.delete_listing(args.listing_id)
    LOGGER.info("Listing deleted id=%s", args.listing_id)
    return 0


def cmd_add_photo(repo: SupabaseRepo, args: argparse.Namespace) -> int:
    listing = _owned_listing(repo, args)
    if listing is None:
        return 1
    rejected = [
        url for url in args.url if not is_allowed_content_type(args.content_type or guess_photo_content_type(url))
    ]
    if rejected:
        raise ValueError(f"Only JPG, PNG or WebP photos are allowed: {', '.join(rejected)}")
    photos = repo.get_listing_photos(args.listing_id)
    check_photo_upload(len(photos), len(args.url), listing.is_premium)
    order = next_display_order(photos)
    for url in args.url:
        photo = repo.add_photo(args.listing_id, url, order)
        LOGGER.info("Photo added listing=%s order=%s url=%s", args.listing_id, photo.display_order, url)
        order += 1
    return 0


def cmd_remove_photo(repo: SupabaseRepo, args: argparse.Namespace) -> int:
    if _owned_listing(repo, args) is None:
        return 1
    photo_ids = {photo.id for photo in repo.get_listing_photos(args.listing_id)}
    if args.photo_id not in photo_ids:
        LOGGER.error("Photo not found on listing id=%s listing=%s", args.photo_id, args.listing_id)
        return 1
    repo.delete_photo(args.photo_id)
    LOGGER.info("Photo removed id=%s listing=%s", args.photo_id, args.listing_id)
    return 0


def cmd_view(repo: SupabaseRepo, args: argparse.Namespace) -> int:
    return 0 if repo.increment_views(args.listing_id) else 1


def cmd_send_verification(_repo: SupabaseRepo | None, args: argparse.Namespace) -> int:
    message_id = send_verification_email(args.email, args.confirmation_url, user_name=args.name)
    print(message_id or "")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Owner dashboard operations for motel listings.")
    parser.add_argument(
        "--owner",
        default=os.environ.get("DASHBOARD_OWNER_ID"),
        help="Owner user id (defaults to DASHBOARD_OWNER_ID).",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("list", help="List owned listings with totals.").set_defaults(handler=cmd_list)

    create = sub.add_parser("create", help="Create a listing.")
    create.add_argument("--set", action="append", metavar="FIELD=VALUE")
    create.set_defaults(handler=cmd_create)

    update = sub.add_parser("update", help="Update fields of a listing.")
    update.add_argument("listing_id")
    update.add_argument("--set", action="append", metavar="FIELD=VALUE")
    update.set_defaults(handler=cmd_update)

    delete = sub.add_parser("delete", help="Delete a listing.")
    delete.add_argument("listing_id")
    delete.set_defaults(handler=cmd_delete)

    add_photo = sub.add_parser("add-photo", help="Attach already uploaded photo URLs.")
    add_photo.add_argument("listing_id")
    add_photo.add_argument("url", nargs="+")
    add_photo.add_argument(
        "--content-type",
        default=None,
        help="Content type of the uploaded files when the URL does not end in an image extension.",
    )
    add_photo.set_defaults(handler=cmd_add_photo)

    remove_photo = sub.add_parser("remove-photo", help="Remove a photo row.")
    remove_photo.add_argument("listing_id")
    remove_photo.add_argument("photo_id")
    remove_photo.set_defaults(handler=cmd_remove_photo)

    view = sub.add_parser("view", help="Count a detail page view.")
    view.add_argument("listing_id")
    view.set_defaults(handler=cmd_view)

    verify = sub.add_parser("send-verification", help="Send the sign-up confirmation email.")
    verify.add_argument("email")
    verify.add_argument("confirmation_url")
    verify.add_argument("--name", default=None)
    verify.set_defaults(handler=cmd_send_verification, needs_repo=False)
    return parser


def main(argv: list[str] | None = None, repo: SupabaseRepo | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command in OWNER_COMMANDS and not args.owner:
        parser.error("--owner (or DASHBOARD_OWNER_ID) is required for this command.")

    try:
        if getattr(args, "needs_repo", True) and repo is None:
            repo = SupabaseRepo()
        return args.handler(repo, args)
    except ListingValidationError as exc:
        for name, message in sorted(exc.errors.items()):
            LOGGER.error("Invalid field %s: %s", name, message)
        return 2
    except (PhotoLimitError, ValueError) as exc:
        LOGGER.error("%s", exc)
        return 2
    except Exception as exc:  # noqa: BLE001
        LOGGER.exception("Dashboard command %s failed: %s", args.command, exc)
        return 1


def _owned_listing(repo: SupabaseRepo, args: argparse.Namespace) -> Listing | None:
    listing = repo.get_listing(args.listing_id)
    if listing is None or listing.owner_id != args.owner:
        LOGGER.error("Listing not found for owner id=%s owner=%s", args.listing_id, args.owner)
        return None
    return listing


if __name__ == "__main__":
    sys.exit(main())
