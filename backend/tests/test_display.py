from backend.core.display import (
    cover_photo_url,
    format_distance,
    google_maps_link,
    phone_link,
    waze_link,
    whatsapp_link,
)
from backend.core.models import Listing, Photo


def test_format_distance_switches_to_meters_below_one_km():
    assert format_distance(0.42) == "420m"
    assert format_distance(0.0) == "0m"
    assert format_distance(12.345) == "12.3km"


def test_whatsapp_link_keeps_digits_only():
    assert whatsapp_link("(11) 99999-8888") == "https://wa.me/5511999998888"
    assert phone_link("(11) 3333-4444") == "tel:(11) 3333-4444"


def test_navigation_links_prefer_coordinates():
    listing = Listing(id="1", name="A", city="Santos", state="SP", latitude=-23.96, longitude=-46.33)
    assert google_maps_link(listing) == "https://www.google.com/maps/dir/?api=1&destination=-23.96,-46.33"
    assert waze_link(listing) == "https://waze.com/ul?ll=-23.96,-46.33&navigate=yes"


def test_navigation_links_fall_back_to_address():
    listing = Listing(id="1", name="A", city="Santos", state="SP", address="Rua 1")
    assert google_maps_link(listing).endswith("query=Rua%201%2C%20Santos%20-%20SP")
    assert waze_link(listing) == "https://waze.com/ul?q=Rua%201%2C%20Santos%20-%20SP&navigate=yes"


def test_cover_photo_url():
    listing = Listing(id="1", name="A", city="B", state="SP", photos=(Photo(url="https://cdn/1.jpg", display_order=0),))
    assert cover_photo_url(listing) == "https://cdn/1.jpg"
    assert cover_photo_url(Listing(id="2", name="A", city="B", state="SP")) is None
