"""Tests for the offline seed places."""

import sys
from pathlib import Path

sys.path.insert(0, str(Path(__file__).parent.parent))

import config
from models import Category, Coordinate
from seeds import MAX_SEED_OFFSET_DEG, seed_places

ANCHOR = Coordinate(latitude=17.3850, longitude=78.4867)


def test_five_places():
    assert len(seed_places(ANCHOR)) == 5


def test_deterministic():
    assert seed_places(ANCHOR) == seed_places(ANCHOR)


def test_places_sit_next_to_anchor():
    for anchor in [ANCHOR, Coordinate(latitude=-33.8688, longitude=151.2093), Coordinate(latitude=0.0, longitude=0.0)]:
        for place in seed_places(anchor):
            assert abs(place.latitude - anchor.latitude) <= MAX_SEED_OFFSET_DEG + 1e-9
            assert abs(place.longitude - anchor.longitude) <= MAX_SEED_OFFSET_DEG + 1e-9


def test_fully_populated():
    places = seed_places(ANCHOR)
    assert len({p.id for p in places}) == 5
    for place in places:
        assert place.name
        assert place.description
        assert place.image_url.startswith("https://")
        assert place.distance_label
        assert place.category is Category.HERITAGE
        meta = place.metadata
        assert meta.rating is not None
        assert meta.rating_count is not None
        assert meta.operational_status
        assert meta.open_now is not None
        assert meta.type_tags
        assert meta.formatted_address
        assert meta.area_name


def test_descriptions_hold_no_metadata():
    for place in seed_places(ANCHOR):
        text = place.description.lower()
        assert "rated" not in text
        assert "visitors" not in text
        assert "status" not in text


def test_images_follow_fallback_policy():
    images = {p.id: p.image_url for p in seed_places(ANCHOR)}
    assert images["fallback-heritage-2"] == config.FALLBACK_IMAGES["museum"]
    assert images["fallback-temple-3"] == config.FALLBACK_IMAGES["worship"]
    assert images["fallback-historic-1"] == config.FALLBACK_IMAGES["landmark"]


def test_distance_labels_follow_anchor():
    labels = {p.id: p.distance_label for p in seed_places(ANCHOR)}
    # 0.005 deg north and west at this latitude is about 750 m
    assert labels["fallback-temple-3"].endswith("m")
    assert not labels["fallback-temple-3"].endswith("km")
    assert labels["fallback-historic-1"].endswith("km")
