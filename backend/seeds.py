"""Offline seed places, anchored next to the requested coordinate.

Returned when the provider cannot be reached or no access key is configured,
so callers always have something to render near the point they asked about.
"""

import logging

from geo import distance_label
from models import Coordinate, Place, PlaceMetadata
from normalizer import fallback_image

logger = logging.getLogger(__name__)

# (id, name, description, d_lat, d_lon, rating, rating_count, status, open_now, types, address, area)
SEED_DATA = [
    (
        "fallback-historic-1",
        "Charminar Heritage Monument",
        "A beautiful historic monument in your area (demo data).",
        0.01, 0.01,
        4.5, 8234, "OPERATIONAL", True,
        ("tourist_attraction", "historical_landmark", "monument"),
        "Charminar Rd, Char Kaman, Ghansi Bazaar, Hyderabad, Telangana 500002, India",
        "Charminar",
    ),
    (
        "fallback-heritage-2",
        "State Archaeological Museum",
        "A local heritage museum showcasing cultural artifacts (demo data).",
        -0.01, 0.01,
        4.2, 1456, "OPERATIONAL", True,
        ("museum", "tourist_attraction", "cultural_center"),
        "Public Gardens, Nampally, Hyderabad, Telangana 500001, India",
        "Nampally",
    ),
    (
        "fallback-temple-3",
        "Birla Mandir Temple",
        "Historic temple with centuries of cultural heritage (demo data).",
        0.005, -0.005,
        4.7, 12089, "OPERATIONAL", True,
        ("hindu_temple", "place_of_worship", "tourist_attraction"),
        "Hill Fort Rd, Ambedkar Colony, Mehdipatnam, Hyderabad, Telangana 500028, India",
        "Mehdipatnam",
    ),
    (
        "fallback-fort-4",
        "Golconda Fort",
        "Ancient fort with rich historical significance (demo data).",
        -0.005, -0.01,
        4.3, 15678, "OPERATIONAL", False,
        ("historical_landmark", "fort", "tourist_attraction"),
        "Khair Complex, Ibrahim Bagh, Hyderabad, Telangana 500008, India",
        "Ibrahim Bagh",
    ),
    (
        "fallback-palace-5",
        "Chowmahalla Palace",
        "Historic royal palace showcasing architectural heritage (demo data).",
        0.008, -0.008,
        4.4, 3567, "CLOSED_TEMPORARILY", False,
        ("palace", "historical_landmark", "museum"),
        "20-4-236, Motigalli, Khilwat, Hyderabad, Telangana 500002, India",
        "Khilwat",
    ),
]

# Largest |offset| in degrees applied to the anchor by any seed
MAX_SEED_OFFSET_DEG = 0.01


def seed_places(anchor: Coordinate) -> list[Place]:
    """Build the seed set around `anchor`. Same anchor, same output."""
    places = []
    for (place_id, name, description, d_lat, d_lon, rating, reviews,
         status, open_now, types, address, area) in SEED_DATA:
        location = Coordinate(latitude=anchor.latitude + d_lat, longitude=anchor.longitude + d_lon)
        places.append(Place(
            id=place_id,
            name=name,
            description=description,
            latitude=location.latitude,
            longitude=location.longitude,
            image_url=fallback_image(types, name),
            distance_label=distance_label(anchor, location),
            metadata=PlaceMetadata(
                rating=rating,
                rating_count=reviews,
                operational_status=status,
                open_now=open_now,
                type_tags=types,
                formatted_address=address,
                area_name=area,
            ),
        ))
    logger.info("Built %d seed places around %.5f,%.5f", len(places), anchor.latitude, anchor.longitude)
    return places
