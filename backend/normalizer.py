"""Turn filtered provider candidates into Place records."""

from urllib.parse import urlencode

import config
from geo import distance_label
from models import Coordinate, Place, PlaceMetadata, RawCandidate

DESCRIPTION_TEMPLATES = {
    "attraction": "A notable attraction that preserves the history and culture of its region.",
    "worship": "A place of worship with deep spiritual and historical roots.",
    "landmark": "A historic landmark that has shaped the story of the area around it.",
    "generic": "A heritage site waiting to be explored.",
}


def _tags(type_tags) -> set[str]:
    return set(type_tags or ())


def description_kind(type_tags) -> str:
    tags = _tags(type_tags)
    if tags & config.ATTRACTION_TYPES:
        return "attraction"
    if tags & config.WORSHIP_TYPES:
        return "worship"
    if tags & config.LANDMARK_TYPES:
        return "landmark"
    return "generic"


def locality(area_name: str | None, formatted_address: str | None) -> str | None:
    """Short place name for the location clause.

    Uses the area name when present, else the second-to-last segment of the
    formatted address ("Charminar Rd, Hyderabad" -> "Charminar Rd").
    """
    if area_name and area_name.strip():
        return area_name.strip()
    if not formatted_address:
        return None
    segments = [s.strip() for s in formatted_address.split(",") if s.strip()]
    if not segments:
        return None
    if len(segments) == 1:
        return segments[0]
    return segments[-2]


def build_description(candidate: RawCandidate) -> str:
    text = DESCRIPTION_TEMPLATES[description_kind(candidate.type_tags)]
    where = locality(candidate.area_name, candidate.formatted_address)
    if where:
        text += f" Located in {where}."
    return text


def photo_url(photo_reference: str, api_key: str) -> str:
    params = {
        "maxwidth": config.PHOTO_MAX_WIDTH,
        "photoreference": photo_reference,
        "key": api_key,
    }
    return f"{config.PHOTO_URL}?{urlencode(params)}"


def fallback_image(type_tags, name: str) -> str:
    """Pick a static image: tag groups first, then name hints, then default."""
    tags = _tags(type_tags)
    if tags & config.MUSEUM_TYPES:
        return config.FALLBACK_IMAGES["museum"]
    if tags & config.WORSHIP_TYPES:
        return config.FALLBACK_IMAGES["worship"]
    if tags & config.LANDMARK_TYPES:
        return config.FALLBACK_IMAGES["landmark"]
    if tags & config.FORT_TYPES:
        return config.FALLBACK_IMAGES["fort"]
    lowered = name.lower()
    if any(hint in lowered for hint in config.PALACE_NAME_HINTS):
        return config.FALLBACK_IMAGES["palace"]
    return config.FALLBACK_IMAGES["default"]


def resolve_image_url(candidate: RawCandidate, api_key: str = "") -> str:
    if candidate.photo_reference and api_key:
        return photo_url(candidate.photo_reference, api_key)
    return fallback_image(candidate.type_tags, candidate.display_name)


def build_metadata(candidate: RawCandidate) -> PlaceMetadata:
    return PlaceMetadata(
        rating=candidate.rating,
        rating_count=candidate.rating_count,
        operational_status=candidate.operational_status,
        open_now=candidate.open_now,
        type_tags=candidate.type_tags or None,
        formatted_address=candidate.formatted_address,
        area_name=candidate.area_name,
    )


def normalize(candidate: RawCandidate, requester: Coordinate, api_key: str = "") -> Place:
    return Place(
        id=candidate.id,
        name=candidate.display_name,
        description=build_description(candidate),
        latitude=candidate.location.latitude,
        longitude=candidate.location.longitude,
        image_url=resolve_image_url(candidate, api_key),
        distance_label=distance_label(requester, candidate.location),
        metadata=build_metadata(candidate),
    )
