import os
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

GOOGLE_PLACES_API_KEY = os.getenv("GOOGLE_PLACES_API_KEY", "")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "http://localhost:8000,http://localhost:3000").split(",")

# --- Places provider (legacy Nearby Search) ---
NEARBY_SEARCH_URL = "https://maps.googleapis.com/maps/api/place/nearbysearch/json"
PHOTO_URL = "https://maps.googleapis.com/maps/api/place/photo"
PHOTO_MAX_WIDTH = 400

SEARCH_RADIUS_M = int(os.getenv("SEARCH_RADIUS_M", "50000"))
SEARCH_TYPE = "tourist_attraction"
SEARCH_KEYWORD = "historic heritage monument museum archaeological temple fort palace"

# --- Access paths ---
# Ordered; the first path that yields a usable payload wins.
DEFAULT_ACCESS_PATHS = ["direct", "allorigins", "corsproxy", "thingproxy", "cors_anywhere"]
ACCESS_PATHS = [
    name.strip()
    for name in os.getenv("ACCESS_PATHS", ",".join(DEFAULT_ACCESS_PATHS)).split(",")
    if name.strip()
]
PROXY_TIMEOUT_S = float(os.getenv("PROXY_TIMEOUT_S", "15.0"))

# --- Relevance ---
RELEVANT_TYPES = {
    "tourist_attraction",
    "museum",
    "place_of_worship",
    "establishment",
    "point_of_interest",
}

HERITAGE_KEYWORDS = [
    "temple",
    "fort",
    "palace",
    "monument",
    "heritage",
    "historic",
    "archaeological",
    "ancient",
    "cultural",
    "tomb",
    "mosque",
    "church",
    "castle",
    "cathedral",
    "shrine",
    "memorial",
]

# --- Type tag groups used for descriptions and fallback images ---
ATTRACTION_TYPES = {"tourist_attraction", "museum"}
MUSEUM_TYPES = {"museum"}
WORSHIP_TYPES = {
    "place_of_worship",
    "hindu_temple",
    "mosque",
    "church",
    "synagogue",
    "buddhist_temple",
}
LANDMARK_TYPES = {"historical_landmark", "landmark", "monument"}
FORT_TYPES = {"fort", "castle"}

# --- Static images (used when no provider photo can be fetched) ---
_UNSPLASH = "https://images.unsplash.com/photo-{}?w=400&h=300&fit=crop"

FALLBACK_IMAGES: dict[str, str] = {
    "museum": _UNSPLASH.format("1566127444979-b3d2b654e3d7"),
    "worship": _UNSPLASH.format("1582510003544-4d00b7f74220"),
    "landmark": _UNSPLASH.format("1564507592333-c60657eea523"),
    "fort": _UNSPLASH.format("1599661046289-e31897846e41"),
    "palace": _UNSPLASH.format("1587474260584-136574528ed5"),
    "default": _UNSPLASH.format("1578662996442-48f60103fc96"),
}

# Name substrings that select the palace image when no tag matched
PALACE_NAME_HINTS = ["palace", "charminar"]


@dataclass(frozen=True)
class Settings:
    """Immutable configuration handed to the discovery pipeline."""

    api_key: str = ""
    access_paths: tuple[str, ...] = tuple(DEFAULT_ACCESS_PATHS)
    timeout_s: float = 15.0
    radius_m: int = 50000
    search_type: str = SEARCH_TYPE
    keyword: str = SEARCH_KEYWORD
    nearby_search_url: str = NEARBY_SEARCH_URL

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key.strip())


def load_settings() -> Settings:
    """Build Settings from the environment-backed module constants."""
    return Settings(
        api_key=GOOGLE_PLACES_API_KEY,
        access_paths=tuple(ACCESS_PATHS),
        timeout_s=PROXY_TIMEOUT_S,
        radius_m=SEARCH_RADIUS_M,
    )
