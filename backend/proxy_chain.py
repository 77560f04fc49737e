"""Places Nearby Search over an ordered chain of access paths.

Each access path is a (URL builder, envelope unwrapper) pair. Paths are tried
strictly in order, one request each, and the first usable payload wins:

- direct:        target URL as-is, plain JSON body
- allorigins:    target URL-encoded into ?url=, JSON wrapper whose
                 status.http_code must be 200 and whose `contents` holds the
                 provider JSON as a string
- corsproxy / thingproxy / cors_anywhere: target appended verbatim to a
                 prefix, plain JSON body

Failures of one path are logged and the next path is tried. Only when every
path has failed does fetch_raw raise ProxyChainExhausted. The access key is
part of the target URL, so log lines name paths, never URLs.
"""

import asyncio
import json
import logging
from dataclasses import dataclass, field
from typing import Any, Callable
from urllib.parse import quote, urlencode

import httpx
from pydantic import ValidationError

from config import Settings
from models import Coordinate, RawCandidate

logger = logging.getLogger(__name__)


# --- Error taxonomy ---

class AccessPathError(Exception):
    """A single access path did not produce a usable payload."""


class TransportFailure(AccessPathError):
    pass


class UpstreamRejection(AccessPathError):
    pass


class EnvelopeMismatch(AccessPathError):
    pass


class DecodeFailure(AccessPathError):
    pass


class ProxyChainExhausted(RuntimeError):
    def __init__(self, attempts: list[tuple[str, AccessPathError]]):
        self.attempts = attempts
        tried = ", ".join(f"{name} ({type(err).__name__})" for name, err in attempts) or "none"
        super().__init__(f"All access paths failed: {tried}")


# --- URL builders ---

def direct_url(target: str) -> str:
    return target


def prefix_verbatim(prefix: str) -> Callable[[str], str]:
    def build(target: str) -> str:
        return f"{prefix}{target}"
    return build


def prefix_encoded(prefix: str) -> Callable[[str], str]:
    def build(target: str) -> str:
        return f"{prefix}{quote(target, safe='')}"
    return build


# --- Envelope unwrappers ---

def _load_json(body: bytes | str) -> Any:
    try:
        return json.loads(body)
    except (ValueError, TypeError) as exc:
        raise DecodeFailure(f"invalid JSON: {exc}") from exc


def unwrap_direct(body: bytes) -> dict:
    payload = _load_json(body)
    if not isinstance(payload, dict):
        raise DecodeFailure(f"expected JSON object, got {type(payload).__name__}")
    return payload


def unwrap_allorigins(body: bytes) -> dict:
    outer = unwrap_direct(body)
    status = outer.get("status")
    http_code = status.get("http_code") if isinstance(status, dict) else None
    if http_code != 200:
        raise EnvelopeMismatch(f"wrapper http_code={http_code}")
    contents = outer.get("contents")
    if not isinstance(contents, str):
        raise EnvelopeMismatch("wrapper has no contents")
    return unwrap_direct(contents)


# --- Access path table ---

_XHR_HEADERS = {"X-Requested-With": "XMLHttpRequest"}


@dataclass(frozen=True)
class AccessPath:
    name: str
    build_url: Callable[[str], str]
    unwrap: Callable[[bytes], dict]
    headers: dict[str, str] = field(default_factory=dict)


ACCESS_PATHS: dict[str, AccessPath] = {
    "direct": AccessPath("direct", direct_url, unwrap_direct),
    "allorigins": AccessPath(
        "allorigins", prefix_encoded("https://api.allorigins.win/get?url="), unwrap_allorigins
    ),
    "corsproxy": AccessPath(
        "corsproxy", prefix_verbatim("https://corsproxy.io/?"), unwrap_direct, _XHR_HEADERS
    ),
    "thingproxy": AccessPath(
        "thingproxy", prefix_verbatim("https://thingproxy.freeboard.io/fetch/"), unwrap_direct, _XHR_HEADERS
    ),
    "cors_anywhere": AccessPath(
        "cors_anywhere", prefix_verbatim("https://cors-anywhere.herokuapp.com/"), unwrap_direct, _XHR_HEADERS
    ),
}


def resolve_access_paths(names) -> tuple[AccessPath, ...]:
    unknown = [n for n in names if n not in ACCESS_PATHS]
    if unknown:
        raise ValueError(f"Unknown access path(s): {', '.join(unknown)}")
    return tuple(ACCESS_PATHS[n] for n in names)


# --- Request and response shapes ---

def build_search_url(coord: Coordinate, settings: Settings, radius_m: int | None = None) -> str:
    params = {
        "location": f"{coord.latitude},{coord.longitude}",
        "radius": radius_m or settings.radius_m,
        "type": settings.search_type,
        "keyword": settings.keyword,
        "key": settings.api_key,
    }
    return f"{settings.nearby_search_url}?{urlencode(params)}"


def _as_dict(value: Any) -> dict:
    return value if isinstance(value, dict) else {}


def parse_candidate(result: dict) -> RawCandidate | None:
    """Reduce one legacy Nearby Search result. Returns None if unusable."""
    if not isinstance(result, dict):
        return None
    location = _as_dict(_as_dict(result.get("geometry")).get("location"))
    photos = result.get("photos") or []
    first_photo = _as_dict(photos[0]) if isinstance(photos, list) and photos else {}
    types = result.get("types")
    if not isinstance(types, list):
        types = []
    try:
        return RawCandidate(
            id=result.get("place_id") or "",
            display_name=result.get("name") or "",
            type_tags=tuple(dict.fromkeys(t for t in types if isinstance(t, str))),
            location=Coordinate(latitude=location.get("lat"), longitude=location.get("lng")),
            rating=result.get("rating"),
            rating_count=result.get("user_ratings_total"),
            operational_status=result.get("business_status"),
            formatted_address=result.get("formatted_address"),
            area_name=result.get("vicinity"),
            open_now=_as_dict(result.get("opening_hours")).get("open_now"),
            photo_reference=first_photo.get("photo_reference"),
        )
    except ValidationError:
        return None


def parse_provider_payload(payload: dict) -> list[RawCandidate]:
    status = payload.get("status")
    if status != "OK":
        detail = payload.get("error_message") or ""
        raise UpstreamRejection(f"provider status={status} {detail}".strip())
    results = payload.get("results")
    if not isinstance(results, list):
        raise DecodeFailure("provider payload has no results list")

    candidates = []
    for result in results:
        candidate = parse_candidate(result)
        if candidate is None or not candidate.id or not candidate.display_name:
            logger.debug("Skipping unusable provider result")
            continue
        candidates.append(candidate)
    return candidates


class ProxyChainFetcher:
    def __init__(
        self,
        settings: Settings,
        paths: tuple[AccessPath, ...] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.settings = settings
        self.paths = paths if paths is not None else resolve_access_paths(settings.access_paths)
        self.transport = transport

    async def fetch_raw(self, coord: Coordinate, radius_m: int | None = None) -> list[RawCandidate]:
        target = build_search_url(coord, self.settings, radius_m)
        attempts: list[tuple[str, AccessPathError]] = []
        total = len(self.paths)

        async with httpx.AsyncClient(transport=self.transport, timeout=self.settings.timeout_s) as client:
            for i, path in enumerate(self.paths, start=1):
                logger.info("Trying access path %d/%d: %s", i, total, path.name)
                try:
                    candidates = await self._attempt(client, path, target)
                except AccessPathError as exc:
                    logger.warning(
                        "Access path %s failed (%s): %s", path.name, type(exc).__name__, exc
                    )
                    attempts.append((path.name, exc))
                    continue
                logger.info("Access path %s returned %d candidates", path.name, len(candidates))
                return candidates

        logger.warning("All %d access paths failed", total)
        raise ProxyChainExhausted(attempts)

    async def _attempt(self, client: httpx.AsyncClient, path: AccessPath, target: str) -> list[RawCandidate]:
        url = path.build_url(target)
        try:
            # httpx timeouts are per phase; this bounds the whole attempt.
            resp = await asyncio.wait_for(
                client.get(url, headers=path.headers), timeout=self.settings.timeout_s
            )
        except (httpx.TimeoutException, asyncio.TimeoutError) as exc:
            raise TransportFailure("timed out") from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportFailure(type(exc).__name__) from exc

        if not resp.is_success:
            raise UpstreamRejection(f"HTTP {resp.status_code}")
        try:
            return parse_provider_payload(path.unwrap(resp.content))
        except AccessPathError:
            raise
        except Exception as exc:
            raise DecodeFailure(f"unexpected payload shape: {type(exc).__name__}") from exc
