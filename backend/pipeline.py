"""Discovery pipeline: fetch, filter, normalize, or fall back to seeds.

    IDLE -> FETCHING -> FILTER_NORMALIZE -> DONE
                     -> EXHAUSTED -> FALLBACK_DONE

discover_places never raises. A successful fetch whose candidates are all
filtered out ends in DONE with an empty list; only a failed fetch (or a
missing access key) produces the seed set.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from pydantic import ValidationError

from config import Settings
from models import Coordinate, Place
from normalizer import normalize
from proxy_chain import ProxyChainExhausted, ProxyChainFetcher
from relevance import is_relevant
from seeds import seed_places

logger = logging.getLogger(__name__)


class DiscoveryState(str, Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    FILTER_NORMALIZE = "filter_normalize"
    DONE = "done"
    EXHAUSTED = "exhausted"
    FALLBACK_DONE = "fallback_done"


@dataclass(frozen=True)
class Discovery:
    places: list[Place]
    state: DiscoveryState

    @property
    def source(self) -> str:
        return "provider" if self.state is DiscoveryState.DONE else "fallback"


class DiscoveryPipeline:
    def __init__(self, settings: Settings, fetcher: ProxyChainFetcher | None = None):
        self.settings = settings
        self.fetcher = fetcher or ProxyChainFetcher(settings)

    async def discover(self, latitude: float, longitude: float, radius_m: int | None = None) -> Discovery:
        try:
            anchor = Coordinate(latitude=latitude, longitude=longitude)
        except ValidationError:
            logger.error("Invalid anchor coordinate %r,%r", latitude, longitude)
            return Discovery(places=[], state=DiscoveryState.FALLBACK_DONE)

        if not self.settings.has_api_key:
            logger.warning("No places API key configured, returning seed places")
            return self._fallback(anchor)

        state = DiscoveryState.FETCHING
        try:
            candidates = await self.fetcher.fetch_raw(anchor, radius_m)
            state = DiscoveryState.FILTER_NORMALIZE
            places = self._filter_normalize(candidates, anchor)
        except ProxyChainExhausted as exc:
            logger.warning("%s; returning seed places", exc)
            return self._fallback(anchor)
        except Exception:
            logger.exception("Discovery failed during %s, returning seed places", state.value)
            return self._fallback(anchor)

        logger.info("Found %d heritage places out of %d candidates", len(places), len(candidates))
        return Discovery(places=places, state=DiscoveryState.DONE)

    async def discover_places(self, latitude: float, longitude: float) -> list[Place]:
        return (await self.discover(latitude, longitude)).places

    def _filter_normalize(self, candidates, anchor: Coordinate) -> list[Place]:
        places: list[Place] = []
        seen: set[str] = set()
        for candidate in candidates:
            if candidate.id in seen or not is_relevant(candidate):
                continue
            seen.add(candidate.id)
            places.append(normalize(candidate, anchor, self.settings.api_key))
        return places

    def _fallback(self, anchor: Coordinate) -> Discovery:
        return Discovery(places=seed_places(anchor), state=DiscoveryState.FALLBACK_DONE)
