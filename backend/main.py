"""FastAPI application for heritage place discovery."""

import logging
from contextlib import asynccontextmanager
from functools import lru_cache

from fastapi import Depends, FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

import config
from models import Coordinate, DiscoveryResponse, HistoricPlacesRequest, Place
from pipeline import DiscoveryPipeline
from proxy_chain import resolve_access_paths
from seeds import seed_places

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
logger = logging.getLogger(__name__)
# httpx logs full request URLs at INFO, and those carry the places API key.
logging.getLogger("httpx").setLevel(logging.WARNING)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Unknown access path names fail here, at boot, not on every request.
    settings = get_settings()
    paths = resolve_access_paths(settings.access_paths)
    logger.info("Access paths: %s", ", ".join(p.name for p in paths))
    yield


app = FastAPI(title="Heritage Places Discovery", version="1.0.0", lifespan=lifespan)

# CORS: allow frontend origin(s)
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@lru_cache
def get_settings() -> config.Settings:
    return config.load_settings()


def get_pipeline(settings: config.Settings = Depends(get_settings)) -> DiscoveryPipeline:
    return DiscoveryPipeline(settings)


# ---------- Health check ----------

@app.get("/health")
async def health():
    return {"status": "ok"}


# ---------- Discovery ----------

@app.get("/places", response_model=DiscoveryResponse, response_model_exclude_none=True)
async def get_places(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
    pipeline: DiscoveryPipeline = Depends(get_pipeline),
):
    """Heritage places near (lat, lon). Falls back to seed places, never errors."""
    result = await pipeline.discover(lat, lon)
    return {"count": len(result.places), "source": result.source, "places": result.places}


@app.post("/api/places/historic", response_model=list[Place], response_model_exclude_none=True)
async def post_historic_places(
    body: HistoricPlacesRequest,
    pipeline: DiscoveryPipeline = Depends(get_pipeline),
):
    result = await pipeline.discover(body.latitude, body.longitude, radius_m=body.radius)
    return result.places


@app.get("/places/demo", response_model=list[Place], response_model_exclude_none=True)
async def get_demo_places(
    lat: float = Query(..., description="Latitude"),
    lon: float = Query(..., description="Longitude"),
):
    return seed_places(Coordinate(latitude=lat, longitude=lon))


# ---------- Config (read-only) ----------

@app.get("/config")
async def get_config(settings: config.Settings = Depends(get_settings)):
    return {
        "api_key_configured": settings.has_api_key,
        "access_paths": list(settings.access_paths),
        "proxy_timeout_s": settings.timeout_s,
        "search_radius_m": settings.radius_m,
        "search_type": settings.search_type,
        "keyword": settings.keyword,
    }
