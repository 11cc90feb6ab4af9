"""HTTP API for the radar reflectivity service."""

from datetime import datetime, timezone

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from .config import settings
from .domain import FallbackResponse, HealthResponse, LegendResponse, RadarDataResponse
from .legend import legend_bands
from .radar_service import RadarService
from utils.logging_utils import get_tagged_logger

logger = get_tagged_logger(__name__, tag="radar_api/api")

router = APIRouter()
RADAR_SERVICE = RadarService(settings)


@router.get(
    "/radar-data",
    response_model=RadarDataResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": FallbackResponse}},
)
def get_radar_data():
    """Return the latest reflectivity points, served from cache while fresh."""
    result = RADAR_SERVICE.query()
    logger.debug("Radar data query finished", extra={"ok": result.ok, "cache_hit": result.cache_hit})
    if not result.ok:
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=result.fallback.model_dump(mode="json", by_alias=True),
        )
    return result.payload


@router.get("/health", response_model=HealthResponse)
def health():
    """Liveness check."""
    return HealthResponse(timestamp=datetime.now(timezone.utc))


@router.get("/legend", response_model=LegendResponse)
def legend():
    """Reflectivity color bands used by the map client."""
    return LegendResponse(bands=legend_bands())
