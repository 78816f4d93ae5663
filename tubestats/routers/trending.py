import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tubestats.config import Settings
from tubestats.dependencies import get_settings, load_trending_dataset
from tubestats.errors import DataFileError
from tubestats.middleware.validation import error_response
from tubestats.services import dashboard_service, trending_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/trending", tags=["trending"])


@router.get("")
def get_trending(
    cfg: Annotated[Settings, Depends(get_settings)],
    exclude_shorts: Annotated[bool, Query()] = False,
):
    """Trending videos per country as a GeoJSON FeatureCollection."""
    try:
        collection = load_trending_dataset(cfg)
    except DataFileError:
        logger.exception("Failed to read trending videos data")
        return error_response(500, "DATA_UNAVAILABLE", "Failed to read trending videos data")

    if exclude_shorts:
        collection = trending_service.without_shorts(collection)

    return collection.model_dump()


@router.get("/channels")
def get_trending_channels(
    cfg: Annotated[Settings, Depends(get_settings)],
    exclude_shorts: Annotated[bool, Query()] = False,
):
    """Channel totals across every country's trending list."""
    try:
        collection = load_trending_dataset(cfg)
    except DataFileError:
        logger.exception("Failed to read trending videos data")
        return error_response(500, "DATA_UNAVAILABLE", "Failed to read trending videos data")

    if exclude_shorts:
        collection = trending_service.without_shorts(collection)

    records = trending_service.trending_records(collection)
    return [s.model_dump() for s in dashboard_service.channel_stats(records)]
