"""Derived statistics for the dashboard charts.

Every endpoint reads the CSV on each call, applies the optional filters
(``channel`` repeated, ``start``/``end`` as YYYY-MM-DD, ``exclude_shorts``),
and computes its view. Channel colors are assigned over the whole dataset
so they do not change when filters do.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse

from tubestats.config import Settings
from tubestats.dependencies import get_settings, load_video_dataset
from tubestats.errors import DataFileError
from tubestats.middleware.validation import (
    error_response,
    validate_channels,
    validate_date_range,
)
from tubestats.models.video import VideoRecord
from tubestats.services import aggregation_service, dashboard_service
from tubestats.services.color_service import assign_colors

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/analytics", tags=["analytics"])

ChannelQuery = Annotated[list[str] | None, Query()]
DateQuery = Annotated[str | None, Query()]
ShortsQuery = Annotated[bool, Query()]


def _select(
    cfg: Settings,
    channel: list[str] | None,
    start: str | None,
    end: str | None,
    exclude_shorts: bool,
) -> tuple[list[VideoRecord], dict[str, str], JSONResponse | None]:
    """Load, filter and color the dataset. Returns (videos, colors, error)."""
    channels, err = validate_channels(channel)
    if err:
        return [], {}, error_response(400, "INVALID_FIELD", err)
    start_date, end_date, err = validate_date_range(start, end)
    if err:
        return [], {}, error_response(400, "INVALID_FIELD", err)

    try:
        dataset = load_video_dataset(cfg)
    except DataFileError:
        logger.exception("Failed to read videos data")
        return [], {}, error_response(500, "DATA_UNAVAILABLE", "Failed to read videos data")

    colors = assign_colors(
        aggregation_service.distinct_channels(dataset.videos), cfg.channel_palette
    )
    videos = aggregation_service.filter_videos(
        dataset.videos,
        channels=channels,
        start=start_date,
        end=end_date,
        exclude_shorts=exclude_shorts,
    )
    return videos, colors, None


@router.get("/channels")
def get_channel_stats(
    cfg: Annotated[Settings, Depends(get_settings)],
    channel: ChannelQuery = None,
    start: DateQuery = None,
    end: DateQuery = None,
    exclude_shorts: ShortsQuery = False,
):
    videos, _, err = _select(cfg, channel, start, end, exclude_shorts)
    if err:
        return err
    return [s.model_dump() for s in dashboard_service.channel_stats(videos)]


@router.get("/daily")
def get_daily_views(
    cfg: Annotated[Settings, Depends(get_settings)],
    channel: ChannelQuery = None,
    start: DateQuery = None,
    end: DateQuery = None,
    exclude_shorts: ShortsQuery = False,
):
    videos, colors, err = _select(cfg, channel, start, end, exclude_shorts)
    if err:
        return err
    return dashboard_service.daily_views(videos, colors).model_dump()


@router.get("/monthly")
def get_monthly_trends(
    cfg: Annotated[Settings, Depends(get_settings)],
    channel: ChannelQuery = None,
    start: DateQuery = None,
    end: DateQuery = None,
    exclude_shorts: ShortsQuery = False,
):
    videos, colors, err = _select(cfg, channel, start, end, exclude_shorts)
    if err:
        return err
    return [t.model_dump() for t in dashboard_service.monthly_trends(videos, colors)]


@router.get("/views-vs-likes")
def get_views_vs_likes(
    cfg: Annotated[Settings, Depends(get_settings)],
    channel: ChannelQuery = None,
    start: DateQuery = None,
    end: DateQuery = None,
    exclude_shorts: ShortsQuery = False,
):
    videos, colors, err = _select(cfg, channel, start, end, exclude_shorts)
    if err:
        return err
    return [c.model_dump() for c in dashboard_service.views_vs_likes(videos, colors)]


@router.get("/shorts")
def get_shorts_comparison(
    cfg: Annotated[Settings, Depends(get_settings)],
    channel: ChannelQuery = None,
    start: DateQuery = None,
    end: DateQuery = None,
):
    videos, colors, err = _select(cfg, channel, start, end, False)
    if err:
        return err
    return dashboard_service.shorts_comparison(videos, colors).model_dump()


@router.get("/colors")
def get_channel_colors(
    cfg: Annotated[Settings, Depends(get_settings)],
):
    try:
        dataset = load_video_dataset(cfg)
    except DataFileError:
        logger.exception("Failed to read videos data")
        return error_response(500, "DATA_UNAVAILABLE", "Failed to read videos data")

    return assign_colors(
        aggregation_service.distinct_channels(dataset.videos), cfg.channel_palette
    )


@router.get("/parse-errors")
def get_parse_errors(
    cfg: Annotated[Settings, Depends(get_settings)],
):
    """Row problems found in the CSV, for spotting bad exports."""
    try:
        dataset = load_video_dataset(cfg)
    except DataFileError:
        logger.exception("Failed to read videos data")
        return error_response(500, "DATA_UNAVAILABLE", "Failed to read videos data")

    return [e.model_dump() for e in dataset.errors]
