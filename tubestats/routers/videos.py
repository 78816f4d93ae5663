import logging
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from tubestats.config import Settings
from tubestats.dependencies import get_settings, load_video_dataset
from tubestats.errors import DataFileError
from tubestats.middleware.validation import error_response, validate_sort
from tubestats.services import aggregation_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/videos", tags=["videos"])


@router.get("")
def list_videos(
    cfg: Annotated[Settings, Depends(get_settings)],
    sort_by: Annotated[str | None, Query()] = None,
    order: Annotated[str | None, Query()] = None,
):
    """All videos from the CSV, in file order unless a sort is requested."""
    field, descending, err = validate_sort(sort_by, order)
    if err:
        return error_response(400, "INVALID_FIELD", err)

    try:
        dataset = load_video_dataset(cfg)
    except DataFileError:
        logger.exception("Failed to read videos data")
        return error_response(500, "DATA_UNAVAILABLE", "Failed to read videos data")

    videos = dataset.videos
    if sort_by is not None or order is not None:
        videos = aggregation_service.sort_videos(videos, field, descending)

    return [v.model_dump(by_alias=True) for v in videos]
