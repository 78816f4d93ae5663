import time

from tubestats.config import Settings, settings
from tubestats.models.trending import FeatureCollection
from tubestats.models.video import ParseResult
from tubestats.routers.metrics import row_errors_total, rows_parsed_total, source_load_duration
from tubestats.services import csv_service, trending_service


def get_settings() -> Settings:
    return settings


def load_video_dataset(cfg: Settings) -> ParseResult:
    """Read the videos CSV for one request. Raises DataFileError."""
    start = time.perf_counter()
    result = csv_service.load_videos(cfg.videos_path)
    source_load_duration.labels(source="videos").observe(time.perf_counter() - start)
    rows_parsed_total.inc(len(result.videos))
    if result.errors:
        row_errors_total.inc(len(result.errors))
    return result


def load_trending_dataset(cfg: Settings) -> FeatureCollection:
    """Read the trending GeoJSON for one request. Raises DataFileError."""
    start = time.perf_counter()
    collection = trending_service.load_trending(cfg.trending_path)
    source_load_duration.labels(source="trending").observe(time.perf_counter() - start)
    return collection
