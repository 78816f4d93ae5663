"""Trending videos by country, read from a GeoJSON FeatureCollection."""

import json
import logging
from pathlib import Path

from pydantic import ValidationError

from tubestats.errors import DataFileError
from tubestats.models.trending import (
    CountryFeature,
    CountryProperties,
    FeatureCollection,
    PointGeometry,
    TrendingVideo,
)
from tubestats.models.video import VideoRecord

logger = logging.getLogger(__name__)


def coerce_videos(raw: object) -> list[TrendingVideo]:
    """Turn a feature's ``videos`` property into typed entries.

    Exporters write it either as a JSON array or as a string holding one.
    Anything else, and entries that fail validation, are dropped.
    """
    if isinstance(raw, str):
        try:
            raw = json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("trending: videos property is not valid JSON, ignoring")
            return []
    if not isinstance(raw, list):
        return []

    videos: list[TrendingVideo] = []
    for entry in raw:
        if not isinstance(entry, dict):
            continue
        try:
            videos.append(TrendingVideo.model_validate(entry))
        except ValidationError as e:
            logger.warning("trending: skipping video entry: %d validation errors", e.error_count())
    return videos


def parse_trending(document: object, source: object = "<trending>") -> FeatureCollection:
    """Validate a decoded GeoJSON document into a FeatureCollection."""
    if not isinstance(document, dict) or document.get("type") != "FeatureCollection":
        raise DataFileError(source, "Invalid GeoJSON format")
    raw_features = document.get("features")
    if not isinstance(raw_features, list):
        raise DataFileError(source, "Invalid GeoJSON format")

    features: list[CountryFeature] = []
    for raw in raw_features:
        if not isinstance(raw, dict):
            continue
        props = raw.get("properties")
        if not isinstance(props, dict):
            props = {}
        try:
            features.append(
                CountryFeature(
                    geometry=PointGeometry.model_validate(raw.get("geometry") or {}),
                    properties=CountryProperties(
                        country_code=props.get("country_code") or "",
                        country_name=props.get("country_name") or "",
                        videos=coerce_videos(props.get("videos")),
                        last_updated=props.get("last_updated") or "",
                    ),
                )
            )
        except ValidationError as e:
            logger.warning("trending: skipping feature: %d validation errors", e.error_count())

    return FeatureCollection(features=features)


def load_trending(path: Path) -> FeatureCollection:
    """Read and validate the trending GeoJSON file at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
        document = json.loads(text)
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileError(path, f"cannot read trending file: {e}") from e
    except json.JSONDecodeError as e:
        raise DataFileError(path, f"trending file is not valid JSON: {e}") from e

    return parse_trending(document, source=path)


def without_shorts(collection: FeatureCollection) -> FeatureCollection:
    """Drop shorts from every country, then drop countries left empty."""
    features: list[CountryFeature] = []
    for feature in collection.features:
        videos = [v for v in feature.properties.videos if not v.is_short]
        if not videos:
            continue
        features.append(
            feature.model_copy(
                update={"properties": feature.properties.model_copy(update={"videos": videos})}
            )
        )
    return FeatureCollection(features=features)


def trending_records(collection: FeatureCollection) -> list[VideoRecord]:
    """Flatten all countries into one record list, first occurrence of each video wins."""
    seen: set[str] = set()
    records: list[VideoRecord] = []
    for feature in collection.features:
        for video in feature.properties.videos:
            if video.video_id in seen:
                continue
            seen.add(video.video_id)
            records.append(video.to_record())
    return records
