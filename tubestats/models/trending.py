from typing import Literal

from pydantic import BaseModel, Field

from .video import SHORT_MAX_SECONDS, VideoRecord


class TrendingVideo(BaseModel):
    """A video entry embedded in a country feature of the trending map."""

    video_id: str
    title: str = ""
    channel_title: str = ""
    view_count: int = Field(default=0, ge=0)
    like_count: int = Field(default=0, ge=0)
    thumbnail_url: str = ""
    published_at: str = ""
    duration_seconds: int = Field(default=0, ge=0)

    @property
    def is_short(self) -> bool:
        return self.duration_seconds <= SHORT_MAX_SECONDS

    def to_record(self) -> VideoRecord:
        return VideoRecord(
            video_id=self.video_id,
            title=self.title,
            channel_title=self.channel_title,
            published_at=self.published_at,
            views=self.view_count,
            likes=self.like_count,
            duration_seconds=self.duration_seconds,
            thumbnail_url=self.thumbnail_url,
        )


class PointGeometry(BaseModel):
    type: Literal["Point"] = "Point"
    coordinates: tuple[float, float]


class CountryProperties(BaseModel):
    country_code: str = ""
    country_name: str = ""
    videos: list[TrendingVideo] = Field(default_factory=list)
    last_updated: str = ""


class CountryFeature(BaseModel):
    """One country on the map with its trending videos."""

    type: Literal["Feature"] = "Feature"
    geometry: PointGeometry
    properties: CountryProperties


class FeatureCollection(BaseModel):
    type: Literal["FeatureCollection"] = "FeatureCollection"
    features: list[CountryFeature] = Field(default_factory=list)
