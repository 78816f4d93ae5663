from dataclasses import dataclass, field
from datetime import datetime, timezone

from pydantic import BaseModel, Field

SHORT_MAX_SECONDS = 60


def parse_published_at(value: str) -> datetime | None:
    """Parse an ISO-8601 date or date-time into an aware UTC datetime.

    Naive values are taken to be UTC. Returns None when the text is blank
    or not ISO-8601.
    """
    text = (value or "").strip()
    if not text:
        return None
    if text[-1] in ("Z", "z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class VideoRecord(BaseModel):
    """A single video row from the dataset."""

    video_id: str = ""
    title: str = Field(default="", serialization_alias="video_title")
    channel_title: str = ""
    published_at: str = ""
    views: int = Field(default=0, ge=0)
    likes: int = Field(default=0, ge=0)
    duration_seconds: int = Field(default=0, ge=0)
    thumbnail_url: str = ""

    model_config = {"populate_by_name": True}

    @property
    def is_short(self) -> bool:
        return self.duration_seconds <= SHORT_MAX_SECONDS

    @property
    def published(self) -> datetime | None:
        return parse_published_at(self.published_at)


class RowError(BaseModel):
    """A recoverable problem found while parsing one line of the CSV."""

    line: int
    column: str | None = None
    message: str


@dataclass
class ParseResult:
    videos: list[VideoRecord] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
