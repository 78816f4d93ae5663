from pydantic import BaseModel, Field


class ChannelStat(BaseModel):
    """Totals for one channel over the selected videos."""

    channel_title: str
    total_videos: int
    total_views: int
    avg_views: float


class ChannelSeries(BaseModel):
    channel: str
    color: str
    views: list[int]


class DailyViewsResponse(BaseModel):
    """Views per day, one series per channel, sharing one date axis."""

    dates: list[str]
    series: list[ChannelSeries]


class MonthlyChannelTrend(BaseModel):
    """Monthly view totals of one channel and their linear trend."""

    channel: str
    color: str
    months: list[str]
    views: list[int]
    fitted: list[float]
    slope: float
    intercept: float
    r_squared: float
    trend: str


class ScatterPoint(BaseModel):
    x: float
    y: float


class ViewsLikesChannel(BaseModel):
    """Normalized views (x) against normalized likes (y) for one channel."""

    channel: str
    color: str
    points: list[ScatterPoint]
    raw: list[tuple[int, int]] = Field(description="Original (views, likes) per point")
    slope: float
    intercept: float
    r_squared: float
    regression_line: list[ScatterPoint]
    correlation: str


class ShortsSummary(BaseModel):
    count: int
    total_views: int
    avg_views: float
    median_views: float
    share: float = Field(description="Percentage of selected videos in this class")


class ShortsChannelRow(BaseModel):
    channel: str
    color: str
    shorts_count: int
    regular_count: int
    shorts_avg_views: float
    regular_avg_views: float
    shorts_median_views: float
    regular_median_views: float
    diff_percentage: float


class TopVideo(BaseModel):
    video_id: str
    title: str
    channel_title: str
    color: str
    views: int
    likes: int
    duration_seconds: int


class ShortsComparisonResponse(BaseModel):
    """Shorts against regular videos, overall and per channel."""

    total_count: int
    total_views: int
    shorts: ShortsSummary
    regular: ShortsSummary
    channels: list[ShortsChannelRow]
    top_shorts: list[TopVideo]
    top_regular: list[TopVideo]
