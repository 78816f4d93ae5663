"""Grouping, filtering and ordering of video records.

Date keys are UTC calendar strings (``YYYY-MM`` and ``YYYY-MM-DD``) so a
plain string sort is chronological. Records whose ``published_at`` does not
parse have no date key and are left out of every date-keyed grouping.
"""

from collections.abc import Callable, Hashable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone

from tubestats.models.video import VideoRecord

SORT_FIELDS = ("views", "date", "duration")
TOP_VIDEOS_LIMIT = 10

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


@dataclass
class GroupTotals:
    key: Hashable
    count: int = 0
    total_views: int = 0
    total_likes: int = 0

    @property
    def avg_views(self) -> float:
        if self.count == 0:
            return 0.0
        return self.total_views / self.count

    def add(self, video: VideoRecord) -> None:
        self.count += 1
        self.total_views += video.views
        self.total_likes += video.likes


def group_by(
    videos: Iterable[VideoRecord],
    key_fn: Callable[[VideoRecord], Hashable | None],
) -> dict[Hashable, GroupTotals]:
    """Reduce videos to per-key totals, keys in first-seen order.

    A key function returning None skips that video.
    """
    groups: dict[Hashable, GroupTotals] = {}
    for video in videos:
        key = key_fn(video)
        if key is None:
            continue
        totals = groups.get(key)
        if totals is None:
            totals = groups[key] = GroupTotals(key=key)
        totals.add(video)
    return groups


def month_key(video: VideoRecord) -> str | None:
    published = video.published
    if published is None:
        return None
    return f"{published.year:04d}-{published.month:02d}"


def day_key(video: VideoRecord) -> str | None:
    published = video.published
    if published is None:
        return None
    return published.date().isoformat()


def channel_totals(videos: Iterable[VideoRecord]) -> list[GroupTotals]:
    return list(group_by(videos, lambda v: v.channel_title).values())


def monthly_totals(videos: Iterable[VideoRecord]) -> dict[tuple[str, str], GroupTotals]:
    """Totals per (channel, YYYY-MM)."""

    def key(video: VideoRecord) -> tuple[str, str] | None:
        month = month_key(video)
        if month is None:
            return None
        return video.channel_title, month

    return group_by(videos, key)


def daily_series(videos: Sequence[VideoRecord]) -> tuple[list[str], dict[str, list[int]]]:
    """Per-channel view totals on a shared, sorted date axis.

    The axis is every date seen in ``videos``. A channel with no video on a
    date gets 0 there; that 0 marks absence, not a zero-view upload.
    """

    def key(video: VideoRecord) -> tuple[str, str] | None:
        day = day_key(video)
        if day is None:
            return None
        return video.channel_title, day

    groups = group_by(videos, key)
    dates = sorted({day for _, day in groups})
    index = {day: i for i, day in enumerate(dates)}

    series: dict[str, list[int]] = {}
    for (channel, day), totals in groups.items():
        if channel not in series:
            series[channel] = [0] * len(dates)
        series[channel][index[day]] = totals.total_views
    return dates, series


def split_shorts(videos: Iterable[VideoRecord]) -> tuple[list[VideoRecord], list[VideoRecord]]:
    """Return (shorts, regular), each in input order."""
    shorts: list[VideoRecord] = []
    regular: list[VideoRecord] = []
    for video in videos:
        if video.is_short:
            shorts.append(video)
        else:
            regular.append(video)
    return shorts, regular


def filter_videos(
    videos: Iterable[VideoRecord],
    channels: Iterable[str] | None = None,
    start: date | None = None,
    end: date | None = None,
    exclude_shorts: bool = False,
) -> list[VideoRecord]:
    """Select videos by channel set, inclusive date range and shortness.

    An empty or missing channel set selects every channel. When either date
    bound is given, videos with an unparseable date are dropped.
    """
    wanted = set(channels) if channels else None
    selected: list[VideoRecord] = []
    for video in videos:
        if wanted is not None and video.channel_title not in wanted:
            continue
        if exclude_shorts and video.is_short:
            continue
        if start is not None or end is not None:
            published = video.published
            if published is None:
                continue
            day = published.date()
            if start is not None and day < start:
                continue
            if end is not None and day > end:
                continue
        selected.append(video)
    return selected


def distinct_channels(videos: Iterable[VideoRecord]) -> list[str]:
    """Channel names in first-seen order."""
    return list(dict.fromkeys(v.channel_title for v in videos))


def _sort_key(by: str) -> Callable[[VideoRecord], object]:
    if by == "views":
        return lambda v: v.views
    if by == "duration":
        return lambda v: v.duration_seconds
    if by == "date":
        return lambda v: v.published or _EPOCH
    raise ValueError(f"unknown sort field: {by!r}")


def sort_videos(
    videos: Iterable[VideoRecord],
    by: str = "views",
    descending: bool = True,
) -> list[VideoRecord]:
    """Stable sort by views, publish date or duration.

    Videos with an unparseable date sort as the oldest.
    """
    return sorted(videos, key=_sort_key(by), reverse=descending)


def top_videos(videos: Iterable[VideoRecord], limit: int = TOP_VIDEOS_LIMIT) -> list[VideoRecord]:
    return sort_videos(videos, "views", descending=True)[:limit]
