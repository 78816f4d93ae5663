"""Dashboard views computed from a list of video records.

Every function takes the already-filtered videos and returns response
models; colors come from a map built over the full dataset so they stay
stable across filters.
"""

from collections.abc import Mapping, Sequence

from tubestats.models.analytics import (
    ChannelSeries,
    ChannelStat,
    DailyViewsResponse,
    MonthlyChannelTrend,
    ScatterPoint,
    ShortsChannelRow,
    ShortsComparisonResponse,
    ShortsSummary,
    TopVideo,
    ViewsLikesChannel,
)
from tubestats.models.video import VideoRecord
from tubestats.services import aggregation_service as agg
from tubestats.services.color_service import FALLBACK_COLOR
from tubestats.services.regression_service import (
    interpret_correlation,
    interpret_trend,
    simple_linear_regression,
    simple_linear_regression_xy,
)
from tubestats.services.stats_service import mean, median, min_max_normalize


def _by_channel(videos: Sequence[VideoRecord]) -> dict[str, list[VideoRecord]]:
    grouped: dict[str, list[VideoRecord]] = {}
    for video in videos:
        grouped.setdefault(video.channel_title, []).append(video)
    return grouped


def channel_stats(videos: Sequence[VideoRecord]) -> list[ChannelStat]:
    return [
        ChannelStat(
            channel_title=totals.key,
            total_videos=totals.count,
            total_views=totals.total_views,
            avg_views=totals.avg_views,
        )
        for totals in agg.channel_totals(videos)
    ]


def daily_views(
    videos: Sequence[VideoRecord],
    colors: Mapping[str, str],
) -> DailyViewsResponse:
    dates, series = agg.daily_series(videos)
    return DailyViewsResponse(
        dates=dates,
        series=[
            ChannelSeries(channel=channel, color=colors.get(channel, FALLBACK_COLOR), views=views)
            for channel, views in series.items()
        ],
    )


def monthly_trends(
    videos: Sequence[VideoRecord],
    colors: Mapping[str, str],
) -> list[MonthlyChannelTrend]:
    """Monthly view totals per channel with an OLS trend over month index."""
    result: list[MonthlyChannelTrend] = []
    for channel, channel_videos in _by_channel(videos).items():
        monthly = agg.group_by(channel_videos, agg.month_key)
        months = sorted(monthly)
        views = [monthly[m].total_views for m in months]
        fit = simple_linear_regression(views)
        result.append(
            MonthlyChannelTrend(
                channel=channel,
                color=colors.get(channel, FALLBACK_COLOR),
                months=months,
                views=views,
                fitted=[fit.predict(i) for i in range(len(months))],
                slope=fit.slope,
                intercept=fit.intercept,
                r_squared=fit.r_squared,
                trend=interpret_trend(fit.r_squared, fit.slope),
            )
        )
    return result


def views_vs_likes(
    videos: Sequence[VideoRecord],
    colors: Mapping[str, str],
) -> list[ViewsLikesChannel]:
    """Per-channel correlation of normalized views and likes."""
    result: list[ViewsLikesChannel] = []
    for channel, channel_videos in _by_channel(videos).items():
        xs = min_max_normalize([v.views for v in channel_videos])
        ys = min_max_normalize([v.likes for v in channel_videos])
        points = list(zip(xs, ys))
        fit = simple_linear_regression_xy(points)
        line = [ScatterPoint(x=p.x, y=p.y) for p in fit.line_endpoints or ()]
        result.append(
            ViewsLikesChannel(
                channel=channel,
                color=colors.get(channel, FALLBACK_COLOR),
                points=[ScatterPoint(x=x, y=y) for x, y in points],
                raw=[(v.views, v.likes) for v in channel_videos],
                slope=fit.slope,
                intercept=fit.intercept,
                r_squared=fit.r_squared,
                regression_line=line,
                correlation=interpret_correlation(fit.r_squared),
            )
        )
    return result


def _summary(videos: Sequence[VideoRecord], total_count: int) -> ShortsSummary:
    views = [v.views for v in videos]
    return ShortsSummary(
        count=len(videos),
        total_views=sum(views),
        avg_views=mean(views),
        median_views=median(views),
        share=(len(videos) / total_count * 100) if total_count else 0.0,
    )


def _top(videos: Sequence[VideoRecord], colors: Mapping[str, str]) -> list[TopVideo]:
    return [
        TopVideo(
            video_id=v.video_id,
            title=v.title,
            channel_title=v.channel_title,
            color=colors.get(v.channel_title, FALLBACK_COLOR),
            views=v.views,
            likes=v.likes,
            duration_seconds=v.duration_seconds,
        )
        for v in agg.top_videos(videos)
    ]


def shorts_comparison(
    videos: Sequence[VideoRecord],
    colors: Mapping[str, str],
) -> ShortsComparisonResponse:
    """Compare shorts (<= 60 s) with regular videos.

    Channel rows follow the order of ``colors`` (the full dataset order) and
    include only channels present in ``videos``. ``diff_percentage`` is how
    much higher the shorts average is than the regular average, 0 when the
    channel has no regular videos.
    """
    shorts, regular = agg.split_shorts(videos)
    shorts_by_channel = _by_channel(shorts)
    regular_by_channel = _by_channel(regular)

    present = agg.distinct_channels(videos)
    present_set = set(present)
    ordered = [c for c in colors if c in present_set]
    ordered += [c for c in present if c not in colors]

    rows: list[ShortsChannelRow] = []
    for channel in ordered:
        s_views = [v.views for v in shorts_by_channel.get(channel, [])]
        r_views = [v.views for v in regular_by_channel.get(channel, [])]
        s_avg = mean(s_views)
        r_avg = mean(r_views)
        rows.append(
            ShortsChannelRow(
                channel=channel,
                color=colors.get(channel, FALLBACK_COLOR),
                shorts_count=len(s_views),
                regular_count=len(r_views),
                shorts_avg_views=s_avg,
                regular_avg_views=r_avg,
                shorts_median_views=median(s_views),
                regular_median_views=median(r_views),
                diff_percentage=((s_avg / r_avg) - 1) * 100 if r_avg > 0 else 0.0,
            )
        )

    return ShortsComparisonResponse(
        total_count=len(videos),
        total_views=sum(v.views for v in videos),
        shorts=_summary(shorts, len(videos)),
        regular=_summary(regular, len(videos)),
        channels=rows,
        top_shorts=_top(shorts, colors),
        top_regular=_top(regular, colors),
    )
