"""Tests for dashboard_service: the per-chart computations."""

import math

from tubestats.models.video import VideoRecord
from tubestats.services.color_service import FALLBACK_COLOR
from tubestats.services.dashboard_service import (
    channel_stats,
    daily_views,
    monthly_trends,
    shorts_comparison,
    views_vs_likes,
)

COLORS = {"X": "#111111", "Y": "#222222"}


def _video(video_id, channel="X", views=0, likes=0, published_at="2024-01-15", duration=300):
    return VideoRecord(
        video_id=video_id,
        title=f"Video {video_id}",
        channel_title=channel,
        published_at=published_at,
        views=views,
        likes=likes,
        duration_seconds=duration,
    )


class TestChannelStats:
    def test_totals(self):
        videos = [
            _video("1", "X", views=10),
            _video("2", "X", views=20),
            _video("3", "X", views=30),
            _video("4", "Y", views=5),
            _video("5", "Y", views=5),
        ]
        stats = channel_stats(videos)
        assert [s.channel_title for s in stats] == ["X", "Y"]
        assert stats[0].total_videos == 3
        assert stats[0].total_views == 60
        assert stats[0].avg_views == 20.0
        assert stats[1].avg_views == 5.0


class TestDailyViews:
    def test_series_carry_colors(self):
        videos = [
            _video("1", "X", views=3, published_at="2024-01-01"),
            _video("2", "Z", views=4, published_at="2024-01-02"),
        ]
        resp = daily_views(videos, COLORS)
        assert resp.dates == ["2024-01-01", "2024-01-02"]
        assert resp.series[0].channel == "X"
        assert resp.series[0].color == "#111111"
        assert resp.series[0].views == [3, 0]
        assert resp.series[1].color == FALLBACK_COLOR


class TestMonthlyTrends:
    def test_linear_growth(self):
        videos = [
            _video("1", views=100, published_at="2024-01-05"),
            _video("2", views=200, published_at="2024-02-05"),
            _video("3", views=300, published_at="2024-03-05"),
        ]
        (trend,) = monthly_trends(videos, COLORS)
        assert trend.months == ["2024-01", "2024-02", "2024-03"]
        assert trend.views == [100, 200, 300]
        assert math.isclose(trend.slope, 100.0)
        assert math.isclose(trend.r_squared, 1.0)
        assert trend.fitted == [100.0, 200.0, 300.0]
        assert trend.trend == "Strong increase"

    def test_months_are_sorted_not_first_seen(self):
        videos = [
            _video("1", views=50, published_at="2024-03-01"),
            _video("2", views=10, published_at="2024-01-01"),
        ]
        (trend,) = monthly_trends(videos, COLORS)
        assert trend.months == ["2024-01", "2024-03"]
        assert trend.views == [10, 50]

    def test_single_month_has_zero_fit(self):
        (trend,) = monthly_trends([_video("1", views=10)], COLORS)
        assert trend.slope == 0.0
        assert trend.r_squared == 0.0
        assert trend.trend == "Weak decrease"

    def test_one_entry_per_channel(self):
        videos = [_video("1", "X"), _video("2", "Y"), _video("3", "X")]
        assert [t.channel for t in monthly_trends(videos, COLORS)] == ["X", "Y"]


class TestViewsVsLikes:
    def test_points_are_normalized(self):
        videos = [
            _video("1", views=100, likes=10),
            _video("2", views=300, likes=30),
            _video("3", views=200, likes=20),
        ]
        (channel,) = views_vs_likes(videos, COLORS)
        assert [(p.x, p.y) for p in channel.points] == [(0.0, 0.0), (1.0, 1.0), (0.5, 0.5)]
        assert channel.raw == [(100, 10), (300, 30), (200, 20)]
        assert math.isclose(channel.r_squared, 1.0)
        assert channel.correlation == "Strong correlation"
        assert len(channel.regression_line) == 2
        assert channel.regression_line[0].x == 0.0
        assert channel.regression_line[1].x == 1.0

    def test_single_video_has_no_line(self):
        (channel,) = views_vs_likes([_video("1", views=5, likes=1)], COLORS)
        assert channel.points[0].x == 0.5
        assert channel.regression_line == []
        assert channel.correlation == "Very weak or no correlation"


class TestShortsComparison:
    def test_summary_and_rows(self):
        videos = [
            _video("1", "X", views=100, duration=30),
            _video("2", "X", views=300, duration=60),
            _video("3", "X", views=100, duration=61),
            _video("4", "Y", views=50, duration=600),
        ]
        resp = shorts_comparison(videos, COLORS)
        assert resp.total_count == 4
        assert resp.total_views == 550
        assert resp.shorts.count == 2
        assert resp.shorts.total_views == 400
        assert resp.shorts.avg_views == 200.0
        assert resp.shorts.median_views == 200.0
        assert resp.shorts.share == 50.0
        assert resp.regular.count == 2
        assert resp.regular.median_views == 75.0

        x_row, y_row = resp.channels
        assert x_row.channel == "X"
        assert x_row.shorts_count == 2
        assert x_row.regular_count == 1
        assert math.isclose(x_row.diff_percentage, 100.0)
        assert y_row.shorts_count == 0
        assert y_row.diff_percentage == -100.0

    def test_no_regular_videos_gives_zero_diff(self):
        resp = shorts_comparison([_video("1", duration=10, views=5)], COLORS)
        assert resp.channels[0].diff_percentage == 0.0
        assert resp.regular.avg_views == 0.0
        assert resp.regular.median_views == 0

    def test_rows_follow_color_order(self):
        videos = [_video("1", "Y"), _video("2", "X")]
        resp = shorts_comparison(videos, COLORS)
        assert [r.channel for r in resp.channels] == ["X", "Y"]

    def test_top_lists(self):
        videos = [_video(str(i), views=i, duration=20) for i in range(12)]
        resp = shorts_comparison(videos, COLORS)
        assert len(resp.top_shorts) == 10
        assert resp.top_shorts[0].views == 11
        assert resp.top_regular == []

    def test_empty(self):
        resp = shorts_comparison([], COLORS)
        assert resp.total_count == 0
        assert resp.shorts.share == 0.0
        assert resp.channels == []
