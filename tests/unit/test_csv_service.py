"""Tests for csv_service: line splitting, row mapping and row errors."""

import pytest

from tubestats.errors import DataFileError
from tubestats.services.csv_service import load_videos, parse_csv_line, parse_videos

HEADER = "video_id,video_title,channel_title,published_at,views,likes,duration_seconds,thumbnail_url"


# ---------- parse_csv_line ----------


class TestParseCsvLine:
    def test_plain_fields(self):
        assert parse_csv_line("a,b,c") == ["a", "b", "c"]

    def test_quoted_field_keeps_comma(self):
        line = '"Title, with comma",Channel,2024-01-01,100,10,45,url'
        assert parse_csv_line(line) == [
            "Title, with comma",
            "Channel",
            "2024-01-01",
            "100",
            "10",
            "45",
            "url",
        ]

    def test_escaped_quotes_are_unescaped(self):
        assert parse_csv_line('"She said ""hi""",x') == ['She said "hi"', "x"]

    def test_unquoted_fields_are_trimmed(self):
        assert parse_csv_line("  a ,b  ,  c") == ["a", "b", "c"]

    def test_quoted_whitespace_is_kept(self):
        assert parse_csv_line('"  padded  ",x') == ["  padded  ", "x"]

    def test_whitespace_around_quotes_is_dropped(self):
        assert parse_csv_line('  "a"  ,b') == ["a", "b"]

    def test_empty_fields(self):
        assert parse_csv_line("a,,c,") == ["a", "", "c", ""]

    def test_empty_line_is_one_empty_field(self):
        assert parse_csv_line("") == [""]

    def test_quoted_empty_field(self):
        assert parse_csv_line('"",b') == ["", "b"]

    def test_unterminated_quote_does_not_raise(self):
        assert parse_csv_line('a,"broken, field') == ["a", "broken, field"]


# ---------- parse_videos ----------


class TestParseVideos:
    def test_maps_fields_by_header(self):
        text = "\n".join(
            [
                HEADER,
                'abc123,"Title, with comma",Channel,2024-01-01,100,10,45,http://img',
            ]
        )
        result = parse_videos(text)
        assert result.errors == []
        assert len(result.videos) == 1
        video = result.videos[0]
        assert video.video_id == "abc123"
        assert video.title == "Title, with comma"
        assert video.channel_title == "Channel"
        assert video.published_at == "2024-01-01"
        assert video.views == 100
        assert video.likes == 10
        assert video.duration_seconds == 45
        assert video.thumbnail_url == "http://img"

    def test_header_order_does_not_matter(self):
        text = "views,channel_title,video_id\n5,Chan,v1\n"
        video = parse_videos(text).videos[0]
        assert video.views == 5
        assert video.channel_title == "Chan"
        assert video.video_id == "v1"

    def test_unknown_headers_are_ignored(self):
        text = "video_id,extra,views\nv1,whatever,7\n"
        video = parse_videos(text).videos[0]
        assert video.video_id == "v1"
        assert video.views == 7

    def test_blank_lines_are_skipped(self):
        text = HEADER + "\n\nv1,T,C,2024-01-01,1,1,1,\n   \n\n"
        assert len(parse_videos(text).videos) == 1

    def test_crlf_line_endings(self):
        text = HEADER + "\r\nv1,T,C,2024-01-01,1,2,3,u\r\n"
        video = parse_videos(text).videos[0]
        assert video.thumbnail_url == "u"
        assert video.duration_seconds == 3

    @pytest.mark.parametrize("separator", ["\u2028", "\u2029", "\x85", "\x0b", "\x0c", "\x1e"])
    def test_unicode_line_separators_stay_inside_field(self, separator):
        text = HEADER + f'\na1,"Intro{separator}Part 2",Chan,2024-01-01,100,10,45,url\n'
        result = parse_videos(text)
        assert [v.video_id for v in result.videos] == ["a1"]
        assert result.videos[0].title == f"Intro{separator}Part 2"
        assert result.videos[0].views == 100
        assert result.errors == []

    def test_bom_on_header_is_ignored(self):
        text = "\ufeffvideo_id,views\nv1,3\n"
        assert parse_videos(text).videos[0].video_id == "v1"

    def test_blank_numbers_default_to_zero_without_error(self):
        text = HEADER + "\nv1,T,C,2024-01-01,,,,\n"
        result = parse_videos(text)
        video = result.videos[0]
        assert (video.views, video.likes, video.duration_seconds) == (0, 0, 0)
        assert result.errors == []

    def test_unparseable_number_defaults_to_zero_and_reports(self):
        text = HEADER + "\nv1,T,C,2024-01-01,lots,10,45,\n"
        result = parse_videos(text)
        assert result.videos[0].views == 0
        assert len(result.errors) == 1
        assert result.errors[0].line == 2
        assert result.errors[0].column == "views"

    def test_negative_number_defaults_to_zero_and_reports(self):
        text = HEADER + "\nv1,T,C,2024-01-01,100,-3,45,\n"
        result = parse_videos(text)
        assert result.videos[0].likes == 0
        assert result.errors[0].column == "likes"

    def test_decimal_is_truncated(self):
        text = HEADER + "\nv1,T,C,2024-01-01,12.9,0,45,\n"
        assert parse_videos(text).videos[0].views == 12

    def test_short_row_gets_defaults(self):
        text = HEADER + "\nv1,T\n"
        video = parse_videos(text).videos[0]
        assert video.channel_title == ""
        assert video.views == 0

    def test_unterminated_quote_keeps_row(self):
        text = HEADER + '\nv1,"broken title,C,2024-01-01,1,1,1,\nv2,T,C,2024-01-02,2,2,2,\n'
        result = parse_videos(text)
        assert [v.video_id for v in result.videos] == ["v1", "v2"]
        assert any(e.message == "unterminated quote" for e in result.errors)

    def test_invalid_date_keeps_row_and_reports(self):
        text = HEADER + "\nv1,T,C,not-a-date,1,1,1,\n"
        result = parse_videos(text)
        assert len(result.videos) == 1
        assert result.errors[0].column == "published_at"

    def test_duplicate_video_id_is_dropped(self):
        text = HEADER + "\nv1,First,C,2024-01-01,1,1,1,\nv1,Second,C,2024-01-02,2,2,2,\n"
        result = parse_videos(text)
        assert [v.title for v in result.videos] == ["First"]
        assert result.errors[0].line == 3
        assert result.errors[0].column == "video_id"

    def test_empty_document(self):
        result = parse_videos("")
        assert result.videos == []
        assert result.errors == []

    def test_header_only(self):
        assert parse_videos(HEADER + "\n").videos == []


# ---------- load_videos ----------


class TestLoadVideos:
    def test_reads_file(self, tmp_path):
        path = tmp_path / "videos.csv"
        path.write_text(HEADER + "\nv1,T,C,2024-01-01,1,1,1,\n", encoding="utf-8")
        assert len(load_videos(path).videos) == 1

    def test_missing_file_raises_data_file_error(self, tmp_path):
        with pytest.raises(DataFileError):
            load_videos(tmp_path / "missing.csv")

    def test_undecodable_file_raises_data_file_error(self, tmp_path):
        path = tmp_path / "videos.csv"
        path.write_bytes(b"video_id\n\xff\xfe\xfa\n")
        with pytest.raises(DataFileError):
            load_videos(path)
