"""CSV loading for the videos dataset.

The file is a plain comma-separated export with one header row. Quoted
fields may contain commas and doubled quotes; records never span lines.
Problems with individual rows are collected as RowError entries instead of
failing the whole file.
"""

import logging
import math
from pathlib import Path

from tubestats.errors import DataFileError
from tubestats.models.video import ParseResult, RowError, VideoRecord, parse_published_at

logger = logging.getLogger(__name__)

TEXT_COLUMNS = {
    "video_id": "video_id",
    "video_title": "title",
    "channel_title": "channel_title",
    "published_at": "published_at",
    "thumbnail_url": "thumbnail_url",
}
COUNT_COLUMNS = ("views", "likes", "duration_seconds")


def _split_line(line: str) -> tuple[list[str], bool]:
    """Split one line into fields. Returns (fields, quotes_balanced)."""
    fields: list[str] = []
    buf: list[str] = []
    in_quotes = False
    quoted = False
    closed_at: int | None = None

    def finish() -> str:
        text = "".join(buf)
        if not quoted:
            return text.strip()
        if closed_at is None:
            return text
        return text[:closed_at] + text[closed_at:].rstrip()

    i = 0
    n = len(line)
    while i < n:
        ch = line[i]
        if in_quotes:
            if ch == '"':
                if i + 1 < n and line[i + 1] == '"':
                    buf.append('"')
                    i += 2
                    continue
                in_quotes = False
                closed_at = len(buf)
            else:
                buf.append(ch)
        elif ch == '"':
            if not quoted and not "".join(buf).strip():
                # opening quote: drop whitespace before it
                buf.clear()
            in_quotes = True
            quoted = True
            closed_at = None
        elif ch == ",":
            fields.append(finish())
            buf.clear()
            quoted = False
            closed_at = None
        else:
            buf.append(ch)
        i += 1

    fields.append(finish())
    return fields, not in_quotes


def parse_csv_line(line: str) -> list[str]:
    """Split a CSV line into field values.

    Commas inside double quotes do not separate fields and ``""`` inside a
    quoted field is a literal quote. Unquoted values are trimmed. An
    unterminated quote swallows the rest of the line into the last field.
    """
    fields, _ = _split_line(line)
    return fields


def _parse_count(value: str) -> tuple[int, str | None]:
    """Parse a non-negative count. Returns (value, error_message)."""
    if not value:
        return 0, None
    try:
        number = int(value)
    except ValueError:
        try:
            number = math.trunc(float(value))
        except (ValueError, OverflowError):
            return 0, f"not a number: {value!r}"
    if number < 0:
        return 0, f"negative value: {value!r}"
    return number, None


def parse_videos(text: str) -> ParseResult:
    """Parse the whole CSV document into typed records plus row errors."""
    result = ParseResult()
    headers: list[str] | None = None
    seen_ids: set[str] = set()

    for lineno, line in enumerate(text.split("\n"), start=1):
        line = line.removesuffix("\r")
        if not line.strip():
            continue

        if headers is None:
            headers = [h.lstrip("\ufeff") for h in parse_csv_line(line)]
            continue

        values, balanced = _split_line(line)
        if not balanced:
            result.errors.append(RowError(line=lineno, message="unterminated quote"))

        data: dict[str, str | int] = {}
        for index, header in enumerate(headers):
            value = values[index] if index < len(values) else ""
            if header in COUNT_COLUMNS:
                number, err = _parse_count(value)
                if err:
                    result.errors.append(RowError(line=lineno, column=header, message=err))
                data[header] = number
            elif header in TEXT_COLUMNS:
                data[TEXT_COLUMNS[header]] = value

        video = VideoRecord(**data)

        if video.video_id and video.video_id in seen_ids:
            result.errors.append(
                RowError(
                    line=lineno,
                    column="video_id",
                    message=f"duplicate video_id {video.video_id!r}, row skipped",
                )
            )
            continue
        seen_ids.add(video.video_id)

        if video.published_at and parse_published_at(video.published_at) is None:
            result.errors.append(
                RowError(
                    line=lineno,
                    column="published_at",
                    message=f"invalid date: {video.published_at!r}",
                )
            )

        result.videos.append(video)

    return result


def load_videos(path: Path) -> ParseResult:
    """Read and parse the videos CSV at ``path``."""
    try:
        text = Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise DataFileError(path, f"cannot read videos file: {e}") from e

    result = parse_videos(text)
    if result.errors:
        logger.warning("videos: %d row problems in %s", len(result.errors), path)
    return result
