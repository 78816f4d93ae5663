"""Query parameter validation and the standard error envelope."""

import re
from datetime import date

from fastapi.responses import JSONResponse

from tubestats.services.aggregation_service import SORT_FIELDS

MAX_CHANNELS = 50
MAX_CHANNEL_LEN = 100
SORT_ORDERS = ("asc", "desc")

DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    """Return a standard API error response."""
    return JSONResponse(
        status_code=status_code,
        content={"error": {"code": code, "message": message}},
    )


def validate_date(value: str | None, name: str) -> tuple[date | None, str | None]:
    """Validate an optional YYYY-MM-DD date. Returns (date, error_message)."""
    value = value.strip() if value else ""
    if not value:
        return None, None
    if not DATE_RE.match(value):
        return None, f"{name} must be a date in YYYY-MM-DD format"
    try:
        return date.fromisoformat(value), None
    except ValueError:
        return None, f"{name} is not a valid calendar date"


def validate_date_range(
    start: str | None, end: str | None
) -> tuple[date | None, date | None, str | None]:
    """Validate both bounds and their order. Returns (start, end, error_message)."""
    start_date, err = validate_date(start, "start")
    if err:
        return None, None, err
    end_date, err = validate_date(end, "end")
    if err:
        return None, None, err
    if start_date and end_date and start_date > end_date:
        return None, None, "start must not be after end"
    return start_date, end_date, None


def validate_channels(channels: list[str] | None) -> tuple[list[str], str | None]:
    """Trim and de-duplicate channel names. Returns (channels, error_message)."""
    cleaned: list[str] = []
    for channel in channels or []:
        channel = channel.strip()
        if not channel:
            continue
        if len(channel) > MAX_CHANNEL_LEN:
            return [], "channel must be at most 100 characters"
        if channel not in cleaned:
            cleaned.append(channel)
    if len(cleaned) > MAX_CHANNELS:
        return [], "at most 50 channels can be selected"
    return cleaned, None


def validate_sort(sort_by: str | None, order: str | None) -> tuple[str, bool, str | None]:
    """Validate sort field and order. Returns (field, descending, error_message)."""
    sort_by = (sort_by or "views").strip().lower()
    order = (order or "desc").strip().lower()
    if sort_by not in SORT_FIELDS:
        return "", False, f"sort_by must be one of: {', '.join(SORT_FIELDS)}"
    if order not in SORT_ORDERS:
        return "", False, "order must be asc or desc"
    return sort_by, order == "desc", None
