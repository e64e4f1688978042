from __future__ import annotations

import re
from datetime import UTC, datetime
from email.utils import parsedate_to_datetime

from mimefields.header.errors import HeaderDateError

_TRAILING_COMMENT_RE = re.compile(r"\s*\([^()]*\)\s*$")


def string_to_date(text: str) -> datetime:
    """Parse an RFC 2822 date-time.

    The result is timezone-aware when the string carries a numeric or named
    zone, and naive for the RFC 2822 "unknown zone" marker ``-0000``.
    """
    if text is None:
        raise HeaderDateError(value="None", reason="missing value")

    cleaned = _TRAILING_COMMENT_RE.sub("", text.strip())
    if not cleaned:
        raise HeaderDateError(value=text, reason="empty value")

    try:
        return parsedate_to_datetime(cleaned)
    except (TypeError, ValueError, IndexError, OverflowError) as exc:
        raise HeaderDateError(value=text) from exc


def to_naive_utc(dt: datetime) -> datetime:
    """Drop the zone marker but keep the instant, expressed in UTC."""
    if dt.tzinfo is None:
        return dt
    return dt.astimezone(UTC).replace(tzinfo=None)
