"""Conversions from raw registry fields to the directory's display vocabulary."""

from datetime import date, datetime
from decimal import ROUND_HALF_UP, Decimal

from .models import DownloadTier

MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)

HIGH_DOWNLOADS = 10_000
MODERATE_DOWNLOADS = 1_000


def format_stars(count: int) -> str:
    """Abbreviate a star count.

    Counts of 1000 and above render as thousands with one decimal
    (``12345 -> "12.3k"``, ``2000 -> "2k"``); smaller counts render as
    ``"850+"``.
    """
    if count >= 1000:
        thousands = (Decimal(count) / 1000).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        text = str(thousands)
        if text.endswith(".0"):
            text = text[:-2]
        return f"{text}k"
    return f"{count}+"


def download_tier(weekly: int) -> DownloadTier:
    """Bucket a weekly download count into a display tier."""
    if weekly >= HIGH_DOWNLOADS:
        return DownloadTier.HIGH
    if weekly >= MODERATE_DOWNLOADS:
        return DownloadTier.MODERATE
    return DownloadTier.LOW


def year_month(iso_timestamp: str) -> str:
    """Render an ISO-8601 timestamp as ``YYYY-MM`` using its own calendar fields."""
    # fromisoformat only accepts a trailing "Z" from 3.11 on
    parsed = datetime.fromisoformat(iso_timestamp.replace("Z", "+00:00"))
    return f"{parsed.year:04d}-{parsed.month:02d}"


def today_formatted(day: date | None = None) -> str:
    """Render a date as ``October 18, 2026`` (defaults to today)."""
    day = day or date.today()
    return f"{MONTH_NAMES[day.month - 1]} {day.day}, {day.year}"
