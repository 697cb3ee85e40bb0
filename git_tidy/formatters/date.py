"""Date and time formatting utilities."""

from datetime import datetime, timezone
from typing import Any, Optional

SECONDS_PER_DAY = 24 * 60 * 60


def days_ago(date: datetime, now: Optional[datetime] = None) -> int:
    """
    Count whole days between a date and now.

    Args:
        date: Timezone-aware datetime (naive values are treated as UTC)
        now: Reference instant, defaults to the current time

    Returns:
        Number of complete 24h periods elapsed (never negative)
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if date.tzinfo is None:
        date = date.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)

    elapsed = abs((now - date).total_seconds())
    return int(elapsed // SECONDS_PER_DAY)


def is_older_than(date: datetime, days: int, now: Optional[datetime] = None) -> bool:
    """True if strictly more than ``days`` whole days have passed since ``date``."""
    return days_ago(date, now) > days


def format_age(age_days: int) -> str:
    """
    Format an age in days as a human-readable string.

    Args:
        age_days: Number of days

    Returns:
        "today", "1 day ago", "3 weeks ago", "2 months ago", ...
    """
    if age_days == 0:
        return "today"
    if age_days == 1:
        return "1 day ago"
    if age_days < 7:
        return f"{age_days} days ago"
    if age_days < 30:
        weeks = age_days // 7
        return "1 week ago" if weeks == 1 else f"{weeks} weeks ago"
    if age_days < 365:
        months = age_days // 30
        return "1 month ago" if months == 1 else f"{months} months ago"
    years = age_days // 365
    return "1 year ago" if years == 1 else f"{years} years ago"


def format_days_ago(date: datetime, now: Optional[datetime] = None) -> str:
    """Format the time since ``date`` as a human-readable string."""
    return format_age(days_ago(date, now))


def format_date(date: Any) -> str:
    """
    Format a date object to YYYY-MM-DD string.

    Args:
        date: Date object (datetime or string)

    Returns:
        Formatted date string
    """
    if hasattr(date, "strftime"):
        return date.strftime("%Y-%m-%d")
    return str(date)
