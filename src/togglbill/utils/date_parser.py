from datetime import datetime
from typing import Optional, Tuple


def month_range(offset: int, today: Optional[datetime] = None) -> Tuple[datetime, datetime]:
    """
    Get the half-open date range of a month relative to today.

    Args:
        offset: Months back from the current month (0 = current, 1 = previous)
        today: Reference date, defaults to now

    Returns:
        Tuple of (start_date, end_date): local midnight of the first day of
        the month and of the first day of the following month
    """
    if offset < 0:
        raise ValueError(f"Month offset must not be negative: {offset}")

    now = today or datetime.now()
    index = now.year * 12 + (now.month - 1) - offset

    year, month = divmod(index, 12)
    next_year, next_month = divmod(index + 1, 12)

    start_date = datetime(year, month + 1, 1).astimezone()
    end_date = datetime(next_year, next_month + 1, 1).astimezone()
    return start_date, end_date


def format_month(start_date: datetime) -> str:
    """Format a month range start as ``YYYY-MM`` for display."""
    return start_date.strftime("%Y-%m")
