"""Date utilities for fintrack.

Pure functions for timestamp parsing, month keys and month windows.
"""

from datetime import date, datetime, timedelta

from fintrack.domain.models import Month


def parse_timestamp(value: object) -> datetime | None:
    """Coerce a timestamp-like value into a naive local datetime.

    Args:
        value: A datetime, a date (taken as midnight) or an ISO-8601 string.

    Returns:
        The parsed datetime, or None if the value is not a valid timestamp.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, datetime.min.time())
    elif isinstance(value, str):
        try:
            parsed = datetime.fromisoformat(value.strip())
        except ValueError:
            return None
    else:
        return None

    return to_naive_local(parsed)


def to_naive_local(moment: datetime) -> datetime:
    """Convert an aware datetime to naive local time; naive ones pass through."""
    if moment.tzinfo is None:
        return moment
    # Stored dates are naive local time so they always compare
    return moment.astimezone().replace(tzinfo=None)


def month_key(moment: datetime) -> Month:
    """Return the YYYY-MM key for a timestamp."""
    return Month(f"{moment.year:04d}-{moment.month:02d}")


def trailing_months(now: datetime, count: int) -> list[Month]:
    """List the most recent calendar months ending at ``now``'s month.

    Args:
        now: Reference timestamp; its month is the first entry.
        count: Number of months to return.

    Returns:
        Month keys newest first. Empty if count is zero or negative.
    """
    months: list[Month] = []
    year, month = now.year, now.month
    for _ in range(max(count, 0)):
        months.append(Month(f"{year:04d}-{month:02d}"))
        month -= 1
        if month == 0:
            year, month = year - 1, 12
    return months


def month_range(month: Month) -> tuple[datetime, datetime, str]:
    """Calculate the closed timestamp range and label for a month.

    Args:
        month: Month in YYYY-MM format.

    Returns:
        Tuple of (start, end, label) where:
        - start: Midnight on the first day of the month
        - end: Last microsecond of the month
        - label: Human-readable month (e.g., "January 2025")

    Raises:
        ValueError: If the month is not in YYYY-MM format.
    """
    start = datetime.strptime(month, "%Y-%m")
    next_month = (start.replace(day=28) + timedelta(days=4)).replace(day=1)
    end = next_month - timedelta(microseconds=1)
    label = start.strftime("%B %Y")
    return start, end, label
