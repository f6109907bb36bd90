# ticketdesk/core/timeutils.py
from datetime import datetime, timezone


def utcnow() -> datetime:
    """Naive UTC timestamp, the form stored in the database."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def as_naive_utc(value: datetime | None) -> datetime | None:
    if value is None or value.tzinfo is None:
        return value
    return value.astimezone(timezone.utc).replace(tzinfo=None)


def one_month_before(value: datetime) -> datetime:
    year, month = value.year, value.month - 1
    if month == 0:
        year, month = year - 1, 12
    # clamp e.g. March 31 -> February 28/29
    for day in (value.day, 30, 29, 28):
        try:
            return value.replace(year=year, month=month, day=day)
        except ValueError:
            continue
    raise ValueError(f"cannot step back one month from {value!r}")
