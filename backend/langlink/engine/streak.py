"""
Streak tracking — pure functions, no DB access.

Two advancement policies exist and are kept separate on purpose: the explicit
streak ping compares calendar dates, while lesson completion compares an
integer day difference. They disagree when the stored value carries a time of
day or lies in the future.
"""
from datetime import date, datetime, time, timedelta, timezone

ONE_DAY = timedelta(days=1)


def parse_activity_date(value: str | date | None) -> date | datetime | None:
    """Parse a stored last-active value (ISO date or ISO timestamp)."""
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    if len(value) == 10:
        return date.fromisoformat(value)
    return datetime.fromisoformat(value)


def calendar_day(value: date | datetime) -> date:
    if isinstance(value, datetime):
        return value.date()
    return value


def _as_utc_datetime(value: date | datetime) -> datetime:
    if not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def advance_by_calendar_date(
    last_active: date | datetime | None,
    current_streak: int,
    reference: date | datetime,
) -> int:
    """
    Policy used by the standalone streak ping.
    Yesterday extends the streak, today leaves it alone, anything else
    (a gap of two or more days, or a future date) restarts at 1.
    """
    if last_active is None:
        return 1

    today = calendar_day(reference)
    last_day = calendar_day(last_active)

    if last_day == today - ONE_DAY:
        return current_streak + 1
    if last_day != today:
        return 1
    return current_streak


def advance_by_day_difference(
    last_active: date | datetime | None,
    current_streak: int,
    reference: date | datetime,
) -> int:
    """
    Policy used by lesson completion.
    diff = floor((reference - last_active) / 1 day); naive values are UTC.
    diff == 1 extends, diff > 1 restarts at 1, diff <= 0 leaves it alone.
    """
    if last_active is None:
        return 1

    diff = (_as_utc_datetime(reference) - _as_utc_datetime(last_active)) // ONE_DAY

    if diff == 1:
        return current_streak + 1
    if diff > 1:
        return 1
    return current_streak
