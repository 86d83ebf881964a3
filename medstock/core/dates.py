from datetime import date, datetime, time, timedelta, timezone


def normalize_date(value):
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        value_text = value.strip()
        if not value_text:
            return None
        try:
            return date.fromisoformat(value_text)
        except ValueError:
            return None
    return None


def ensure_utc(value: datetime) -> datetime:
    """Tag naive values as UTC; convert aware ones."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def to_local(value: datetime, tz=None) -> datetime:
    """Wall-clock view of ``value`` in ``tz`` (system zone when None), without tzinfo.

    Naive values are taken to be wall-clock times already.
    """
    if value.tzinfo is None:
        return value
    return value.astimezone(tz).replace(tzinfo=None)


def resolve_now(now: datetime | None = None) -> datetime:
    if now is None:
        return datetime.now().astimezone()
    return now


def start_of_day(value) -> datetime:
    return datetime.combine(normalize_date(value), time.min)


def end_of_day(value) -> datetime:
    return datetime.combine(normalize_date(value), time.max)


def day_range(end_day: date, days: int) -> list[date]:
    """``days`` consecutive calendar days ending on ``end_day``, oldest first."""
    return [end_day - timedelta(days=offset) for offset in range(days - 1, -1, -1)]


def week_start(day: date) -> date:
    # weeks start on Sunday
    return day - timedelta(days=(day.weekday() + 1) % 7)


def subtract_months(value: datetime, months: int) -> datetime:
    month_index = value.year * 12 + (value.month - 1) - months
    year, month = divmod(month_index, 12)
    month += 1
    day = value.day
    while True:
        try:
            return value.replace(year=year, month=month, day=day)
        except ValueError:
            day -= 1
