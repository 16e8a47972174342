from __future__ import annotations

import calendar
from datetime import datetime, timezone
from typing import List


def parse_date(s: str, fmt: str) -> float:
    dt = datetime.strptime(s.strip(), fmt)
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.timestamp()


def to_datetime(ts: float) -> datetime:
    return datetime.fromtimestamp(float(ts), tz=timezone.utc)


def format_date(ts: float, fmt: str) -> str:
    return to_datetime(ts).strftime(fmt)


def format_long_date(ts: float) -> str:
    # e.g. "Mon Jan 02 2023"
    return format_date(ts, "%a %b %d %Y")


def format_short_date(ts: float) -> str:
    # month/day/year without zero padding, e.g. "1/2/2023"
    dt = to_datetime(ts)
    return f"{dt.month}/{dt.day}/{dt.year}"


def last_day_of_month(year: int, month: int) -> int:
    return int(calendar.monthrange(int(year), int(month))[1])


def add_months(dt: datetime, months: int) -> datetime:
    if months == 0:
        return dt
    total = (dt.year * 12) + (dt.month - 1) + int(months)
    year = total // 12
    month = (total % 12) + 1
    day = min(dt.day, last_day_of_month(year, month))
    return dt.replace(year=year, month=month, day=day)


def month_ticks(t0: float, t1: float) -> List[float]:
    """
    First-of-month timestamps within [t0, t1] (inclusive), ascending.
    """
    if t1 < t0:
        t0, t1 = t1, t0
    start = to_datetime(t0)
    dt = start.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if dt.timestamp() < t0:
        dt = add_months(dt, 1)
    out: List[float] = []
    while dt.timestamp() <= t1:
        out.append(dt.timestamp())
        dt = add_months(dt, 1)
    return out
