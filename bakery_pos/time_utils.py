from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone, tzinfo
from typing import Literal, Optional, Tuple
from zoneinfo import ZoneInfo

from bakery_pos.core.config import settings
from bakery_pos.core.errors import ValidationError

RangePreset = Literal[
    "today",
    "yesterday",
    "this_week",
    "this_month",
    "last_month",
    "this_year",
    "last_year",
]


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def local_tz() -> tzinfo:
    return ZoneInfo(settings.timezone)


def local_today(tz: Optional[tzinfo] = None, now: Optional[datetime] = None) -> date:
    tz = tz or local_tz()
    return (now or utcnow()).astimezone(tz).date()


def start_of_day(day: date, tz: tzinfo) -> datetime:
    return datetime.combine(day, time.min, tzinfo=tz).astimezone(timezone.utc)


def noon_of(day: date, tz: tzinfo) -> datetime:
    """Local noon of ``day`` in UTC; backdated sales are stamped here."""
    return datetime.combine(day, time(12, 0), tzinfo=tz).astimezone(timezone.utc)


def day_bounds(from_day: date, to_day: date, tz: tzinfo) -> Tuple[datetime, datetime]:
    if to_day < from_day:
        raise ValidationError("'to' date is before 'from' date")
    return start_of_day(from_day, tz), start_of_day(to_day + timedelta(days=1), tz)


def _month_start(day: date) -> date:
    return day.replace(day=1)


def _month_end(day: date) -> date:
    nxt = (day.replace(day=28) + timedelta(days=4)).replace(day=1)
    return nxt - timedelta(days=1)


def preset_range(preset: RangePreset, today: date) -> Tuple[date, date]:
    if preset == "today":
        return today, today
    if preset == "yesterday":
        day = today - timedelta(days=1)
        return day, day
    if preset == "this_week":
        # weeks start on Sunday
        start = today - timedelta(days=(today.weekday() + 1) % 7)
        return start, start + timedelta(days=6)
    if preset == "this_month":
        return _month_start(today), _month_end(today)
    if preset == "last_month":
        last = _month_start(today) - timedelta(days=1)
        return _month_start(last), last
    if preset == "this_year":
        return date(today.year, 1, 1), date(today.year, 12, 31)
    if preset == "last_year":
        return date(today.year - 1, 1, 1), date(today.year - 1, 12, 31)
    raise ValidationError(f"Unknown date range '{preset}'")
