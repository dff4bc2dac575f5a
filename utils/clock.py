from __future__ import annotations

from datetime import date, datetime, timedelta, timezone, tzinfo
from typing import Optional, Protocol
from zoneinfo import ZoneInfo


class Clock(Protocol):
    def now(self) -> datetime: ...


class SystemClock:
    """Wall-clock time in UTC."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Clock that only moves when told to. Used by tests and replays."""

    def __init__(self, start: datetime):
        self._now = ensure_aware(start)

    def now(self) -> datetime:
        return self._now

    def set(self, value: datetime) -> None:
        self._now = ensure_aware(value)

    def advance(self, days: int = 0, seconds: float = 0) -> datetime:
        self._now = self._now + timedelta(days=days, seconds=seconds)
        return self._now


def ensure_aware(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class Calendar:
    """Calendar-day arithmetic in one fixed zone, independent of the host locale."""

    def __init__(self, tz: Optional[tzinfo] = None):
        self.tz = tz or timezone.utc

    def day_of(self, moment: datetime) -> date:
        return ensure_aware(moment).astimezone(self.tz).date()

    def previous_day(self, day: date) -> date:
        return day - timedelta(days=1)

    def add_days(self, moment: datetime, days: int) -> datetime:
        # Wall-clock addition in the local zone, so a DST change keeps the time of day.
        local = ensure_aware(moment).astimezone(self.tz)
        shifted = local + timedelta(days=days)
        return shifted.astimezone(timezone.utc)


def calendar_from_name(name: Optional[str]) -> Calendar:
    if not name or name.strip().upper() in ("UTC", "Z"):
        return Calendar(timezone.utc)
    return Calendar(ZoneInfo(name.strip()))
