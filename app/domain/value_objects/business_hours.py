"""BusinessHours value object — the weekday working window used for SLA clocks."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta, tzinfo
from zoneinfo import ZoneInfo

SATURDAY = 5


@dataclass(frozen=True)
class BusinessHours:
    """Monday–Friday [start_hour, end_hour) window in a fixed time zone.

    Arithmetic runs on local wall-clock time. Aware datetimes are converted
    into ``tz`` first and results come back aware in ``tz``; naive datetimes
    are taken to already be local wall-clock time and stay naive.
    """

    tz: tzinfo
    start_hour: int = 8
    end_hour: int = 18

    def __post_init__(self) -> None:
        if not 0 <= self.start_hour < self.end_hour <= 24:
            raise ValueError(
                f"Invalid business window {self.start_hour}:00-{self.end_hour}:00"
            )

    @classmethod
    def from_zone_name(
        cls, zone: str, start_hour: int = 8, end_hour: int = 18
    ) -> "BusinessHours":
        return cls(tz=ZoneInfo(zone), start_hour=start_hour, end_hour=end_hour)

    @property
    def hours_per_day(self) -> int:
        return self.end_hour - self.start_hour

    # ─── Queries ─────────────────────────────────────────────────────

    def is_business_day(self, day: date) -> bool:
        return day.weekday() < SATURDAY

    def contains(self, moment: datetime) -> bool:
        """True on weekdays when the local hour is in [start_hour, end_hour)."""
        wall = self._to_local(moment)
        return (
            self.is_business_day(wall.date())
            and self.start_hour <= wall.hour < self.end_hour
        )

    # ─── Arithmetic ──────────────────────────────────────────────────

    def add_hours(self, start: datetime, hours: float) -> datetime:
        """Walk forward from *start* consuming *hours* of business time.

        Off-hours and weekend starts are first moved to the next opening.
        Each business day yields what fits before closing; the rest rolls
        over to the next business day. Loop count is bounded by the number
        of business days spanned.
        """
        remaining = timedelta(hours=hours)
        wall = self._to_local(start)

        while remaining > timedelta(0):
            wall = self._next_open_moment(wall)
            step = min(remaining, self._closing(wall.date()) - wall)
            wall += step
            remaining -= step

        return self._from_local(wall, start)

    def hours_between(self, start: datetime, end: datetime) -> float:
        """Business hours overlapping [start, end), clipped per day."""
        if start >= end:
            return 0.0

        wall_start = self._to_local(start)
        wall_end = self._to_local(end)
        total = timedelta(0)

        day = wall_start.date()
        while day <= wall_end.date():
            if self.is_business_day(day):
                lo = max(wall_start, self._opening(day))
                hi = min(wall_end, self._closing(day))
                if hi > lo:
                    total += hi - lo
            day += timedelta(days=1)

        return total.total_seconds() / 3600

    # ─── Internals ───────────────────────────────────────────────────

    def _opening(self, day: date) -> datetime:
        return datetime.combine(day, time()) + timedelta(hours=self.start_hour)

    def _closing(self, day: date) -> datetime:
        return datetime.combine(day, time()) + timedelta(hours=self.end_hour)

    def _next_open_moment(self, wall: datetime) -> datetime:
        while True:
            day = wall.date()
            if not self.is_business_day(day):
                # Saturday → +2, Sunday → +1
                wall = self._opening(day + timedelta(days=7 - day.weekday()))
            elif wall < self._opening(day):
                wall = self._opening(day)
            elif wall >= self._closing(day):
                wall = self._opening(day + timedelta(days=1))
            else:
                return wall

    def _to_local(self, moment: datetime) -> datetime:
        if moment.tzinfo is None:
            return moment
        return moment.astimezone(self.tz).replace(tzinfo=None)

    def _from_local(self, wall: datetime, like: datetime) -> datetime:
        if like.tzinfo is None:
            return wall
        return wall.replace(tzinfo=self.tz)
