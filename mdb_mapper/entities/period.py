"""
Period value objects.

A period has an optional begin and an optional end instant. Either bound may
be missing; a period with neither is unbounded.
"""

from datetime import date, datetime, time, timezone
from typing import Any

from ..exceptions import InvalidArgumentError


def _utc(value: Any, name: str) -> datetime | None:
    if value is None:
        return None
    if isinstance(value, datetime):
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
    if isinstance(value, date):
        return datetime.combine(value, time(), tzinfo=timezone.utc)
    raise InvalidArgumentError(f"Period {name} must be a datetime or date", argument=value)


class Period:
    """
    A span of time with optional bounds.

    Bounds are stored as aware UTC datetimes; naive values are taken as UTC.
    Setting a bound so that begin would come after end raises
    InvalidArgumentError.

    Example:
        period = Period(begin=datetime(2020, 1, 1, tzinfo=timezone.utc))
        period.is_unbounded()  # False
        period.end             # None
    """

    def __init__(self, begin: datetime | date | None = None, end: datetime | date | None = None):
        self._begin = None
        self._end = None
        self.set_bounds(begin, end)

    def _normalize(self, value: Any, name: str) -> datetime | None:
        return _utc(value, name)

    def _test_set_begin(self, value: Any) -> datetime | None:
        value = self._normalize(value, "begin")
        if value is not None and self._end is not None and value > self._end:
            raise InvalidArgumentError("Period begin must not be after end", argument=value)
        return value

    def _test_set_end(self, value: Any) -> datetime | None:
        value = self._normalize(value, "end")
        if value is not None and self._begin is not None and value < self._begin:
            raise InvalidArgumentError("Period end must not be before begin", argument=value)
        return value

    @property
    def begin(self) -> datetime | None:
        return self._begin

    @begin.setter
    def begin(self, value: datetime | date | None) -> None:
        self._begin = self._test_set_begin(value)

    @property
    def end(self) -> datetime | None:
        return self._end

    @end.setter
    def end(self, value: datetime | date | None) -> None:
        self._end = self._test_set_end(value)

    def with_begin(self, value: datetime | date | None) -> "Period":
        self.begin = value
        return self

    def with_end(self, value: datetime | date | None) -> "Period":
        self.end = value
        return self

    def set_bounds(
        self, begin: datetime | date | None, end: datetime | date | None
    ) -> "Period":
        """
        Replace both bounds, validating them against each other only.

        Raises:
            InvalidArgumentError: If begin comes after end
        """
        begin = self._normalize(begin, "begin")
        end = self._normalize(end, "end")
        if begin is not None and end is not None and begin > end:
            raise InvalidArgumentError("Period begin must not be after end", argument=begin)
        self._begin = begin
        self._end = end
        return self

    def is_unbounded(self) -> bool:
        """Return True if neither bound is set."""
        return self._begin is None and self._end is None

    def contains(self, instant: datetime) -> bool:
        """Return True if ``instant`` lies within the period (bounds inclusive)."""
        instant = _utc(instant, "instant")
        if self._begin is not None and instant < self._begin:
            return False
        if self._end is not None and instant > self._end:
            return False
        return True

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._begin == other._begin and self._end == other._end

    def __hash__(self) -> int:
        return hash((type(self).__name__, self._begin, self._end))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(begin={self._begin!r}, end={self._end!r})"


class DatePeriod(Period):
    """A period whose bounds are whole days (midnight UTC)."""

    def _normalize(self, value: Any, name: str) -> datetime | None:
        value = _utc(value, name)
        if value is None:
            return None
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
