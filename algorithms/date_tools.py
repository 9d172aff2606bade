import datetime
from typing import NamedTuple, Optional, Union

DateLike = Union[datetime.date, str]


class WeekBounds(NamedTuple):
    start: datetime.date
    end: datetime.date


class DateTools:
    """Calendar helpers for ISO dates and Monday-start weeks."""

    MONTH_NAMES = (
        "Jan", "Feb", "Mar", "Apr", "May", "Jun",
        "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
    )
    RANGE_PRESETS = {"30D": 30, "3M": 90, "6M": 180}
    ALL_TIME_START = datetime.date(2020, 1, 1)

    @staticmethod
    def to_date(value: DateLike) -> datetime.date:
        """Return ``value`` as a date; accepts ``YYYY-MM-DD`` strings."""
        if isinstance(value, datetime.datetime):
            return value.date()
        if isinstance(value, datetime.date):
            return value
        return datetime.date.fromisoformat(value)

    @classmethod
    def today(cls, today: Optional[DateLike] = None) -> datetime.date:
        """Return ``today`` if given, otherwise the local calendar date."""
        if today is None:
            return datetime.date.today()
        return cls.to_date(today)

    @classmethod
    def week_bounds(cls, value: DateLike) -> WeekBounds:
        """Return Monday and Sunday of the week containing ``value``."""
        day = cls.to_date(value)
        # weekday(): Monday == 0, Sunday == 6
        monday = day - datetime.timedelta(days=day.weekday())
        return WeekBounds(monday, monday + datetime.timedelta(days=6))

    @classmethod
    def previous_week_bounds(cls, value: DateLike) -> WeekBounds:
        return cls.week_bounds(cls.to_date(value) - datetime.timedelta(days=7))

    @classmethod
    def in_range(cls, value: DateLike, start: DateLike, end: DateLike) -> bool:
        """Return True if ``start <= value <= end``."""
        return cls.to_date(start) <= cls.to_date(value) <= cls.to_date(end)

    @classmethod
    def days_between(cls, start: DateLike, end: DateLike) -> int:
        return (cls.to_date(end) - cls.to_date(start)).days

    @classmethod
    def window_bounds(
        cls, window_days: int, today: Optional[DateLike] = None
    ) -> WeekBounds:
        """Return the inclusive trailing window of ``window_days`` ending today."""
        if window_days <= 0:
            raise ValueError("window_days must be positive")
        end = cls.today(today)
        return WeekBounds(end - datetime.timedelta(days=window_days - 1), end)

    @classmethod
    def range_for_preset(
        cls, key: str, today: Optional[DateLike] = None
    ) -> WeekBounds:
        """Return the date range for a preset key (30D, 3M, 6M or ALL)."""
        end = cls.today(today)
        if key == "ALL":
            return WeekBounds(cls.ALL_TIME_START, end)
        if key not in cls.RANGE_PRESETS:
            raise ValueError(f"unknown range preset: {key}")
        return WeekBounds(end - datetime.timedelta(days=cls.RANGE_PRESETS[key]), end)

    @classmethod
    def format_week_range(cls, start: DateLike, end: DateLike) -> str:
        """Format a range as ``Jan 1 - 7`` or ``Dec 30 - Jan 5``."""
        s = cls.to_date(start)
        e = cls.to_date(end)
        s_month = cls.MONTH_NAMES[s.month - 1]
        e_month = cls.MONTH_NAMES[e.month - 1]
        if s_month == e_month:
            return f"{s_month} {s.day} - {e.day}"
        return f"{s_month} {s.day} - {e_month} {e.day}"

    @classmethod
    def relative_date(cls, value: DateLike, today: Optional[DateLike] = None) -> str:
        days = cls.days_between(value, cls.today(today))
        if days == 0:
            return "Today"
        if days == 1:
            return "Yesterday"
        if days == -1:
            return "Tomorrow"
        if days < 0:
            return f"In {-days} days"
        return f"{days} days ago"
