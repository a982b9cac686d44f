"""Calendar partitioning of date ranges into labelled periods."""

import calendar
from datetime import date, timedelta

from period_overview.schemas import Period
from period_overview.utils.exceptions import raise_configuration_error

GRANULARITIES = ("1D", "1W", "1M", "3M", "6M", "1Y")


def _month_start(value: date) -> date:
    return value.replace(day=1)


def _month_end(value: date) -> date:
    next_month = value.replace(day=28) + timedelta(days=4)
    return next_month.replace(day=1) - timedelta(days=1)


def _quarter_start(value: date) -> date:
    month = ((value.month - 1) // 3) * 3 + 1
    return date(year=value.year, month=month, day=1)


def _half_start(value: date) -> date:
    return date(year=value.year, month=1 if value.month <= 6 else 7, day=1)


def _add_months(value: date, months: int) -> date:
    year = value.year + (value.month - 1 + months) // 12
    month = (value.month - 1 + months) % 12 + 1
    day = min(value.day, _month_end(date(year, month, 1)).day)
    return date(year, month, day)


def period_label(start: date, granularity: str) -> str:
    """Human label of the period of `granularity` starting at `start`."""
    if granularity == "1D":
        return start.isoformat()
    if granularity == "1W":
        iso_year, iso_week, _ = start.isocalendar()
        return f"Week {iso_week}, {iso_year}"
    if granularity == "1M":
        return f"{calendar.month_name[start.month]} {start.year}"
    if granularity == "3M":
        return f"Q{(start.month - 1) // 3 + 1} {start.year}"
    if granularity == "6M":
        return f"H{1 if start.month <= 6 else 2} {start.year}"
    if granularity == "1Y":
        return str(start.year)
    raise_configuration_error(f"Unsupported period: {granularity}")


class CalendarPartitioner:
    """Splits a range into whole calendar periods.

    Periods are never clipped to the requested range: the first one may start
    before `start` and the last one may end after `end`. Weeks start on Monday.
    """

    def block_periods(self, start: date, end: date, granularity: str) -> list[Period]:
        if granularity not in GRANULARITIES:
            raise_configuration_error(f"Unsupported period: {granularity}")

        periods: list[Period] = []
        cursor = start

        while cursor <= end:
            if granularity == "1D":
                span_start = cursor
                span_end = cursor
                next_cursor = cursor + timedelta(days=1)
            elif granularity == "1W":
                span_start = cursor - timedelta(days=cursor.weekday())
                span_end = span_start + timedelta(days=6)
                next_cursor = span_start + timedelta(days=7)
            elif granularity == "1M":
                span_start = _month_start(cursor)
                span_end = _month_end(cursor)
                next_cursor = _add_months(span_start, 1)
            elif granularity == "3M":
                span_start = _quarter_start(cursor)
                next_cursor = _add_months(span_start, 3)
                span_end = next_cursor - timedelta(days=1)
            elif granularity == "6M":
                span_start = _half_start(cursor)
                next_cursor = _add_months(span_start, 6)
                span_end = next_cursor - timedelta(days=1)
            else:
                span_start = date(cursor.year, 1, 1)
                span_end = date(cursor.year, 12, 31)
                next_cursor = date(cursor.year + 1, 1, 1)

            periods.append(Period(label=period_label(span_start, granularity), start=span_start, end=span_end))
            cursor = next_cursor

        return periods
