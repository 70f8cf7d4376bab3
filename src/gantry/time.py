# SPDX-License-Identifier: MIT

import math
from typing import cast

import pendulum


def now_utc() -> pendulum.DateTime:
    return pendulum.now("UTC")


def today_local() -> pendulum.Date:
    today = pendulum.today("local")
    return date_from_parts(today.year, today.month, today.day)


def datetime_to_iso_str(datetime: pendulum.DateTime) -> str:
    return datetime.isoformat()


def datetime_from_str(datetime: str) -> pendulum.DateTime:
    return cast(pendulum.DateTime, pendulum.parse(datetime))


def date_from_parts(year: int, month: int, day: int) -> pendulum.Date:
    return pendulum.Date(year, month, day)


def date_from_str(date_str: str) -> pendulum.Date:
    """
    Build a calendar date from a 'YYYY-MM-DD' string.

    The string is split into its integer components and the date is built
    from those, so no timezone conversion can shift it across a day
    boundary.

    Raises:
        ValueError: If the string is not three dash-separated integers or
            the components do not form a valid date
    """
    parts = date_str.strip().split("-")
    if len(parts) != 3:
        raise ValueError(f"Expected a YYYY-MM-DD date, got '{date_str}'")
    year, month, day = (int(part) for part in parts)
    return date_from_parts(year, month, day)


def date_to_str(date: pendulum.Date) -> str:
    return f"{date.year:04d}-{date.month:02d}-{date.day:02d}"


def days_between(start: pendulum.Date, end: pendulum.Date) -> int:
    """Signed number of calendar days from start to end."""
    return end.toordinal() - start.toordinal()


def add_days(date: pendulum.Date, days: int) -> pendulum.Date:
    shifted = pendulum.Date.fromordinal(date.toordinal() + days)
    return date_from_parts(shifted.year, shifted.month, shifted.day)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going towards positive infinity."""
    return math.floor(value + 0.5)


def date_to_display_str(date: pendulum.Date) -> str:
    return date.format("YYYY-MM-DD ddd")


def month_label(date: pendulum.Date) -> str:
    return date.format("MMM YYYY")
