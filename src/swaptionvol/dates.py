"""
Date and time utilities for swaption volatilities.

Provides:
- Tenor parsing and tenor arithmetic on dates
- Swaption tenor between two dates (whole years, month-end snapping)
- Relative time from a valuation date-time under a day count
"""

from datetime import date, datetime, timedelta
from typing import Tuple
import math
import re

from .conventions import DayCount, year_fraction


SECONDS_PER_DAY = 86400.0


class DateUtils:
    """Utility class for tenor manipulation."""

    # Tenor regex pattern: number + unit (D/W/M/Y)
    TENOR_PATTERN = re.compile(r'^(\d+)([DWMY])$', re.IGNORECASE)

    @staticmethod
    def parse_tenor(tenor: str) -> Tuple[int, str]:
        """
        Parse a tenor string into (amount, unit).

        Args:
            tenor: Tenor string like "1D", "3M", "2Y"

        Returns:
            Tuple of (amount, unit) where unit is D/W/M/Y

        Raises:
            ValueError: If tenor format is invalid
        """
        match = DateUtils.TENOR_PATTERN.match(tenor.upper().strip())
        if not match:
            raise ValueError(f"Invalid tenor format: {tenor}. Expected format like '3M', '2Y'")

        return int(match.group(1)), match.group(2).upper()

    @staticmethod
    def add_tenor(start: date, tenor: str) -> date:
        """
        Add a tenor to a date.

        Month and year tenors keep the day of month where possible and
        clip to the last day of shorter months.

        Args:
            start: Starting date
            tenor: Tenor string (e.g., "10D", "3M", "2Y")

        Returns:
            End date
        """
        amount, unit = DateUtils.parse_tenor(tenor)

        if unit == 'D':
            return start + timedelta(days=amount)
        elif unit == 'W':
            return start + timedelta(weeks=amount)
        elif unit == 'M':
            year = start.year + (start.month + amount - 1) // 12
            month = (start.month + amount - 1) % 12 + 1
            return start.replace(year=year, month=month, day=min(start.day, _days_in_month(year, month)))
        else:
            year = start.year + amount
            # Feb 29 rolls back to Feb 28
            return start.replace(year=year, day=min(start.day, _days_in_month(year, start.month)))

    @staticmethod
    def tenor_to_years(tenor: str) -> float:
        """
        Convert tenor to approximate year fraction.

        Args:
            tenor: Tenor string

        Returns:
            Approximate years as float
        """
        amount, unit = DateUtils.parse_tenor(tenor)

        if unit == 'D':
            return amount / 365.0
        elif unit == 'W':
            return amount * 7 / 365.0
        elif unit == 'M':
            return amount / 12.0
        return float(amount)


def swaption_tenor(start: date, end: date) -> float:
    """
    Tenor in whole years of a swap running from start to end.

    The day count is converted to months at 365.25 days per year and
    rounded to the nearest month, ties away from zero. The month count is
    then truncated toward zero to whole years, so that dates near a
    month or year end snap onto the same tenor as the plain anniversary.

    Args:
        start: Swap start date
        end: Swap end date

    Returns:
        Signed tenor in years, negative when end precedes start
    """
    months = (end - start).days / 365.25 * 12
    rounded = math.copysign(math.floor(abs(months) + 0.5), months)
    return float(math.trunc(rounded / 12))


def relative_time(valuation: datetime, date_time: datetime, day_count: DayCount) -> float:
    """
    Signed year fraction from the valuation date-time to date_time.

    The date parts are measured with the day count. The difference in time
    of day is added as a fraction of a day over the day count's year length.
    When both date-times carry a zone, date_time is first expressed in the
    valuation zone.

    Args:
        valuation: Valuation date-time
        date_time: Target date-time
        day_count: Day count convention

    Returns:
        Year fraction, negative when date_time is before valuation
    """
    if valuation.tzinfo is not None and date_time.tzinfo is not None:
        date_time = date_time.astimezone(valuation.tzinfo)
    target = date_time.date()
    yf = year_fraction(valuation.date(), target, day_count)
    intraday = _seconds_of_day(date_time) - _seconds_of_day(valuation)
    if intraday == 0:
        return yf
    return yf + intraday / SECONDS_PER_DAY / day_count.days_in_year(target)


def _seconds_of_day(dt: datetime) -> float:
    return dt.hour * 3600 + dt.minute * 60 + dt.second + dt.microsecond / 1e6


def _days_in_month(year: int, month: int) -> int:
    """Return number of days in a month."""
    if month in (1, 3, 5, 7, 8, 10, 12):
        return 31
    elif month in (4, 6, 9, 11):
        return 30
    elif month == 2:
        if (year % 4 == 0 and year % 100 != 0) or (year % 400 == 0):
            return 29
        return 28
    raise ValueError(f"Invalid month: {month}")


__all__ = [
    "DateUtils",
    "swaption_tenor",
    "relative_time",
]
