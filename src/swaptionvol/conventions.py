"""
Day count conventions and swap conventions for swaption volatilities.

Supported Day Counts:
- ACT/360: Actual days / 360 (money markets, OIS)
- ACT/365: Actual days / 365
- ACT/ACT ISDA: Actual days split by calendar year / days in that year
- 30/360: 30 days per month / 360 (some swaps)

Swap conventions are opaque to the volatility provider. They identify the
underlying swap of the swaption and are carried through to sensitivities.
"""

from dataclasses import dataclass
from datetime import date
from enum import Enum
import calendar


class DayCount(Enum):
    """Day count convention enumeration."""
    ACT_360 = "ACT/360"
    ACT_365 = "ACT/365"
    ACT_ACT_ISDA = "ACT/ACT ISDA"
    THIRTY_360 = "30/360"

    @classmethod
    def from_string(cls, s: str) -> "DayCount":
        """Parse day count from string representation."""
        mapping = {
            "ACT/360": cls.ACT_360,
            "ACT360": cls.ACT_360,
            "ACT/365": cls.ACT_365,
            "ACT365": cls.ACT_365,
            "ACT/365F": cls.ACT_365,
            "ACT/ACT": cls.ACT_ACT_ISDA,
            "ACTACT": cls.ACT_ACT_ISDA,
            "ACT/ACTISDA": cls.ACT_ACT_ISDA,
            "30/360": cls.THIRTY_360,
            "30360": cls.THIRTY_360,
        }
        key = s.upper().replace(" ", "").replace("_", "")
        if key in mapping:
            return mapping[key]
        raise ValueError(f"Unknown day count convention: {s}")

    def days_in_year(self, d: date) -> int:
        """
        Nominal number of days in the year containing d.

        Used to turn an intraday offset into a year fraction.
        """
        if self == DayCount.ACT_ACT_ISDA:
            return 366 if calendar.isleap(d.year) else 365
        if self == DayCount.ACT_365:
            return 365
        return 360


@dataclass(frozen=True)
class SwapConvention:
    """
    Market convention of the swap underlying a swaption.

    Attributes:
        name: Unique convention name, e.g. "USD-FIXED-6M-LIBOR-3M"
        fixed_day_count: Day count of the fixed leg
        fixed_frequency: Fixed leg payments per year
        float_index: Floating rate index name
        spot_days: Days from trade date to swap start
    """
    name: str
    fixed_day_count: DayCount = DayCount.THIRTY_360
    fixed_frequency: int = 2
    float_index: str = "USD-LIBOR-3M"
    spot_days: int = 2

    def __str__(self) -> str:
        return self.name

    @classmethod
    def usd_fixed_6m_libor_3m(cls) -> "SwapConvention":
        """Standard USD IRS: semi-annual 30/360 fixed vs 3M LIBOR."""
        return cls(
            name="USD-FIXED-6M-LIBOR-3M",
            fixed_day_count=DayCount.THIRTY_360,
            fixed_frequency=2,
            float_index="USD-LIBOR-3M",
            spot_days=2
        )

    @classmethod
    def eur_fixed_1y_euribor_6m(cls) -> "SwapConvention":
        """Standard EUR IRS: annual 30/360 fixed vs 6M EURIBOR."""
        return cls(
            name="EUR-FIXED-1Y-EURIBOR-6M",
            fixed_day_count=DayCount.THIRTY_360,
            fixed_frequency=1,
            float_index="EUR-EURIBOR-6M",
            spot_days=2
        )

    @classmethod
    def gbp_fixed_6m_libor_6m(cls) -> "SwapConvention":
        """Standard GBP IRS: semi-annual ACT/365 fixed vs 6M LIBOR."""
        return cls(
            name="GBP-FIXED-6M-LIBOR-6M",
            fixed_day_count=DayCount.ACT_365,
            fixed_frequency=2,
            float_index="GBP-LIBOR-6M",
            spot_days=0
        )


def year_fraction(start: date, end: date, day_count: DayCount) -> float:
    """
    Calculate the signed year fraction between two dates.

    Args:
        start: Start date
        end: End date
        day_count: Day count convention

    Returns:
        Year fraction as float, negative when end precedes start

    Conventions:
        ACT/360: (end - start).days / 360
        ACT/365: (end - start).days / 365
        ACT/ACT ISDA: days in each calendar year / days in that year
        30/360: Assumes 30 days per month, 360 days per year
    """
    if start == end:
        return 0.0
    if end < start:
        return -year_fraction(end, start, day_count)

    actual_days = (end - start).days

    if day_count == DayCount.ACT_360:
        return actual_days / 360.0

    elif day_count == DayCount.ACT_365:
        return actual_days / 365.0

    elif day_count == DayCount.ACT_ACT_ISDA:
        if start.year == end.year:
            return actual_days / _days_in_year(start.year)
        # Stub in the start year, whole years between, stub in the end year
        first = (date(start.year + 1, 1, 1) - start).days / _days_in_year(start.year)
        last = (end - date(end.year, 1, 1)).days / _days_in_year(end.year)
        return first + (end.year - start.year - 1) + last

    elif day_count == DayCount.THIRTY_360:
        # 30/360 US convention
        d1 = min(start.day, 30)
        d2 = end.day
        if end.day == 31 and d1 == 30:
            d2 = 30
        return (360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)) / 360.0

    else:
        raise ValueError(f"Unknown day count: {day_count}")


def _days_in_year(year: int) -> int:
    return 366 if calendar.isleap(year) else 365


__all__ = [
    "DayCount",
    "SwapConvention",
    "year_fraction",
]
