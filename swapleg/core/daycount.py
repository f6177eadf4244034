"""Day count fractions for accrual periods.

Only adjusted dates are passed here; unadjusted schedule dates never enter
the year fraction.
"""

from __future__ import annotations

import calendar as _cal
from datetime import date
from decimal import Decimal, localcontext
from typing import assert_never

from swapleg.core.money import SWAPLEG_DECIMAL_CONTEXT
from swapleg.core.types import DayCountConvention


def _days_in_year(y: int) -> int:
    return 366 if _cal.isleap(y) else 365


def _act_act_isda(start: date, end: date) -> Decimal:
    """Actual days / actual days in year, split across year boundaries."""
    total = Decimal("0")
    current = start
    while current.year < end.year:
        year_end = date(current.year + 1, 1, 1)
        total += Decimal((year_end - current).days) / Decimal(_days_in_year(current.year))
        current = year_end
    days_in_period = (end - current).days
    if days_in_period > 0:
        total += Decimal(days_in_period) / Decimal(_days_in_year(current.year))
    return total


def _thirty_360(start: date, end: date, *, eurobond: bool) -> Decimal:
    d1 = min(start.day, 30)
    if eurobond:
        d2 = min(end.day, 30)
    else:
        # ISDA 2006 Section 4.16(f) Bond Basis
        d2 = 30 if (end.day == 31 and d1 >= 30) else end.day
    days = 360 * (end.year - start.year) + 30 * (end.month - start.month) + (d2 - d1)
    return Decimal(days) / Decimal("360")


def _act_365l(start: date, end: date) -> Decimal:
    """Actual days / 365, or 366 if the period contains a 29 February."""
    divisor = 365
    for y in range(start.year, end.year + 1):
        if _cal.isleap(y) and start < date(y, 2, 29) <= end:
            divisor = 366
            break
    return Decimal((end - start).days) / Decimal(divisor)


def day_count_fraction(
    start: date, end: date, convention: DayCountConvention,
) -> Decimal:
    """Year fraction of the accrual period [start, end).

    Precondition: start <= end. Raises TypeError otherwise; callers
    build periods from an ordered schedule so this is a programming error.
    """
    if start > end:
        raise TypeError(
            f"day_count_fraction: start ({start}) must be <= end ({end})"
        )
    with localcontext(SWAPLEG_DECIMAL_CONTEXT):
        match convention:
            case DayCountConvention.ACT_360:
                return Decimal((end - start).days) / Decimal("360")
            case DayCountConvention.ACT_365F:
                return Decimal((end - start).days) / Decimal("365")
            case DayCountConvention.ACT_365L:
                return _act_365l(start, end)
            case DayCountConvention.ACT_ACT_ISDA:
                return _act_act_isda(start, end)
            case DayCountConvention.THIRTY_360:
                return _thirty_360(start, end, eurobond=False)
            case DayCountConvention.THIRTY_E_360:
                return _thirty_360(start, end, eurobond=True)
            case _never:
                assert_never(_never)
