"""Holiday calendars and business day adjustment.

Calendars are addressed by business center code (GBLO, EUTA, USNY) and are
rule based: holidays are generated per year from fixed dates with weekend
substitution, Easter-relative days, nth/last weekdays of a month, and listed
one-off closures. Saturdays and Sundays are never business days. A set of
business centers is a holiday on any day that is a holiday in one of them.
"""

from __future__ import annotations

import calendar as _cal
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date, timedelta
from functools import lru_cache
from typing import Literal, assert_never, final

from dateutil.easter import easter

from swapleg.core.result import Err, Ok
from swapleg.core.types import BusinessDayConvention

# ---------------------------------------------------------------------------
# Holiday rule helpers
# ---------------------------------------------------------------------------

_MON, _TUE, _WED, _THU, _FRI, _SAT, _SUN = range(7)


def _nth_weekday(year: int, month: int, weekday: int, n: int) -> date:
    """The n-th (1-based) given weekday of a month."""
    first = date(year, month, 1)
    offset = (weekday - first.weekday()) % 7
    return first + timedelta(days=offset + 7 * (n - 1))


def _last_weekday(year: int, month: int, weekday: int) -> date:
    last = date(year, month, _cal.monthrange(year, month)[1])
    return last - timedelta(days=(last.weekday() - weekday) % 7)


def _next_monday_if_weekend(d: date) -> date:
    if d.weekday() == _SAT:
        return d + timedelta(days=2)
    if d.weekday() == _SUN:
        return d + timedelta(days=1)
    return d


def _next_monday_if_sunday(d: date) -> date:
    """Sunday -> Monday."""
    if d.weekday() == _SUN:
        return d + timedelta(days=1)
    return d


def _christmas_pair(year: int) -> set[date]:
    """Christmas and Boxing Day with UK weekend substitution."""
    xmas = date(year, 12, 25)
    match xmas.weekday():
        case 4:  # Friday: Boxing Day moves to Monday
            return {xmas, date(year, 12, 28)}
        case 5:  # Saturday: both move to Mon/Tue
            return {date(year, 12, 27), date(year, 12, 28)}
        case 6:  # Sunday: Christmas moves to Tuesday
            return {date(year, 12, 26), date(year, 12, 27)}
        case _:
            return {xmas, date(year, 12, 26)}


# ---------------------------------------------------------------------------
# Calendar rules
# ---------------------------------------------------------------------------

_GBLO_SPECIAL: dict[int, frozenset[date]] = {
    1999: frozenset({date(1999, 12, 31)}),
    2002: frozenset({date(2002, 6, 3), date(2002, 6, 4)}),
    2011: frozenset({date(2011, 4, 29)}),
    2012: frozenset({date(2012, 6, 4), date(2012, 6, 5)}),
    2022: frozenset({date(2022, 6, 2), date(2022, 6, 3), date(2022, 9, 19)}),
    2023: frozenset({date(2023, 5, 8)}),
}


def _gblo_holidays(year: int) -> frozenset[date]:
    """London (GBLO) bank holidays."""
    easter_sunday = easter(year)
    days = {
        _next_monday_if_weekend(date(year, 1, 1)),
        easter_sunday - timedelta(days=2),
        easter_sunday + timedelta(days=1),
        _last_weekday(year, 8, _MON),
    }
    # Early May bank holiday (moved for VE day anniversaries)
    if year in (1995, 2020):
        days.add(date(year, 5, 8))
    elif year >= 1978:
        days.add(_nth_weekday(year, 5, _MON, 1))
    # Spring bank holiday (moved for jubilees)
    if year not in (2002, 2012, 2022):
        days.add(_last_weekday(year, 5, _MON))
    days |= _christmas_pair(year)
    return frozenset(days | _GBLO_SPECIAL.get(year, frozenset()))


def _euta_holidays(year: int) -> frozenset[date]:
    """TARGET2 (EUTA) closing days. No weekend substitution."""
    easter_sunday = easter(year)
    days = {date(year, 1, 1), date(year, 12, 25), date(year, 12, 26)}
    if year >= 2000:
        days |= {
            easter_sunday - timedelta(days=2),
            easter_sunday + timedelta(days=1),
            date(year, 5, 1),
        }
    if year == 1999:
        days.add(date(1999, 12, 31))
    return frozenset(days)


def _usny_holidays(year: int) -> frozenset[date]:
    """New York (USNY) banking holidays, Federal Reserve rules.

    A fixed-date holiday on a Sunday is observed on the Monday; one on a
    Saturday is not observed and the Friday before stays open.
    """
    days = {
        _nth_weekday(year, 1, _MON, 3),   # Martin Luther King Jr. Day
        _nth_weekday(year, 2, _MON, 3),   # Washington's Birthday
        _last_weekday(year, 5, _MON),     # Memorial Day
        _nth_weekday(year, 9, _MON, 1),   # Labor Day
        _nth_weekday(year, 10, _MON, 2),  # Columbus Day
        _nth_weekday(year, 11, _THU, 4),  # Thanksgiving
    }
    fixed = [date(year, 1, 1), date(year, 7, 4), date(year, 11, 11), date(year, 12, 25)]
    if year >= 2022:
        fixed.append(date(year, 6, 19))
    days |= {_next_monday_if_sunday(d) for d in fixed if d.weekday() != _SAT}
    return frozenset(days)


_CALENDAR_RULES: dict[str, Callable[[int], frozenset[date]]] = {
    "GBLO": _gblo_holidays,
    "EUTA": _euta_holidays,
    "USNY": _usny_holidays,
}

KNOWN_BUSINESS_CENTERS: frozenset[str] = frozenset(_CALENDAR_RULES)


@lru_cache(maxsize=1024)
def holidays_for(center: str, year: int) -> frozenset[date]:
    """Holidays of one business center in one year (weekends excluded)."""
    return _CALENDAR_RULES[center](year)


def is_business_day(d: date, business_centers: frozenset[str]) -> bool:
    """A weekday that is not a holiday in any of the given centers."""
    if d.weekday() >= _SAT:
        return False
    return not any(d in holidays_for(c, d.year) for c in business_centers)


def unknown_centers(business_centers: frozenset[str]) -> frozenset[str]:
    return business_centers - KNOWN_BUSINESS_CENTERS


# ---------------------------------------------------------------------------
# Date adjustment
# ---------------------------------------------------------------------------


def _roll(d: date, step: int, business_centers: frozenset[str]) -> date:
    result = d
    while not is_business_day(result, business_centers):
        result += timedelta(days=step)
    return result


def adjust_date(
    d: date, convention: BusinessDayConvention, business_centers: frozenset[str],
) -> date:
    """Adjust a date according to a business day convention.

    FOLLOWING: move to next business day.
    MOD_FOLLOWING: as FOLLOWING, unless that crosses a month boundary, in
                   which case move to previous business day.
    PRECEDING: move to previous business day.
    MOD_PRECEDING: as PRECEDING, unless that crosses a month boundary, in
                   which case move to next business day.
    NONE: no adjustment.
    """
    match convention:
        case "NONE":
            return d
        case "FOLLOWING":
            return _roll(d, 1, business_centers)
        case "PRECEDING":
            return _roll(d, -1, business_centers)
        case "MOD_FOLLOWING":
            result = _roll(d, 1, business_centers)
            if result.month != d.month:
                result = _roll(d, -1, business_centers)
            return result
        case "MOD_PRECEDING":
            result = _roll(d, -1, business_centers)
            if result.month != d.month:
                result = _roll(d, 1, business_centers)
            return result
        case _never:
            assert_never(_never)


def add_business_days(start: date, days: int, business_centers: frozenset[str]) -> date:
    """Shift by a signed number of business days.

    Zero returns the start date unchanged, even when it is a holiday.
    """
    step = 1 if days >= 0 else -1
    current = start
    remaining = abs(days)
    while remaining > 0:
        current += timedelta(days=step)
        if is_business_day(current, business_centers):
            remaining -= 1
    return current


# ---------------------------------------------------------------------------
# Adjustment value objects
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class BusinessDayAdjustment:
    """Convention + business centers for moving a date to a good business day."""

    convention: BusinessDayConvention
    business_centers: frozenset[str]  # e.g. frozenset({"GBLO", "USNY"})

    def __post_init__(self) -> None:
        if self.convention != "NONE" and not self.business_centers:
            raise TypeError(
                "BusinessDayAdjustment: business_centers required "
                f"when convention is {self.convention!r}"
            )
        unknown = unknown_centers(self.business_centers)
        if unknown:
            raise TypeError(
                f"BusinessDayAdjustment: unknown business centers {sorted(unknown)}"
            )

    @staticmethod
    def of(convention: BusinessDayConvention, *centers: str) -> BusinessDayAdjustment:
        return BusinessDayAdjustment(
            convention=convention, business_centers=frozenset(centers),
        )

    @staticmethod
    def create(
        convention: BusinessDayConvention, business_centers: frozenset[str],
    ) -> Ok[BusinessDayAdjustment] | Err[str]:
        if convention != "NONE" and not business_centers:
            return Err(f"business_centers required when convention is {convention!r}")
        unknown = unknown_centers(business_centers)
        if unknown:
            return Err(f"unknown business centers {sorted(unknown)}")
        return Ok(BusinessDayAdjustment(
            convention=convention, business_centers=business_centers,
        ))

    def adjust(self, d: date) -> date:
        return adjust_date(d, self.convention, self.business_centers)


NO_ADJUSTMENT = BusinessDayAdjustment(convention="NONE", business_centers=frozenset())


@final
@dataclass(frozen=True, slots=True)
class DaysAdjustment:
    """A signed day offset relative to some reference date.

    With day_type "Business" the days are counted on the business_centers
    calendar; with "Calendar" they are plain calendar days. The optional
    adjustment is applied to the shifted date.
    """

    days: int
    business_centers: frozenset[str]
    day_type: Literal["Business", "Calendar"] = "Business"
    adjustment: BusinessDayAdjustment = NO_ADJUSTMENT

    def __post_init__(self) -> None:
        if self.day_type == "Business" and not self.business_centers:
            raise TypeError("DaysAdjustment: business_centers required for business days")
        unknown = unknown_centers(self.business_centers)
        if unknown:
            raise TypeError(f"DaysAdjustment: unknown business centers {sorted(unknown)}")

    @staticmethod
    def of_business_days(days: int, *centers: str) -> DaysAdjustment:
        return DaysAdjustment(days=days, business_centers=frozenset(centers))

    @staticmethod
    def of_calendar_days(
        days: int, adjustment: BusinessDayAdjustment = NO_ADJUSTMENT,
    ) -> DaysAdjustment:
        return DaysAdjustment(
            days=days, business_centers=frozenset(),
            day_type="Calendar", adjustment=adjustment,
        )

    def adjust(self, d: date) -> date:
        if self.day_type == "Business":
            shifted = add_business_days(d, self.days, self.business_centers)
        else:
            shifted = d + timedelta(days=self.days)
        return self.adjustment.adjust(shifted)
