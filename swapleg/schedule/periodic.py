"""Periodic schedule generation: unadjusted boundaries, then adjusted periods.

Boundaries are start + n * frequency (or end - n * frequency when the stub
is at the start). Every boundary is business-day adjusted; the unadjusted
date is kept on the period only where adjustment moved it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import final

from swapleg.core.calendar import BusinessDayAdjustment
from swapleg.core.config import DEFAULT_EXPANSION_CONFIG, ExpansionConfig
from swapleg.core.errors import ConfigurationError, FieldViolation, ScheduleError
from swapleg.core.result import Err, Ok
from swapleg.core.types import Frequency, StubConvention

logger = logging.getLogger(__name__)

_SOURCE = "schedule.periodic.PeriodicSchedule.generate"


def _schedule_error(message: str, code: str) -> Err[ScheduleError]:
    return Err(ScheduleError(message=message, code=code, source=_SOURCE, schedule="accrual"))


@final
@dataclass(frozen=True, slots=True)
class SchedulePeriod:
    """One adjusted period of a schedule.

    unadjusted_start_date / unadjusted_end_date are None when equal to the
    adjusted date; use unadjusted_start / unadjusted_end to read them.
    """

    start_date: date
    end_date: date
    unadjusted_start_date: date | None = None
    unadjusted_end_date: date | None = None

    def __post_init__(self) -> None:
        if self.start_date >= self.end_date:
            raise TypeError(
                f"SchedulePeriod: start_date ({self.start_date}) "
                f"must be < end_date ({self.end_date})"
            )
        # Canonical form: an unadjusted date equal to its adjusted date is absent.
        if self.unadjusted_start_date == self.start_date:
            object.__setattr__(self, "unadjusted_start_date", None)
        if self.unadjusted_end_date == self.end_date:
            object.__setattr__(self, "unadjusted_end_date", None)

    @property
    def unadjusted_start(self) -> date:
        return self.unadjusted_start_date or self.start_date

    @property
    def unadjusted_end(self) -> date:
        return self.unadjusted_end_date or self.end_date


@final
@dataclass(frozen=True, slots=True)
class PeriodicSchedule:
    """Start/end dates, frequency, business day adjustment and stub policy."""

    start_date: date
    end_date: date
    frequency: Frequency
    business_day_adjustment: BusinessDayAdjustment
    stub_convention: StubConvention = StubConvention.NONE

    def __post_init__(self) -> None:
        if self.start_date >= self.end_date:
            raise TypeError(
                f"PeriodicSchedule: start_date ({self.start_date}) "
                f"must be < end_date ({self.end_date})"
            )

    @staticmethod
    def create(
        start_date: date,
        end_date: date,
        frequency: Frequency,
        business_day_adjustment: BusinessDayAdjustment,
        stub_convention: StubConvention = StubConvention.NONE,
    ) -> Ok[PeriodicSchedule] | Err[ConfigurationError]:
        """Validate and build; an empty or inverted date range is a field violation."""
        if start_date >= end_date:
            return Err(ConfigurationError(
                message="Accrual schedule start_date must be before end_date",
                code="SCHEDULE_DATES_INVALID",
                source="schedule.periodic.PeriodicSchedule.create",
                fields=(FieldViolation(
                    path="accrual_schedule.start_date",
                    constraint=f"must be before end_date ({end_date})",
                    actual_value=str(start_date),
                ),),
            ))
        return Ok(PeriodicSchedule(
            start_date=start_date,
            end_date=end_date,
            frequency=frequency,
            business_day_adjustment=business_day_adjustment,
            stub_convention=stub_convention,
        ))

    @property
    def adjusted_start_date(self) -> date:
        return self.business_day_adjustment.adjust(self.start_date)

    @property
    def adjusted_end_date(self) -> date:
        return self.business_day_adjustment.adjust(self.end_date)

    def _forward_dates(self, limit: int) -> Ok[list[date]] | Err[ScheduleError]:
        period = self.frequency.period
        dates = [self.start_date]
        n = 1
        while True:
            d = period.add_to(self.start_date, n)
            if d >= self.end_date:
                if d == self.end_date or self.stub_convention is StubConvention.SHORT_FINAL:
                    dates.append(self.end_date)
                    return Ok(dates)
                return _schedule_error(
                    f"{self.start_date} to {self.end_date} is not a whole number of "
                    f"{self.frequency.value} periods and no stub is allowed",
                    "SCHEDULE_INDIVISIBLE",
                )
            dates.append(d)
            # one more boundary still closes the schedule
            if len(dates) > limit:
                return _schedule_error(
                    f"schedule exceeds {limit} periods", "SCHEDULE_TOO_LONG",
                )
            n += 1

    def _backward_dates(self, limit: int) -> Ok[list[date]] | Err[ScheduleError]:
        period = self.frequency.period
        dates = [self.end_date]
        n = 1
        while True:
            d = period.add_to(self.end_date, -n)
            if d <= self.start_date:
                dates.append(self.start_date)
                dates.reverse()
                return Ok(dates)
            dates.append(d)
            if len(dates) > limit:
                return _schedule_error(
                    f"schedule exceeds {limit} periods", "SCHEDULE_TOO_LONG",
                )
            n += 1

    def unadjusted_dates(
        self, config: ExpansionConfig = DEFAULT_EXPANSION_CONFIG,
    ) -> Ok[list[date]] | Err[ScheduleError]:
        """Ordered unadjusted boundaries, first = start_date, last = end_date."""
        for d in (self.start_date, self.end_date):
            if not config.covers(d):
                return _schedule_error(
                    f"{d} is outside the supported calendar years "
                    f"{config.first_calendar_year}-{config.last_calendar_year}",
                    "SCHEDULE_OUT_OF_CALENDAR_RANGE",
                )
        limit = config.max_accrual_periods
        if self.stub_convention is StubConvention.SHORT_INITIAL:
            return self._backward_dates(limit)
        return self._forward_dates(limit)

    def generate(
        self, config: ExpansionConfig = DEFAULT_EXPANSION_CONFIG,
    ) -> Ok[tuple[SchedulePeriod, ...]] | Err[ScheduleError]:
        """Adjusted schedule periods in chronological order."""
        match self.unadjusted_dates(config):
            case Err() as err:
                return err
            case Ok(unadjusted):
                pass

        adjusted = [self.business_day_adjustment.adjust(d) for d in unadjusted]
        for i in range(1, len(adjusted)):
            if adjusted[i] <= adjusted[i - 1]:
                return _schedule_error(
                    f"business day adjustment maps {unadjusted[i - 1]} and "
                    f"{unadjusted[i]} to non-increasing dates "
                    f"{adjusted[i - 1]}, {adjusted[i]}",
                    "SCHEDULE_ADJUSTMENT_COLLAPSE",
                )

        periods = tuple(
            SchedulePeriod(
                start_date=adjusted[i],
                end_date=adjusted[i + 1],
                unadjusted_start_date=unadjusted[i],
                unadjusted_end_date=unadjusted[i + 1],
            )
            for i in range(len(unadjusted) - 1)
        )
        logger.debug(
            "Generated %d %s periods from %s to %s",
            len(periods), self.frequency.value, self.start_date, self.end_date,
        )
        return Ok(periods)
