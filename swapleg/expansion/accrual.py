"""Accrual period construction and rate resolution.

One RateAccrualPeriod per schedule period: adjusted dates, year fraction
from the calculation's day count, and the rate observation for the period.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import assert_never

from swapleg.core.daycount import day_count_fraction
from swapleg.core.errors import ConfigurationError, FieldViolation, RateError
from swapleg.core.result import Err, Ok
from swapleg.expansion.periods import FixedRate, IborRate, RateAccrualPeriod, RateObservation
from swapleg.instrument.rate_spec import (
    FixedRateCalculation,
    IborRateCalculation,
    RateCalculation,
)
from swapleg.schedule.periodic import SchedulePeriod


def resolve_rates(
    periods: Sequence[SchedulePeriod], calculation: RateCalculation,
) -> Ok[tuple[RateObservation, ...]] | Err[RateError | ConfigurationError]:
    """One rate observation per schedule period.

    Fixed: the rate schedule resolved at the period's index.
    Ibor: the index observed on fixing_offset applied to the period's
    adjusted start date.
    """
    match calculation:
        case FixedRateCalculation(rate=rate_schedule):
            match rate_schedule.resolve_values(periods):
                case Err(e):
                    return Err(ConfigurationError(
                        message=f"Fixed rate schedule cannot be resolved: {e}",
                        code="RATE_SCHEDULE_INVALID",
                        source="expansion.accrual.resolve_rates",
                        fields=(FieldViolation(
                            path="calculation.rate", constraint=e,
                            actual_value=str(rate_schedule.initial_value),
                        ),),
                    ))
                case Ok(rates):
                    return Ok(tuple(FixedRate(rate=r) for r in rates))
        case IborRateCalculation(index=index):
            offset = calculation.effective_fixing_offset
            if offset is None:
                return Err(RateError(
                    message=(
                        f"No fixing offset for {index.name.value}: set one on the "
                        "calculation or the index"
                    ),
                    code="RATE_FIXING_OFFSET_MISSING",
                    source="expansion.accrual.resolve_rates",
                    observation=index.name.value,
                ))
            return Ok(tuple(
                IborRate(index=index, fixing_date=offset.adjust(p.start_date))
                for p in periods
            ))
        case _never:
            assert_never(_never)


def build_accrual_periods(
    periods: Sequence[SchedulePeriod], calculation: RateCalculation,
) -> Ok[tuple[RateAccrualPeriod, ...]] | Err[RateError | ConfigurationError]:
    """Accrual periods in schedule order, year fractions on adjusted dates."""
    match resolve_rates(periods, calculation):
        case Err() as err:
            return err
        case Ok(rates):
            pass
    return Ok(tuple(
        RateAccrualPeriod(
            start_date=p.start_date,
            end_date=p.end_date,
            year_fraction=day_count_fraction(p.start_date, p.end_date, calculation.day_count),
            rate=rate,
            unadjusted_start_date=p.unadjusted_start_date,
            unadjusted_end_date=p.unadjusted_end_date,
        )
        for p, rate in zip(periods, rates, strict=True)
    ))
