"""Hypothesis strategies and shared fixtures for swap leg expansion tests.

Leg strategies only produce definitions that expand successfully: the
accrual schedule divides evenly or ends in a short final stub, and the
payment frequency is a whole multiple of the accrual frequency.
"""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from hypothesis import HealthCheck, settings
from hypothesis import strategies as st
from hypothesis.strategies import SearchStrategy

from swapleg.core.calendar import BusinessDayAdjustment, DaysAdjustment
from swapleg.core.money import NonEmptyStr
from swapleg.core.types import DayCountConvention, Frequency, PayReceive, StubConvention
from swapleg.core.value import ValueAdjustment, ValueSchedule, ValueStep
from swapleg.instrument.index import ECB_EUR_GBP, ECB_EUR_USD, EUR_EURIBOR_3M
from swapleg.instrument.rate_spec import (
    CompoundingMethodEnum,
    FixedRateCalculation,
    IborRateCalculation,
    RateCalculation,
)
from swapleg.instrument.swap_leg import (
    FxResetCalculation,
    NotionalSchedule,
    PaymentSchedule,
    RateCalculationSwapLeg,
)
from swapleg.schedule.periodic import PeriodicSchedule

# ---------------------------------------------------------------------------
# Hypothesis global settings
# ---------------------------------------------------------------------------

settings.register_profile(
    "ci",
    max_examples=200,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.register_profile(
    "dev",
    max_examples=50,
    suppress_health_check=[HealthCheck.too_slow],
    deadline=None,
)
settings.load_profile("dev")


# ===================================================================
# PRIMITIVE STRATEGIES
# ===================================================================


def start_dates() -> SearchStrategy[date]:
    return st.dates(min_value=date(2000, 1, 1), max_value=date(2040, 12, 31))


def notional_amounts() -> SearchStrategy[Decimal]:
    return st.decimals(
        min_value=Decimal("1"), max_value=Decimal("1000000000"),
        places=2, allow_nan=False, allow_infinity=False,
    )


def fixed_rates() -> SearchStrategy[Decimal]:
    return st.decimals(
        min_value=Decimal("-0.01"), max_value=Decimal("0.15"),
        places=5, allow_nan=False, allow_infinity=False,
    )


def business_day_adjustments() -> SearchStrategy[BusinessDayAdjustment]:
    return st.builds(
        BusinessDayAdjustment.of,
        st.sampled_from(["FOLLOWING", "MOD_FOLLOWING", "PRECEDING", "NONE"]),
        st.sampled_from(["GBLO", "EUTA", "USNY"]),
    )


# ===================================================================
# VALUE SCHEDULE STRATEGIES
# ===================================================================


@st.composite
def notional_schedules_values(
    draw: st.DrawFn,
    period_count: int,
    start: date | None = None,
    frequency: Frequency | None = None,
) -> ValueSchedule:
    """Initial notional plus up to three replace steps inside the schedule.

    Given the schedule's unadjusted start and frequency, each step is keyed
    either by period index or by the unadjusted start date of that period.
    """
    initial = draw(notional_amounts())
    if period_count < 2:
        return ValueSchedule.of(initial)
    indices = draw(st.lists(
        st.integers(min_value=1, max_value=period_count - 1),
        max_size=3, unique=True,
    ))
    steps = []
    for i in sorted(indices):
        adjustment = ValueAdjustment.of_replace(draw(notional_amounts()))
        if start is not None and frequency is not None and draw(st.booleans()):
            steps.append(ValueStep.on(frequency.period.add_to(start, i), adjustment))
        else:
            steps.append(ValueStep.of(i, adjustment))
    return ValueSchedule(initial_value=initial, steps=tuple(steps))


# ===================================================================
# LEG STRATEGIES
# ===================================================================


@st.composite
def rate_calculations(draw: st.DrawFn) -> RateCalculation:
    day_count = draw(st.sampled_from(list(DayCountConvention)))
    if draw(st.booleans()):
        return FixedRateCalculation(day_count=day_count, rate=ValueSchedule.of(draw(fixed_rates())))
    return IborRateCalculation(day_count=day_count, index=EUR_EURIBOR_3M)


# (reference currency, settlement currency, index)
FX_RESET_CURRENCIES = [
    ("EUR", "GBP", ECB_EUR_GBP),
    ("GBP", "EUR", ECB_EUR_GBP),
    ("EUR", "USD", ECB_EUR_USD),
    ("USD", "EUR", ECB_EUR_USD),
]


@st.composite
def swap_legs(
    draw: st.DrawFn,
    exchanges: bool | None = None,
    fx_reset: bool | None = None,
) -> RateCalculationSwapLeg:
    """Well-formed legs: whole accrual periods or a short final stub, integral grouping.

    exchanges=None draws each exchange flag independently; fx_reset=None
    draws whether the notional resets against an ECB FX index.
    """
    accrual_months = draw(st.sampled_from([1, 2, 3, 6, 12]))
    period_count = draw(st.integers(min_value=1, max_value=24))
    ratio = draw(st.integers(min_value=1, max_value=4))
    start = draw(start_dates())
    accrual = Frequency.of_months(accrual_months)
    end = accrual.period.add_to(start, period_count)
    stub = draw(st.sampled_from([StubConvention.NONE, StubConvention.SHORT_FINAL]))
    if stub is StubConvention.SHORT_FINAL:
        # long enough that no business day adjustment can merge the stub away
        end += timedelta(days=draw(st.integers(min_value=10, max_value=20)))

    if exchanges is None:
        flags = draw(st.tuples(st.booleans(), st.booleans(), st.booleans()))
    else:
        flags = (exchanges, exchanges, exchanges)

    if fx_reset is None:
        fx_reset = draw(st.booleans())
    if fx_reset:
        reference, currency, index = draw(st.sampled_from(FX_RESET_CURRENCIES))
        fx_reset_calculation = FxResetCalculation(
            reference_currency=NonEmptyStr(value=reference), index=index,
        )
    else:
        currency = draw(st.sampled_from(["GBP", "EUR", "USD"]))
        fx_reset_calculation = None

    return RateCalculationSwapLeg(
        pay_receive=draw(st.sampled_from(list(PayReceive))),
        accrual_schedule=PeriodicSchedule(
            start_date=start,
            end_date=end,
            frequency=accrual,
            business_day_adjustment=draw(business_day_adjustments()),
            stub_convention=stub,
        ),
        payment_schedule=PaymentSchedule(
            payment_frequency=Frequency.of_months(accrual_months * ratio),
            payment_offset=DaysAdjustment.of_business_days(
                draw(st.integers(min_value=0, max_value=5)), "GBLO",
            ),
            compounding_method=draw(st.sampled_from(list(CompoundingMethodEnum))),
        ),
        notional_schedule=NotionalSchedule(
            currency=NonEmptyStr(value=currency),
            amount=draw(notional_schedules_values(period_count, start, accrual)),
            initial_exchange=flags[0],
            intermediate_exchange=flags[1],
            final_exchange=flags[2],
            fx_reset=fx_reset_calculation,
        ),
        calculation=draw(rate_calculations()),
    )
