"""Grouping accrual periods into payment periods, and notional resolution.

The group size is payment frequency / accrual frequency. Each payment period
takes the notional in force at its first accrual period, signed by the
leg's pay/receive direction.
"""

from __future__ import annotations

from collections.abc import Sequence
from decimal import Decimal

from swapleg.core.errors import ConfigurationError, FieldViolation, RateError, ScheduleError
from swapleg.core.result import Err, Ok
from swapleg.core.types import Frequency, PayReceive
from swapleg.expansion.periods import FxReset, RateAccrualPeriod, RatePaymentPeriod
from swapleg.instrument.swap_leg import NotionalSchedule, PaymentSchedule
from swapleg.schedule.periodic import SchedulePeriod


def payment_ratio(
    payment_schedule: PaymentSchedule, accrual_frequency: Frequency,
) -> Ok[int] | Err[ScheduleError]:
    """Number of accrual periods per payment period."""
    match payment_schedule.payment_frequency.exact_divide(accrual_frequency):
        case Err(e):
            return Err(ScheduleError(
                message=f"Payment frequency does not fit accrual frequency: {e}",
                code="SCHEDULE_FREQUENCY_RATIO",
                source="expansion.payment.payment_ratio",
                schedule="payment",
            ))
        case Ok(ratio):
            return Ok(ratio)


def group_accrual_periods[T](periods: Sequence[T], ratio: int) -> tuple[tuple[T, ...], ...]:
    """Consecutive groups of `ratio` periods; the last group may be shorter."""
    return tuple(
        tuple(periods[i:i + ratio]) for i in range(0, len(periods), ratio)
    )


def resolve_notionals(
    notional_schedule: NotionalSchedule,
    pay_receive: PayReceive,
    periods: Sequence[SchedulePeriod],
    ratio: int,
) -> Ok[tuple[Decimal, ...]] | Err[ConfigurationError]:
    """Signed notional per payment period.

    The notional schedule is resolved per accrual period; a payment period
    uses the value at its first accrual period even if the schedule steps
    inside the group.
    """
    match notional_schedule.amount.resolve_values(periods):
        case Err(e):
            return Err(ConfigurationError(
                message=f"Notional schedule cannot be resolved: {e}",
                code="NOTIONAL_SCHEDULE_INVALID",
                source="expansion.payment.resolve_notionals",
                fields=(FieldViolation(
                    path="notional_schedule.amount", constraint=e,
                    actual_value=str(notional_schedule.amount.initial_value),
                ),),
            ))
        case Ok(values):
            pass
    return Ok(tuple(
        pay_receive.normalize(values[i]) for i in range(0, len(values), ratio)
    ))


def resolve_fx_resets(
    notional_schedule: NotionalSchedule,
    groups: Sequence[Sequence[RateAccrualPeriod]],
) -> Ok[tuple[FxReset | None, ...]] | Err[RateError]:
    """FX reset observation per payment period, or None for every period."""
    fx_reset = notional_schedule.fx_reset
    if fx_reset is None:
        return Ok(tuple(None for _ in groups))
    offset = fx_reset.effective_fixing_offset
    if offset is None:
        return Err(RateError(
            message=(
                f"No fixing offset for FX reset on {fx_reset.index.name.value}: "
                "set one on the FX reset calculation or the index"
            ),
            code="FX_RESET_FIXING_OFFSET_MISSING",
            source="expansion.payment.resolve_fx_resets",
            observation=fx_reset.index.name.value,
        ))
    return Ok(tuple(
        FxReset(
            index=fx_reset.index,
            reference_currency=fx_reset.reference_currency,
            fixing_date=offset.adjust(group[0].start_date),
        )
        for group in groups
    ))


def build_payment_periods(
    groups: Sequence[Sequence[RateAccrualPeriod]],
    payment_schedule: PaymentSchedule,
    notional_schedule: NotionalSchedule,
    notionals: Sequence[Decimal],
    fx_resets: Sequence[FxReset | None],
) -> Ok[tuple[RatePaymentPeriod, ...]] | Err[ScheduleError]:
    """Payment date is the payment offset applied to the group's last end date."""
    payment_dates = [payment_schedule.payment_offset.adjust(g[-1].end_date) for g in groups]
    for group, payment_date in zip(groups, payment_dates, strict=True):
        if payment_date < group[-1].end_date:
            return Err(ScheduleError(
                message=(
                    f"Payment date {payment_date} precedes the end of its "
                    f"payment period {group[-1].end_date}"
                ),
                code="SCHEDULE_PAYMENT_BEFORE_END",
                source="expansion.payment.build_payment_periods",
                schedule="payment",
            ))
    return Ok(tuple(
        RatePaymentPeriod(
            payment_date=payment_date,
            accrual_periods=tuple(group),
            currency=notional_schedule.currency,
            notional=notional,
            compounding_method=payment_schedule.compounding_method,
            fx_reset=fx_reset,
        )
        for group, payment_date, notional, fx_reset in zip(
            groups, payment_dates, notionals, fx_resets, strict=True,
        )
    ))
