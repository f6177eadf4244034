"""Principal (notional) exchange events derived from resolved payment periods.

Signs follow the interest notional: a leg paying interest on -N receives +N
at the start and pays -N back at the end. Intermediate exchanges move the
difference between consecutive notionals. With all three enabled the
amounts sum to zero.
"""

from __future__ import annotations

from collections.abc import Sequence
from datetime import date
from decimal import localcontext

from swapleg.core.money import SWAPLEG_DECIMAL_CONTEXT, Money
from swapleg.expansion.periods import (
    FxResetNotionalExchange,
    NotionalExchange,
    PaymentEvent,
    RatePaymentPeriod,
)
from swapleg.instrument.swap_leg import NotionalSchedule


def _fixed_exchanges(
    periods: Sequence[RatePaymentPeriod], schedule: NotionalSchedule,
) -> list[PaymentEvent]:
    currency = schedule.currency
    events: list[PaymentEvent] = []
    with localcontext(SWAPLEG_DECIMAL_CONTEXT):
        if schedule.initial_exchange:
            events.append(NotionalExchange(
                payment_date=periods[0].start_date,
                payment_amount=Money(amount=-periods[0].notional, currency=currency),
            ))
        if schedule.intermediate_exchange:
            for older, newer in zip(periods, periods[1:], strict=False):
                if older.notional != newer.notional:
                    events.append(NotionalExchange(
                        payment_date=older.payment_date,
                        payment_amount=Money(
                            amount=older.notional - newer.notional, currency=currency,
                        ),
                    ))
        if schedule.final_exchange:
            events.append(NotionalExchange(
                payment_date=periods[-1].payment_date,
                payment_amount=Money(amount=periods[-1].notional, currency=currency),
            ))
    return events


def _fx_reset_exchange(
    period: RatePaymentPeriod, payment_date: date, *, returning: bool,
) -> FxResetNotionalExchange:
    fx_reset = period.fx_reset
    if fx_reset is None:
        raise TypeError(f"Payment period ending {period.end_date} has no FX reset")
    amount = period.notional if returning else -period.notional
    return FxResetNotionalExchange(
        payment_date=payment_date,
        reference_amount=Money(amount=amount, currency=fx_reset.reference_currency),
        index=fx_reset.index,
        fixing_date=fx_reset.fixing_date,
    )


def _fx_reset_exchanges(
    periods: Sequence[RatePaymentPeriod], schedule: NotionalSchedule,
) -> list[PaymentEvent]:
    """Each half of a principal exchange converts at its own period's fixing.

    So at every boundary the old principal is returned and the new one
    re-lent as two events, even when the reference amount is unchanged.
    """
    events: list[PaymentEvent] = []
    first = periods[0]
    if schedule.initial_exchange:
        events.append(_fx_reset_exchange(first, first.start_date, returning=False))
    if schedule.intermediate_exchange:
        for older, newer in zip(periods, periods[1:], strict=False):
            events.append(_fx_reset_exchange(older, older.payment_date, returning=True))
            events.append(_fx_reset_exchange(newer, older.payment_date, returning=False))
    if schedule.final_exchange:
        events.append(_fx_reset_exchange(periods[-1], periods[-1].payment_date, returning=True))
    return events


def build_notional_exchanges(
    periods: Sequence[RatePaymentPeriod], schedule: NotionalSchedule,
) -> tuple[PaymentEvent, ...]:
    """Exchange events ordered by payment date; never merged with interest."""
    if schedule.fx_reset is None:
        events = _fixed_exchanges(periods, schedule)
    else:
        events = _fx_reset_exchanges(periods, schedule)
    return tuple(sorted(events, key=lambda e: e.payment_date))
