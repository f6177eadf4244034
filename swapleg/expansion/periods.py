"""Expanded swap leg: concrete accrual periods, payment periods and events.

All types are @final @dataclass(frozen=True, slots=True). They hold no
reference back to the definition they were expanded from.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import final

from swapleg.core.money import Money, NonEmptyStr
from swapleg.instrument.index import FxIndex, IborIndex
from swapleg.instrument.rate_spec import CompoundingMethodEnum

# ---------------------------------------------------------------------------
# Rate observations
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class FixedRate:
    """A known rate for one accrual period."""

    rate: Decimal


@final
@dataclass(frozen=True, slots=True)
class IborRate:
    """A floating rate to be observed on fixing_date. The value is not known here."""

    index: IborIndex
    fixing_date: date


type RateObservation = FixedRate | IborRate


# ---------------------------------------------------------------------------
# Accrual and payment periods
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class RateAccrualPeriod:
    """Interest accrues at one rate between two adjusted dates.

    Unadjusted dates are informational and absent when equal to the
    adjusted date.
    """

    start_date: date
    end_date: date
    year_fraction: Decimal
    rate: RateObservation
    unadjusted_start_date: date | None = None
    unadjusted_end_date: date | None = None

    def __post_init__(self) -> None:
        if self.start_date >= self.end_date:
            raise TypeError(
                f"RateAccrualPeriod: start_date ({self.start_date}) "
                f"must be < end_date ({self.end_date})"
            )
        if not isinstance(self.year_fraction, Decimal) or self.year_fraction < 0:
            raise TypeError(
                f"RateAccrualPeriod.year_fraction must be Decimal >= 0, "
                f"got {self.year_fraction!r}"
            )
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
class FxReset:
    """FX observation converting a reference-currency notional on fixing_date."""

    index: FxIndex
    reference_currency: NonEmptyStr
    fixing_date: date


@final
@dataclass(frozen=True, slots=True)
class RatePaymentPeriod:
    """One payment: consecutive accrual periods sharing a payment date.

    notional is signed (negative when paying). With fx_reset the notional is
    denominated in the reference currency and only becomes a settlement
    currency amount once the FX fixing is known.
    """

    payment_date: date
    accrual_periods: tuple[RateAccrualPeriod, ...]
    currency: NonEmptyStr
    notional: Decimal
    compounding_method: CompoundingMethodEnum = CompoundingMethodEnum.NONE
    fx_reset: FxReset | None = None

    def __post_init__(self) -> None:
        if not self.accrual_periods:
            raise TypeError("RatePaymentPeriod requires at least one accrual period")
        for i in range(1, len(self.accrual_periods)):
            prev, cur = self.accrual_periods[i - 1], self.accrual_periods[i]
            if prev.end_date != cur.start_date:
                raise TypeError(
                    "RatePaymentPeriod: accrual periods must be contiguous, "
                    f"accrual_periods[{i - 1}].end_date={prev.end_date} != "
                    f"accrual_periods[{i}].start_date={cur.start_date}"
                )
        if self.payment_date < self.accrual_periods[-1].end_date:
            raise TypeError(
                f"RatePaymentPeriod: payment_date ({self.payment_date}) must be >= "
                f"last accrual end_date ({self.accrual_periods[-1].end_date})"
            )

    @property
    def start_date(self) -> date:
        return self.accrual_periods[0].start_date

    @property
    def end_date(self) -> date:
        return self.accrual_periods[-1].end_date

    @property
    def notional_currency(self) -> NonEmptyStr:
        """Currency the notional amount is expressed in."""
        if self.fx_reset is not None:
            return self.fx_reset.reference_currency
        return self.currency


# ---------------------------------------------------------------------------
# Principal exchange events
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class NotionalExchange:
    """A principal cashflow, separate from interest payments."""

    payment_date: date
    payment_amount: Money


@final
@dataclass(frozen=True, slots=True)
class FxResetNotionalExchange:
    """A principal cashflow whose settlement amount depends on an FX fixing.

    reference_amount is in the reference currency; the settlement amount
    is reference_amount converted at index on fixing_date.
    """

    payment_date: date
    reference_amount: Money
    index: FxIndex
    fixing_date: date


type PaymentEvent = NotionalExchange | FxResetNotionalExchange


@final
@dataclass(frozen=True, slots=True)
class ExpandedSwapLeg:
    """Fully resolved leg: ordered payment periods and ordered payment events."""

    payment_periods: tuple[RatePaymentPeriod, ...]
    payment_events: tuple[PaymentEvent, ...] = ()

    def __post_init__(self) -> None:
        if not self.payment_periods:
            raise TypeError("ExpandedSwapLeg requires at least one payment period")
        for i in range(1, len(self.payment_events)):
            if self.payment_events[i].payment_date < self.payment_events[i - 1].payment_date:
                raise TypeError("ExpandedSwapLeg: payment_events must be ordered by date")

    @property
    def start_date(self) -> date:
        return self.payment_periods[0].start_date

    @property
    def end_date(self) -> date:
        return self.payment_periods[-1].end_date

    @property
    def currency(self) -> NonEmptyStr:
        return self.payment_periods[0].currency

    @property
    def accrual_periods(self) -> tuple[RateAccrualPeriod, ...]:
        """All accrual periods across payment periods, in order."""
        return tuple(ap for pp in self.payment_periods for ap in pp.accrual_periods)
