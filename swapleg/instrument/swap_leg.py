"""Swap leg definition: the compact, parameterized form of a rate leg.

PaymentSchedule, FxResetCalculation, NotionalSchedule and
RateCalculationSwapLeg. A leg is immutable; expand() turns it into concrete
payment periods and notional exchange events.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import TYPE_CHECKING, final

from swapleg.core.calendar import DaysAdjustment
from swapleg.core.config import DEFAULT_EXPANSION_CONFIG, ExpansionConfig
from swapleg.core.errors import ConfigurationError, FieldViolation
from swapleg.core.money import NonEmptyStr, parse_currency, validate_currency
from swapleg.core.result import Err, Ok
from swapleg.core.types import Frequency, PayReceive
from swapleg.core.value import ValueSchedule
from swapleg.instrument.index import FxIndex
from swapleg.instrument.rate_spec import (
    CompoundingMethodEnum,
    FixedRateCalculation,
    IborRateCalculation,
    RateCalculation,
)
from swapleg.schedule.periodic import PeriodicSchedule

if TYPE_CHECKING:
    from swapleg.core.errors import ExpansionError
    from swapleg.expansion.periods import ExpandedSwapLeg


# ---------------------------------------------------------------------------
# Payment schedule
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class PaymentSchedule:
    """When accrued interest is paid.

    payment_frequency must be a whole multiple of the accrual frequency;
    that is checked at expansion, where both are known. The payment offset
    is applied to the end of each payment period and may not be negative.
    """

    payment_frequency: Frequency
    payment_offset: DaysAdjustment
    compounding_method: CompoundingMethodEnum = CompoundingMethodEnum.NONE

    def __post_init__(self) -> None:
        if self.payment_offset.days < 0:
            raise TypeError(
                f"PaymentSchedule: payment_offset must be >= 0 days, "
                f"got {self.payment_offset.days}"
            )


# ---------------------------------------------------------------------------
# Notional schedule
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class FxResetCalculation:
    """Notional defined in reference_currency, converted at each period's FX fixing."""

    reference_currency: NonEmptyStr
    index: FxIndex
    fixing_offset: DaysAdjustment | None = None

    def __post_init__(self) -> None:
        if not self.index.pair.contains(self.reference_currency):
            raise TypeError(
                f"FxResetCalculation: reference_currency {self.reference_currency.value} "
                f"is not part of {self.index.pair.value}"
            )

    @property
    def effective_fixing_offset(self) -> DaysAdjustment | None:
        if self.fixing_offset is not None:
            return self.fixing_offset
        return self.index.fixing_offset


@final
@dataclass(frozen=True, slots=True)
class NotionalSchedule:
    """Settlement currency, stepped notional amount and principal exchange flags.

    With fx_reset, amounts are in the reference currency and the settlement
    currency must be the other currency of the FX index.
    """

    currency: NonEmptyStr
    amount: ValueSchedule
    initial_exchange: bool = False
    intermediate_exchange: bool = False
    final_exchange: bool = False
    fx_reset: FxResetCalculation | None = None

    def __post_init__(self) -> None:
        if self.fx_reset is not None:
            pair = self.fx_reset.index.pair
            if self.currency == self.fx_reset.reference_currency:
                raise TypeError(
                    "NotionalSchedule: settlement currency must differ from "
                    f"the FX reset reference currency {self.currency.value}"
                )
            if not pair.contains(self.currency):
                raise TypeError(
                    f"NotionalSchedule: settlement currency {self.currency.value} "
                    f"is not part of {pair.value}"
                )

    @staticmethod
    def of(currency: str, amount: Decimal) -> NotionalSchedule:
        """Constant notional, no exchanges, no FX reset."""
        return NotionalSchedule(
            currency=NonEmptyStr(value=currency), amount=ValueSchedule.of(amount),
        )

    @staticmethod
    def create(
        currency: str,
        amount: ValueSchedule,
        initial_exchange: bool = False,
        intermediate_exchange: bool = False,
        final_exchange: bool = False,
        fx_reset: FxResetCalculation | None = None,
    ) -> Ok[NotionalSchedule] | Err[str]:
        match parse_currency(currency):
            case Err(e):
                return Err(f"NotionalSchedule.currency: {e}")
            case Ok(cur):
                pass
        if fx_reset is not None:
            if cur == fx_reset.reference_currency:
                return Err(
                    "NotionalSchedule.fx_reset: reference currency must differ "
                    f"from settlement currency {currency}"
                )
            if not fx_reset.index.pair.contains(cur):
                return Err(
                    f"NotionalSchedule.fx_reset: {currency} is not part of "
                    f"{fx_reset.index.pair.value}"
                )
        return Ok(NotionalSchedule(
            currency=cur, amount=amount,
            initial_exchange=initial_exchange,
            intermediate_exchange=intermediate_exchange,
            final_exchange=final_exchange,
            fx_reset=fx_reset,
        ))


# ---------------------------------------------------------------------------
# Swap leg
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class RateCalculationSwapLeg:
    """A swap leg defined by schedules and a rate calculation.

    start_date/end_date are the business day adjusted bounds of the accrual
    schedule; currency is the settlement currency of the notional schedule.
    """

    pay_receive: PayReceive
    accrual_schedule: PeriodicSchedule
    payment_schedule: PaymentSchedule
    notional_schedule: NotionalSchedule
    calculation: RateCalculation

    @staticmethod
    def create(
        pay_receive: PayReceive,
        accrual_schedule: PeriodicSchedule,
        payment_schedule: PaymentSchedule,
        notional_schedule: NotionalSchedule,
        calculation: RateCalculation,
    ) -> Ok[RateCalculationSwapLeg] | Err[ConfigurationError]:
        """Validate and build, collecting every field violation."""
        violations: list[FieldViolation] = []
        if not isinstance(pay_receive, PayReceive):
            violations.append(FieldViolation(
                path="pay_receive", constraint="must be PAY or RECEIVE",
                actual_value=repr(pay_receive),
            ))
        if not isinstance(accrual_schedule, PeriodicSchedule):
            violations.append(FieldViolation(
                path="accrual_schedule", constraint="must be a PeriodicSchedule",
                actual_value=repr(accrual_schedule),
            ))
        if not isinstance(payment_schedule, PaymentSchedule):
            violations.append(FieldViolation(
                path="payment_schedule", constraint="must be a PaymentSchedule",
                actual_value=repr(payment_schedule),
            ))
        if not isinstance(notional_schedule, NotionalSchedule):
            violations.append(FieldViolation(
                path="notional_schedule", constraint="must be a NotionalSchedule",
                actual_value=repr(notional_schedule),
            ))
        else:
            if not validate_currency(notional_schedule.currency.value):
                violations.append(FieldViolation(
                    path="notional_schedule.currency", constraint="must be a known currency",
                    actual_value=notional_schedule.currency.value,
                ))
            if notional_schedule.amount.initial_value < 0:
                violations.append(FieldViolation(
                    path="notional_schedule.amount.initial_value",
                    constraint="must be >= 0 (direction comes from pay_receive)",
                    actual_value=str(notional_schedule.amount.initial_value),
                ))
        if not isinstance(calculation, (FixedRateCalculation, IborRateCalculation)):
            violations.append(FieldViolation(
                path="calculation",
                constraint="must be FixedRateCalculation or IborRateCalculation",
                actual_value=repr(calculation),
            ))
        if violations:
            return Err(ConfigurationError(
                message="Swap leg definition is invalid",
                code="SWAP_LEG_VALIDATION",
                source="instrument.swap_leg.RateCalculationSwapLeg.create",
                fields=tuple(violations),
            ))
        return Ok(RateCalculationSwapLeg(
            pay_receive=pay_receive,
            accrual_schedule=accrual_schedule,
            payment_schedule=payment_schedule,
            notional_schedule=notional_schedule,
            calculation=calculation,
        ))

    @property
    def start_date(self) -> date:
        return self.accrual_schedule.adjusted_start_date

    @property
    def end_date(self) -> date:
        return self.accrual_schedule.adjusted_end_date

    @property
    def currency(self) -> NonEmptyStr:
        return self.notional_schedule.currency

    def expand(
        self, config: ExpansionConfig = DEFAULT_EXPANSION_CONFIG,
    ) -> Ok[ExpandedSwapLeg] | Err[ExpansionError]:
        """Expand into payment periods and notional exchanges."""
        from swapleg.expansion.engine import expand

        return expand(self, config)
