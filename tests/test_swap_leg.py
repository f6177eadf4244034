"""Tests for swapleg.instrument -- leg definition types and validation."""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from swapleg.core.calendar import BusinessDayAdjustment, DaysAdjustment
from swapleg.core.errors import ConfigurationError
from swapleg.core.money import NonEmptyStr
from swapleg.core.result import Err, Ok
from swapleg.core.types import DayCountConvention, Frequency, PayReceive
from swapleg.core.value import ValueSchedule
from swapleg.instrument.index import (
    ECB_EUR_GBP,
    ECB_EUR_USD,
    EUR_EURIBOR_3M,
    GBP_LIBOR_1M,
    USD_LIBOR_3M,
)
from swapleg.instrument.rate_spec import FixedRateCalculation, IborRateCalculation
from swapleg.instrument.swap_leg import (
    FxResetCalculation,
    NotionalSchedule,
    PaymentSchedule,
    RateCalculationSwapLeg,
)
from swapleg.schedule.periodic import PeriodicSchedule

GBP = NonEmptyStr(value="GBP")
EUR = NonEmptyStr(value="EUR")
USD = NonEmptyStr(value="USD")

ACCRUAL = PeriodicSchedule(
    start_date=date(2014, 1, 5), end_date=date(2014, 4, 5),
    frequency=Frequency.P1M,
    business_day_adjustment=BusinessDayAdjustment.of("FOLLOWING", "GBLO"),
)
PAYMENT = PaymentSchedule(
    payment_frequency=Frequency.P1M,
    payment_offset=DaysAdjustment.of_business_days(2, "GBLO"),
)
FIXED = FixedRateCalculation(
    day_count=DayCountConvention.ACT_365F, rate=ValueSchedule.of(Decimal("0.025")),
)


class TestIndices:
    def test_gbp_libor_has_no_default_offset(self) -> None:
        assert GBP_LIBOR_1M.fixing_offset is None

    def test_default_offsets(self) -> None:
        assert USD_LIBOR_3M.fixing_offset == DaysAdjustment.of_business_days(-2, "GBLO")
        assert EUR_EURIBOR_3M.fixing_offset == DaysAdjustment.of_business_days(-2, "EUTA")
        assert ECB_EUR_GBP.pair.value == "EUR/GBP"

    def test_calculation_offset_overrides_index(self) -> None:
        own = DaysAdjustment.of_business_days(-1, "EUTA")
        calc = IborRateCalculation(
            day_count=DayCountConvention.ACT_360, index=EUR_EURIBOR_3M, fixing_offset=own,
        )
        assert calc.effective_fixing_offset == own

    def test_calculation_falls_back_to_index(self) -> None:
        calc = IborRateCalculation(day_count=DayCountConvention.ACT_360, index=EUR_EURIBOR_3M)
        assert calc.effective_fixing_offset == EUR_EURIBOR_3M.fixing_offset


class TestPaymentSchedule:
    def test_negative_offset_rejected(self) -> None:
        with pytest.raises(TypeError, match="payment_offset"):
            PaymentSchedule(
                payment_frequency=Frequency.P1M,
                payment_offset=DaysAdjustment.of_business_days(-1, "GBLO"),
            )


class TestNotionalSchedule:
    def test_of(self) -> None:
        schedule = NotionalSchedule.of("GBP", Decimal("1000"))
        assert schedule.currency == GBP
        assert schedule.amount == ValueSchedule.of(Decimal("1000"))
        assert not (schedule.initial_exchange or schedule.intermediate_exchange or schedule.final_exchange)
        assert schedule.fx_reset is None

    def test_fx_reset_reference_must_be_in_pair(self) -> None:
        with pytest.raises(TypeError, match="not part of"):
            FxResetCalculation(reference_currency=USD, index=ECB_EUR_GBP)

    def test_fx_reset_settlement_must_differ_from_reference(self) -> None:
        with pytest.raises(TypeError):
            NotionalSchedule(
                currency=EUR, amount=ValueSchedule.of(Decimal("1000")),
                fx_reset=FxResetCalculation(reference_currency=EUR, index=ECB_EUR_GBP),
            )

    def test_fx_reset_settlement_must_be_in_pair(self) -> None:
        with pytest.raises(TypeError):
            NotionalSchedule(
                currency=GBP, amount=ValueSchedule.of(Decimal("1000")),
                fx_reset=FxResetCalculation(reference_currency=EUR, index=ECB_EUR_USD),
            )

    def test_create(self) -> None:
        fx_reset = FxResetCalculation(reference_currency=EUR, index=ECB_EUR_GBP)
        result = NotionalSchedule.create(
            "GBP", ValueSchedule.of(Decimal("1000")), final_exchange=True, fx_reset=fx_reset,
        )
        assert isinstance(result, Ok)
        assert result.value.final_exchange

    def test_create_unknown_currency(self) -> None:
        result = NotionalSchedule.create("XYZ", ValueSchedule.of(Decimal("1000")))
        assert isinstance(result, Err)
        assert "XYZ" in result.error

    def test_create_fx_reset_mismatch(self) -> None:
        fx_reset = FxResetCalculation(reference_currency=EUR, index=ECB_EUR_USD)
        assert isinstance(
            NotionalSchedule.create("GBP", ValueSchedule.of(Decimal("1")), fx_reset=fx_reset),
            Err,
        )


class TestCreateLeg:
    def test_valid(self) -> None:
        result = RateCalculationSwapLeg.create(
            PayReceive.RECEIVE, ACCRUAL, PAYMENT, NotionalSchedule.of("GBP", Decimal("1000")), FIXED,
        )
        assert isinstance(result, Ok)
        assert result.value.pay_receive is PayReceive.RECEIVE

    def test_collects_every_violation(self) -> None:
        notional = NotionalSchedule(
            currency=NonEmptyStr(value="XYZ"), amount=ValueSchedule.of(Decimal("-1000")),
        )
        result = RateCalculationSwapLeg.create(
            "PAY", ACCRUAL, PAYMENT, notional, "fixed",  # type: ignore[arg-type]
        )
        match result:
            case Err(ConfigurationError(code=code, fields=fields)):
                assert code == "SWAP_LEG_VALIDATION"
                assert [f.path for f in fields] == [
                    "pay_receive",
                    "notional_schedule.currency",
                    "notional_schedule.amount.initial_value",
                    "calculation",
                ]
            case other:
                pytest.fail(f"expected ConfigurationError, got {other}")

    def test_wrong_schedule_types(self) -> None:
        result = RateCalculationSwapLeg.create(
            PayReceive.PAY, None, None, None, FIXED,  # type: ignore[arg-type]
        )
        assert isinstance(result, Err)
        assert {f.path for f in result.error.fields} == {
            "accrual_schedule", "payment_schedule", "notional_schedule",
        }
