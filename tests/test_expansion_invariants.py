"""Property tests for leg expansion over generated well-formed legs."""

from __future__ import annotations

from decimal import Decimal

from conftest import swap_legs
from hypothesis import given

from swapleg.core.result import Ok, unwrap
from swapleg.core.types import PayReceive
from swapleg.expansion.engine import expand
from swapleg.expansion.periods import FxResetNotionalExchange, NotionalExchange
from swapleg.instrument.swap_leg import RateCalculationSwapLeg


def _ratio(leg: RateCalculationSwapLeg) -> int:
    return unwrap(leg.payment_schedule.payment_frequency.exact_divide(
        leg.accrual_schedule.frequency,
    ))


class TestExpansionProperties:
    @given(leg=swap_legs())
    def test_well_formed_legs_expand(self, leg: RateCalculationSwapLeg) -> None:
        assert isinstance(expand(leg), Ok)

    @given(leg=swap_legs())
    def test_deterministic(self, leg: RateCalculationSwapLeg) -> None:
        assert expand(leg) == expand(leg)

    @given(leg=swap_legs())
    def test_accrual_periods_cover_schedule(self, leg: RateCalculationSwapLeg) -> None:
        expanded = unwrap(expand(leg))
        accruals = expanded.accrual_periods
        assert accruals[0].start_date == leg.start_date
        assert accruals[-1].end_date == leg.end_date
        for prev, cur in zip(accruals, accruals[1:], strict=False):
            assert prev.end_date == cur.start_date
        assert expanded.start_date == leg.start_date
        assert expanded.end_date == leg.end_date

    @given(leg=swap_legs())
    def test_grouping_arithmetic(self, leg: RateCalculationSwapLeg) -> None:
        expanded = unwrap(expand(leg))
        ratio = _ratio(leg)
        sizes = [len(p.accrual_periods) for p in expanded.payment_periods]
        assert all(s == ratio for s in sizes[:-1])
        assert 1 <= sizes[-1] <= ratio
        accrual_count = len(expanded.accrual_periods)
        assert len(sizes) == -(-accrual_count // ratio)

    @given(leg=swap_legs())
    def test_payment_dates_not_before_period_end(self, leg: RateCalculationSwapLeg) -> None:
        for period in unwrap(expand(leg)).payment_periods:
            assert period.payment_date >= period.end_date

    @given(leg=swap_legs())
    def test_notional_sign_follows_direction(self, leg: RateCalculationSwapLeg) -> None:
        for period in unwrap(expand(leg)).payment_periods:
            if leg.pay_receive is PayReceive.PAY:
                assert period.notional <= 0
            else:
                assert period.notional >= 0

    @given(leg=swap_legs())
    def test_notional_taken_from_first_accrual_of_group(
        self, leg: RateCalculationSwapLeg,
    ) -> None:
        expanded = unwrap(expand(leg))
        schedule_periods = unwrap(leg.accrual_schedule.generate())
        values = unwrap(leg.notional_schedule.amount.resolve_values(schedule_periods))
        ratio = _ratio(leg)
        for k, period in enumerate(expanded.payment_periods):
            assert period.notional == leg.pay_receive.normalize(values[k * ratio])

    @given(leg=swap_legs(exchanges=True, fx_reset=False))
    def test_exchanges_conserve_principal(self, leg: RateCalculationSwapLeg) -> None:
        events = unwrap(expand(leg)).payment_events
        assert all(isinstance(e, NotionalExchange) for e in events)
        assert all(e.payment_amount.currency == leg.currency for e in events)
        assert sum((e.payment_amount.amount for e in events), Decimal("0")) == Decimal("0")

    @given(leg=swap_legs(exchanges=True, fx_reset=True))
    def test_fx_reset_exchanges_conserve_reference_principal(
        self, leg: RateCalculationSwapLeg,
    ) -> None:
        expanded = unwrap(expand(leg))
        events = expanded.payment_events
        reference = leg.notional_schedule.fx_reset.reference_currency
        assert all(isinstance(e, FxResetNotionalExchange) for e in events)
        assert all(e.reference_amount.currency == reference for e in events)
        assert len(events) == 2 * len(expanded.payment_periods)
        assert sum((e.reference_amount.amount for e in events), Decimal("0")) == Decimal("0")

    @given(leg=swap_legs(fx_reset=True))
    def test_fx_reset_fixing_per_payment_period(self, leg: RateCalculationSwapLeg) -> None:
        expanded = unwrap(expand(leg))
        fixings = {p.fx_reset.fixing_date for p in expanded.payment_periods}
        for event in expanded.payment_events:
            assert event.fixing_date in fixings
        for period in expanded.payment_periods:
            assert period.fx_reset.fixing_date < period.start_date

    @given(leg=swap_legs(exchanges=False))
    def test_no_exchanges_without_flags(self, leg: RateCalculationSwapLeg) -> None:
        assert unwrap(expand(leg)).payment_events == ()

    @given(leg=swap_legs())
    def test_events_ordered_by_date(self, leg: RateCalculationSwapLeg) -> None:
        events = unwrap(expand(leg)).payment_events
        dates = [e.payment_date for e in events]
        assert dates == sorted(dates)
