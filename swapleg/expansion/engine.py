"""Swap leg expansion: definition -> ExpandedSwapLeg.

Pipeline (each step returns Ok | Err, the first Err ends the expansion):
  1. accrual schedule -> adjusted schedule periods
  2. schedule periods + rate calculation -> accrual periods
  3. payment/accrual frequency ratio -> groups of accrual periods
  4. notional schedule -> signed notional and FX reset per group
  5. groups -> payment periods; payment periods -> notional exchanges

Pure: no state is kept between calls and no partial result is returned.
"""

from __future__ import annotations

import logging

from swapleg.core.config import DEFAULT_EXPANSION_CONFIG, ExpansionConfig
from swapleg.core.errors import ExpansionError
from swapleg.core.result import Err, Ok
from swapleg.expansion.accrual import build_accrual_periods
from swapleg.expansion.exchanges import build_notional_exchanges
from swapleg.expansion.payment import (
    build_payment_periods,
    group_accrual_periods,
    payment_ratio,
    resolve_fx_resets,
    resolve_notionals,
)
from swapleg.expansion.periods import ExpandedSwapLeg
from swapleg.instrument.swap_leg import RateCalculationSwapLeg

logger = logging.getLogger(__name__)


def _expand(
    leg: RateCalculationSwapLeg, config: ExpansionConfig,
) -> Ok[ExpandedSwapLeg] | Err[ExpansionError]:
    match leg.accrual_schedule.generate(config):
        case Err() as err:
            return err
        case Ok(schedule_periods):
            pass

    match build_accrual_periods(schedule_periods, leg.calculation):
        case Err() as err:
            return err
        case Ok(accrual_periods):
            pass

    match payment_ratio(leg.payment_schedule, leg.accrual_schedule.frequency):
        case Err() as err:
            return err
        case Ok(ratio):
            pass
    groups = group_accrual_periods(accrual_periods, ratio)
    logger.debug(
        "Grouping %d accrual periods by %d into %d payment periods",
        len(accrual_periods), ratio, len(groups),
    )

    match resolve_notionals(leg.notional_schedule, leg.pay_receive, schedule_periods, ratio):
        case Err() as err:
            return err
        case Ok(notionals):
            pass

    match resolve_fx_resets(leg.notional_schedule, groups):
        case Err() as err:
            return err
        case Ok(fx_resets):
            pass

    match build_payment_periods(
        groups, leg.payment_schedule, leg.notional_schedule, notionals, fx_resets,
    ):
        case Err() as err:
            return err
        case Ok(payment_periods):
            pass

    events = build_notional_exchanges(payment_periods, leg.notional_schedule)
    logger.debug("Synthesized %d notional exchange events", len(events))
    return Ok(ExpandedSwapLeg(payment_periods=payment_periods, payment_events=events))


def expand(
    leg: RateCalculationSwapLeg,
    config: ExpansionConfig = DEFAULT_EXPANSION_CONFIG,
) -> Ok[ExpandedSwapLeg] | Err[ExpansionError]:
    """Expand a leg definition into payment periods and notional exchanges.

    Returns Err(ScheduleError | RateError | ConfigurationError) on failure.
    Deterministic: the same definition always gives an equal result.
    """
    result = _expand(leg, config)
    if isinstance(result, Err):
        logger.warning(
            "Swap leg expansion failed [%s]: %s", result.error.code, result.error.message,
        )
    return result
