"""Stepped value schedules: a base value plus adjustments at schedule steps.

Used for notional amounts and fixed rates. A step identifies the schedule
period it starts from, either by zero-based index or by date, and applies to
that period and every later one.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, localcontext
from enum import Enum
from typing import Protocol, assert_never, final

from swapleg.core.money import SWAPLEG_DECIMAL_CONTEXT
from swapleg.core.result import Err, Ok


class ValueAdjustmentType(Enum):
    """How a step modifies the value in force before it."""

    REPLACE = "REPLACE"                    # absolute: new value
    DELTA_AMOUNT = "DELTA_AMOUNT"          # value + x
    DELTA_MULTIPLIER = "DELTA_MULTIPLIER"  # value * (1 + x)
    MULTIPLIER = "MULTIPLIER"              # value * x


@final
@dataclass(frozen=True, slots=True)
class ValueAdjustment:
    kind: ValueAdjustmentType
    modifying_value: Decimal

    def __post_init__(self) -> None:
        if not isinstance(self.modifying_value, Decimal) or not self.modifying_value.is_finite():
            raise TypeError(
                "ValueAdjustment.modifying_value must be finite Decimal, "
                f"got {self.modifying_value!r}"
            )

    @staticmethod
    def of_replace(value: Decimal) -> ValueAdjustment:
        return ValueAdjustment(kind=ValueAdjustmentType.REPLACE, modifying_value=value)

    @staticmethod
    def of_delta_amount(delta: Decimal) -> ValueAdjustment:
        return ValueAdjustment(kind=ValueAdjustmentType.DELTA_AMOUNT, modifying_value=delta)

    @staticmethod
    def of_delta_multiplier(pct: Decimal) -> ValueAdjustment:
        return ValueAdjustment(kind=ValueAdjustmentType.DELTA_MULTIPLIER, modifying_value=pct)

    @staticmethod
    def of_multiplier(factor: Decimal) -> ValueAdjustment:
        return ValueAdjustment(kind=ValueAdjustmentType.MULTIPLIER, modifying_value=factor)

    def apply(self, base: Decimal) -> Decimal:
        with localcontext(SWAPLEG_DECIMAL_CONTEXT):
            match self.kind:
                case ValueAdjustmentType.REPLACE:
                    return self.modifying_value
                case ValueAdjustmentType.DELTA_AMOUNT:
                    return base + self.modifying_value
                case ValueAdjustmentType.DELTA_MULTIPLIER:
                    return base * (Decimal("1") + self.modifying_value)
                case ValueAdjustmentType.MULTIPLIER:
                    return base * self.modifying_value
                case _never:
                    assert_never(_never)


@final
@dataclass(frozen=True, slots=True)
class ValueStep:
    """One adjustment, keyed by exactly one of period_index or date."""

    adjustment: ValueAdjustment
    period_index: int | None = None
    date: date | None = None

    def __post_init__(self) -> None:
        if (self.period_index is None) == (self.date is None):
            raise TypeError("ValueStep requires exactly one of period_index or date")
        if self.period_index is not None and self.period_index < 0:
            raise TypeError(f"ValueStep.period_index must be >= 0, got {self.period_index}")

    @staticmethod
    def of(period_index: int, adjustment: ValueAdjustment) -> ValueStep:
        return ValueStep(adjustment=adjustment, period_index=period_index)

    @staticmethod
    def on(step_date: date, adjustment: ValueAdjustment) -> ValueStep:
        return ValueStep(adjustment=adjustment, date=step_date)


class SchedulePeriodLike(Protocol):
    @property
    def start_date(self) -> date: ...

    @property
    def unadjusted_start(self) -> date: ...


@final
@dataclass(frozen=True, slots=True)
class ValueSchedule:
    """Initial value plus ordered steps.

    Invariants:
    - initial_value is a finite Decimal
    - no two index-keyed steps share a period index
    - no two dated steps share a date
    """

    initial_value: Decimal
    steps: tuple[ValueStep, ...] = ()

    def __post_init__(self) -> None:
        if not isinstance(self.initial_value, Decimal) or not self.initial_value.is_finite():
            raise TypeError(
                f"ValueSchedule.initial_value must be finite Decimal, got {self.initial_value!r}"
            )
        indices = [s.period_index for s in self.steps if s.period_index is not None]
        if len(indices) != len(set(indices)):
            raise TypeError(f"ValueSchedule: duplicate step period indices {sorted(indices)}")
        dates = [s.date for s in self.steps if s.date is not None]
        if len(dates) != len(set(dates)):
            raise TypeError("ValueSchedule: duplicate step dates")

    @staticmethod
    def of(value: Decimal, *steps: ValueStep) -> ValueSchedule:
        return ValueSchedule(initial_value=value, steps=steps)

    def _step_index(
        self, step: ValueStep, periods: Sequence[SchedulePeriodLike],
    ) -> Ok[int] | Err[str]:
        if step.period_index is not None:
            if step.period_index >= len(periods):
                return Err(
                    f"step period_index {step.period_index} is beyond "
                    f"the {len(periods)} schedule periods"
                )
            return Ok(step.period_index)
        for i, p in enumerate(periods):
            if step.date in (p.start_date, p.unadjusted_start):
                return Ok(i)
        return Err(f"step date {step.date} is not the start of any schedule period")

    def resolve_values(
        self, periods: Sequence[SchedulePeriodLike],
    ) -> Ok[tuple[Decimal, ...]] | Err[str]:
        """One value per schedule period, steps applied in period order."""
        by_index: dict[int, ValueAdjustment] = {}
        for step in self.steps:
            match self._step_index(step, periods):
                case Err(e):
                    return Err(e)
                case Ok(i):
                    if i in by_index:
                        return Err(f"two steps resolve to schedule period {i}")
                    by_index[i] = step.adjustment

        values: list[Decimal] = []
        current = self.initial_value
        for i in range(len(periods)):
            adjustment = by_index.get(i)
            if adjustment is not None:
                current = adjustment.apply(current)
            values.append(current)
        return Ok(tuple(values))
