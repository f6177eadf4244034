"""Rate calculation types for swap legs.

FixedRateCalculation, IborRateCalculation, the RateCalculation union, and
CompoundingMethodEnum.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import final

from swapleg.core.calendar import DaysAdjustment
from swapleg.core.types import DayCountConvention
from swapleg.core.value import ValueSchedule
from swapleg.instrument.index import IborIndex

# ---------------------------------------------------------------------------
# Enums
# ---------------------------------------------------------------------------


class CompoundingMethodEnum(Enum):
    """How accrual periods within one payment period compound.

    Expansion only tags payment periods with the method; combining the
    rates is left to valuation.
    """

    NONE = "NONE"
    STRAIGHT = "STRAIGHT"
    FLAT = "FLAT"
    SPREAD_EXCLUSIVE = "SPREAD_EXCLUSIVE"


# ---------------------------------------------------------------------------
# Rate calculations
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class FixedRateCalculation:
    """Fixed rate, possibly stepped, with its day count.

    The rate schedule is resolved per accrual period, so a step at period
    index 4 changes the rate from the fifth accrual period onwards.
    """

    day_count: DayCountConvention
    rate: ValueSchedule

    def __post_init__(self) -> None:
        if not isinstance(self.day_count, DayCountConvention):
            raise TypeError(
                "FixedRateCalculation.day_count must be DayCountConvention, "
                f"got {type(self.day_count).__name__}"
            )
        if not isinstance(self.rate, ValueSchedule):
            raise TypeError(
                "FixedRateCalculation.rate must be ValueSchedule, "
                f"got {type(self.rate).__name__}"
            )


@final
@dataclass(frozen=True, slots=True)
class IborRateCalculation:
    """Floating rate observed on a term index, one fixing per accrual period.

    fixing_offset is applied to each accrual period's adjusted start date.
    When None, the index's own fixing offset is used.
    """

    day_count: DayCountConvention
    index: IborIndex
    fixing_offset: DaysAdjustment | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.day_count, DayCountConvention):
            raise TypeError(
                "IborRateCalculation.day_count must be DayCountConvention, "
                f"got {type(self.day_count).__name__}"
            )
        if not isinstance(self.index, IborIndex):
            raise TypeError(
                "IborRateCalculation.index must be IborIndex, "
                f"got {type(self.index).__name__}"
            )

    @property
    def effective_fixing_offset(self) -> DaysAdjustment | None:
        if self.fixing_offset is not None:
            return self.fixing_offset
        return self.index.fixing_offset


type RateCalculation = FixedRateCalculation | IborRateCalculation
