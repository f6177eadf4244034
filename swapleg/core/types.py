"""Date, period and direction types shared by schedules and legs.

Period, Frequency, PayReceive, DayCountConvention, BusinessDayConvention,
StubConvention.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import ClassVar, Literal, final

from dateutil.relativedelta import relativedelta

from swapleg.core.result import Err, Ok

# ---------------------------------------------------------------------------
# Day count conventions
# ---------------------------------------------------------------------------


class DayCountConvention(Enum):
    """Day count conventions for accrual year fractions.

    ISDA 2006 Section 4.16.
    """

    ACT_360 = "ACT/360"
    ACT_365F = "ACT/365F"
    ACT_365L = "ACT/365L"
    ACT_ACT_ISDA = "ACT/ACT.ISDA"
    THIRTY_360 = "30/360"
    THIRTY_E_360 = "30E/360"


type BusinessDayConvention = Literal[
    "MOD_FOLLOWING", "FOLLOWING", "PRECEDING", "MOD_PRECEDING", "NONE",
]

type PeriodUnit = Literal["D", "W", "M", "Y"]


# ---------------------------------------------------------------------------
# Period and Frequency
# ---------------------------------------------------------------------------


@final
@dataclass(frozen=True, slots=True)
class Period:
    """A time period: multiplier x unit (e.g., 3M, 1Y, 2D)."""

    multiplier: int
    unit: PeriodUnit

    def __post_init__(self) -> None:
        if self.multiplier <= 0:
            raise TypeError(f"Period.multiplier must be > 0, got {self.multiplier}")
        if self.unit not in ("D", "W", "M", "Y"):
            raise TypeError(f"Period.unit must be one of D/W/M/Y, got {self.unit!r}")

    @staticmethod
    def parse(raw: str) -> Ok[Period] | Err[str]:
        """Parse '3M', '1Y', '2W' or '10D'."""
        text = raw.strip().upper()
        if len(text) < 2 or not text[:-1].isdigit() or text[-1] not in "DWMY":
            return Err(f"Period must look like '3M', got {raw!r}")
        multiplier = int(text[:-1])
        if multiplier <= 0:
            return Err(f"Period.multiplier must be > 0, got {multiplier}")
        unit: PeriodUnit = text[-1]  # type: ignore[assignment]
        return Ok(Period(multiplier=multiplier, unit=unit))

    @property
    def is_month_based(self) -> bool:
        return self.unit in ("M", "Y")

    def length(self) -> int:
        """Length in months for M/Y periods, in days for D/W periods."""
        match self.unit:
            case "D":
                return self.multiplier
            case "W":
                return 7 * self.multiplier
            case "M":
                return self.multiplier
            case "Y":
                return 12 * self.multiplier

    def add_to(self, anchor: date, count: int) -> date:
        """Return anchor + count * period; count may be negative.

        Always measured from the anchor so month-end clipping never drifts
        (31 Jan + 2 * 1M is 31 Mar, not 28 Mar).
        """
        if self.is_month_based:
            return anchor + relativedelta(months=count * self.length())
        return anchor + relativedelta(days=count * self.length())

    @property
    def value(self) -> str:
        return f"{self.multiplier}{self.unit}"


@final
@dataclass(frozen=True, slots=True)
class Frequency:
    """A periodic frequency, e.g. P1M for monthly or P3M for quarterly."""

    period: Period

    P1M: ClassVar[Frequency]
    P2M: ClassVar[Frequency]
    P3M: ClassVar[Frequency]
    P6M: ClassVar[Frequency]
    P12M: ClassVar[Frequency]

    @staticmethod
    def of_months(months: int) -> Frequency:
        return Frequency(period=Period(multiplier=months, unit="M"))

    def exact_divide(self, other: Frequency) -> Ok[int] | Err[str]:
        """How many `other` periods make up one period of this frequency.

        Err when the units are incompatible (month vs day based), when
        this frequency is shorter than `other`, or when the ratio is not
        a whole number.
        """
        if self.period.is_month_based != other.period.is_month_based:
            return Err(
                f"Frequencies {self.period.value} and {other.period.value} "
                "are not comparable"
            )
        numerator = self.period.length()
        denominator = other.period.length()
        if numerator < denominator:
            return Err(
                f"Frequency {self.period.value} is shorter than {other.period.value}"
            )
        if numerator % denominator != 0:
            return Err(
                f"Frequency {self.period.value} is not a multiple of {other.period.value}"
            )
        return Ok(numerator // denominator)

    @property
    def value(self) -> str:
        return f"P{self.period.value}"


Frequency.P1M = Frequency.of_months(1)
Frequency.P2M = Frequency.of_months(2)
Frequency.P3M = Frequency.of_months(3)
Frequency.P6M = Frequency.of_months(6)
Frequency.P12M = Frequency.of_months(12)


# ---------------------------------------------------------------------------
# Direction and stubs
# ---------------------------------------------------------------------------


class PayReceive(Enum):
    """Whether the leg's cashflows are paid or received."""

    PAY = "PAY"
    RECEIVE = "RECEIVE"

    def normalize(self, amount: Decimal) -> Decimal:
        """Sign a magnitude: negative when paying, positive when receiving."""
        if self is PayReceive.PAY:
            return -abs(amount)
        return abs(amount)


class StubConvention(Enum):
    """Where a period shorter than the frequency may appear.

    NONE requires the date range to divide evenly by the frequency.
    """

    NONE = "NONE"
    SHORT_INITIAL = "SHORT_INITIAL"
    SHORT_FINAL = "SHORT_FINAL"
