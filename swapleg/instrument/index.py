"""Rate and FX index identifiers.

Indices are opaque to the expansion engine: they are compared by equality
and carried onto observations, never interpreted. The only thing read from
an index is its default fixing offset, used when a calculation does not
give one.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from swapleg.core.calendar import DaysAdjustment
from swapleg.core.money import CurrencyPair, NonEmptyStr
from swapleg.core.result import unwrap
from swapleg.core.types import Period


@final
@dataclass(frozen=True, slots=True)
class IborIndex:
    """A term interbank offered rate, e.g. GBP-LIBOR-1M."""

    name: NonEmptyStr
    currency: NonEmptyStr
    tenor: Period
    fixing_offset: DaysAdjustment | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.tenor, Period):
            raise TypeError(
                f"IborIndex.tenor must be Period, got {type(self.tenor).__name__}"
            )


@final
@dataclass(frozen=True, slots=True)
class FxIndex:
    """An FX rate fixing, e.g. the ECB EUR/GBP reference rate."""

    name: NonEmptyStr
    pair: CurrencyPair
    fixing_offset: DaysAdjustment | None = None


def _ibor(name: str, currency: str, tenor: str, *centers: str) -> IborIndex:
    return IborIndex(
        name=NonEmptyStr(value=name),
        currency=NonEmptyStr(value=currency),
        tenor=unwrap(Period.parse(tenor)),
        fixing_offset=DaysAdjustment.of_business_days(-2, *centers) if centers else None,
    )


def _fx(name: str, pair: str, *centers: str) -> FxIndex:
    return FxIndex(
        name=NonEmptyStr(value=name),
        pair=unwrap(CurrencyPair.parse(pair)),
        fixing_offset=DaysAdjustment.of_business_days(-2, *centers),
    )


# GBP LIBOR carries no default fixing offset: calculations on it must state one.
GBP_LIBOR_1M = _ibor("GBP-LIBOR-1M", "GBP", "1M")
GBP_LIBOR_3M = _ibor("GBP-LIBOR-3M", "GBP", "3M")
USD_LIBOR_3M = _ibor("USD-LIBOR-3M", "USD", "3M", "GBLO")
EUR_EURIBOR_3M = _ibor("EUR-EURIBOR-3M", "EUR", "3M", "EUTA")

ECB_EUR_GBP = _fx("ECB-EUR-GBP", "EUR/GBP", "EUTA")
ECB_EUR_USD = _fx("ECB-EUR-USD", "EUR/USD", "EUTA")
