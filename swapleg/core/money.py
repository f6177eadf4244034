"""Decimal context, currency codes and signed currency amounts.

Notional and rate arithmetic runs under SWAPLEG_DECIMAL_CONTEXT with prec=28,
ROUND_HALF_EVEN, and traps for InvalidOperation/DivisionByZero/Overflow.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_EVEN as _ROUND_HALF_EVEN
from decimal import (
    Context,
    Decimal,
    DivisionByZero,
    InvalidOperation,
    Overflow,
)
from typing import final

from swapleg.core.result import Err, Ok

SWAPLEG_DECIMAL_CONTEXT = Context(
    prec=28,
    rounding=_ROUND_HALF_EVEN,
    Emin=-999999,
    Emax=999999,
    capitals=1,
    clamp=0,
    flags=[],
    traps=[InvalidOperation, DivisionByZero, Overflow],
)


@final
@dataclass(frozen=True, slots=True)
class NonEmptyStr:
    """String constrained to be non-empty."""

    value: str

    def __post_init__(self) -> None:
        if not self.value:
            raise TypeError("NonEmptyStr requires non-empty string")

    @staticmethod
    def parse(raw: str) -> Ok[NonEmptyStr] | Err[str]:
        if not raw:
            return Err("NonEmptyStr requires non-empty string")
        return Ok(NonEmptyStr(value=raw))


# ISO 4217 codes accepted as settlement or reference currencies
VALID_CURRENCIES: frozenset[str] = frozenset({
    "USD", "EUR", "GBP", "CHF", "CAD", "AUD", "SEK", "JPY", "KRW",
    "HKD", "SGD", "NZD", "NOK", "DKK", "ZAR", "MXN", "BRL", "INR",
    "CNY", "TWD", "THB", "PLN", "CZK", "HUF", "TRY", "ILS",
})


def validate_currency(code: str) -> bool:
    """Check if a currency code is in the known set."""
    return code in VALID_CURRENCIES


def parse_currency(raw: str) -> Ok[NonEmptyStr] | Err[str]:
    """Validate a three-letter currency code and wrap it."""
    if not validate_currency(raw):
        return Err(f"Unknown currency code: {raw!r}")
    return NonEmptyStr.parse(raw)


@final
@dataclass(frozen=True, slots=True)
class Money:
    """Signed amount in one currency, e.g. a principal exchange."""

    amount: Decimal
    currency: NonEmptyStr

    def __post_init__(self) -> None:
        if not isinstance(self.amount, Decimal) or not self.amount.is_finite():
            raise TypeError(f"Money.amount must be finite Decimal, got {self.amount!r}")


@final
@dataclass(frozen=True, slots=True)
class CurrencyPair:
    """Validated FX currency pair, e.g. EUR/GBP (base/quote)."""

    base: NonEmptyStr
    quote: NonEmptyStr

    def __post_init__(self) -> None:
        if self.base.value == self.quote.value:
            raise TypeError(
                f"CurrencyPair base and quote must differ, "
                f"both are '{self.base.value}'"
            )

    @staticmethod
    def parse(raw: str) -> Ok[CurrencyPair] | Err[str]:
        """Parse 'BASE/QUOTE' string into CurrencyPair."""
        parts = raw.split("/")
        if len(parts) != 2:
            return Err(f"CurrencyPair must be BASE/QUOTE, got '{raw}'")
        base_str, quote_str = parts[0].strip(), parts[1].strip()
        if base_str == quote_str:
            return Err(f"Base and quote must differ: {base_str}")
        match parse_currency(base_str):
            case Err(e):
                return Err(f"CurrencyPair.base: {e}")
            case Ok(b):
                pass
        match parse_currency(quote_str):
            case Err(e):
                return Err(f"CurrencyPair.quote: {e}")
            case Ok(q):
                pass
        return Ok(CurrencyPair(base=b, quote=q))

    def contains(self, currency: NonEmptyStr) -> bool:
        return currency in (self.base, self.quote)

    @property
    def value(self) -> str:
        """String representation: BASE/QUOTE."""
        return f"{self.base.value}/{self.quote.value}"
