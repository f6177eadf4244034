"""Expansion configuration.

Pure configuration data. No environment or file loading happens here;
callers construct an ExpansionConfig and pass it to expand().
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import final


@final
@dataclass(frozen=True, slots=True)
class ExpansionConfig:
    """Limits applied while expanding a leg definition."""

    max_accrual_periods: int = 10_000
    # Holiday rules are only maintained for this range of years.
    first_calendar_year: int = 1950
    last_calendar_year: int = 2199

    def __post_init__(self) -> None:
        if self.max_accrual_periods <= 0:
            raise TypeError(
                f"ExpansionConfig.max_accrual_periods must be > 0, "
                f"got {self.max_accrual_periods}"
            )
        if self.first_calendar_year > self.last_calendar_year:
            raise TypeError(
                f"ExpansionConfig: first_calendar_year ({self.first_calendar_year}) "
                f"must be <= last_calendar_year ({self.last_calendar_year})"
            )

    def covers(self, d: date) -> bool:
        """True if holiday rules are maintained for the year of d."""
        return self.first_calendar_year <= d.year <= self.last_calendar_year


DEFAULT_EXPANSION_CONFIG = ExpansionConfig()
