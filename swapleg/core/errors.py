"""Error values produced by leg expansion. Nothing here is raised.

Every error is a frozen dataclass: it can be pattern-matched, compared and
logged. Errors deliberately carry no wall-clock timestamp, so expanding the
same invalid definition twice yields two equal errors.

Base class SwapLegError, three @final subclasses:
  ScheduleError       date ranges, stubs, frequency ratios, schedule limits
  RateError           rate or FX-reset observations lacking a fixing offset
  ConfigurationError  structurally invalid definitions (field violations)
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import final


@dataclass(frozen=True, slots=True)
class SwapLegError:
    """Base error value. NOT @final: the three error kinds extend it."""

    message: str
    code: str
    source: str  # "module.function" that produced this error

    def with_context(self, context: str) -> SwapLegError:
        """Return a copy with context prepended to the message."""
        return replace(self, message=f"{context}: {self.message}")

    def to_dict(self) -> dict[str, object]:
        return {
            "message": self.message,
            "code": self.code,
            "source": self.source,
        }


@final
@dataclass(frozen=True, slots=True)
class FieldViolation:
    """A single invalid field of a leg definition."""

    path: str  # e.g. "notional_schedule.amount.steps[0]"
    constraint: str  # e.g. "period_index must be < 5"
    actual_value: str


@final
@dataclass(frozen=True, slots=True)
class ScheduleError(SwapLegError):
    """The accrual or payment schedule cannot be built."""

    schedule: str  # "accrual" or "payment"

    def to_dict(self) -> dict[str, object]:
        return {**SwapLegError.to_dict(self), "schedule": self.schedule}


@final
@dataclass(frozen=True, slots=True)
class RateError(SwapLegError):
    """An observation (rate fixing or FX reset) cannot be dated."""

    observation: str  # index name, e.g. "GBP-LIBOR-1M"

    def to_dict(self) -> dict[str, object]:
        return {**SwapLegError.to_dict(self), "observation": self.observation}


@final
@dataclass(frozen=True, slots=True)
class ConfigurationError(SwapLegError):
    """One or more fields of the definition are structurally invalid."""

    fields: tuple[FieldViolation, ...]

    def to_dict(self) -> dict[str, object]:
        return {
            **SwapLegError.to_dict(self),
            "fields": [
                {"path": f.path, "constraint": f.constraint, "actual_value": f.actual_value}
                for f in self.fields
            ],
        }


type ExpansionError = ScheduleError | RateError | ConfigurationError
