"""swapleg.core -- public API for core types."""

from swapleg.core.calendar import (
    BusinessDayAdjustment as BusinessDayAdjustment,
)
from swapleg.core.calendar import (
    DaysAdjustment as DaysAdjustment,
)
from swapleg.core.calendar import (
    adjust_date as adjust_date,
)
from swapleg.core.calendar import (
    is_business_day as is_business_day,
)
from swapleg.core.config import (
    DEFAULT_EXPANSION_CONFIG as DEFAULT_EXPANSION_CONFIG,
)
from swapleg.core.config import (
    ExpansionConfig as ExpansionConfig,
)
from swapleg.core.daycount import (
    day_count_fraction as day_count_fraction,
)
from swapleg.core.errors import (
    ConfigurationError as ConfigurationError,
)
from swapleg.core.errors import (
    FieldViolation as FieldViolation,
)
from swapleg.core.errors import (
    RateError as RateError,
)
from swapleg.core.errors import (
    ScheduleError as ScheduleError,
)
from swapleg.core.errors import (
    SwapLegError as SwapLegError,
)
from swapleg.core.money import (
    SWAPLEG_DECIMAL_CONTEXT as SWAPLEG_DECIMAL_CONTEXT,
)
from swapleg.core.money import (
    CurrencyPair as CurrencyPair,
)
from swapleg.core.money import (
    Money as Money,
)
from swapleg.core.money import (
    NonEmptyStr as NonEmptyStr,
)
from swapleg.core.result import (
    Err as Err,
)
from swapleg.core.result import (
    Ok as Ok,
)
from swapleg.core.result import (
    Result as Result,
)
from swapleg.core.result import (
    unwrap as unwrap,
)
from swapleg.core.types import (
    DayCountConvention as DayCountConvention,
)
from swapleg.core.types import (
    Frequency as Frequency,
)
from swapleg.core.types import (
    PayReceive as PayReceive,
)
from swapleg.core.types import (
    Period as Period,
)
from swapleg.core.types import (
    StubConvention as StubConvention,
)
from swapleg.core.value import (
    ValueAdjustment as ValueAdjustment,
)
from swapleg.core.value import (
    ValueSchedule as ValueSchedule,
)
from swapleg.core.value import (
    ValueStep as ValueStep,
)
