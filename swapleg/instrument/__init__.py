"""swapleg.instrument -- swap leg definitions."""

from swapleg.instrument.index import (
    FxIndex as FxIndex,
)
from swapleg.instrument.index import (
    IborIndex as IborIndex,
)
from swapleg.instrument.rate_spec import (
    CompoundingMethodEnum as CompoundingMethodEnum,
)
from swapleg.instrument.rate_spec import (
    FixedRateCalculation as FixedRateCalculation,
)
from swapleg.instrument.rate_spec import (
    IborRateCalculation as IborRateCalculation,
)
from swapleg.instrument.rate_spec import (
    RateCalculation as RateCalculation,
)
from swapleg.instrument.swap_leg import (
    FxResetCalculation as FxResetCalculation,
)
from swapleg.instrument.swap_leg import (
    NotionalSchedule as NotionalSchedule,
)
from swapleg.instrument.swap_leg import (
    PaymentSchedule as PaymentSchedule,
)
from swapleg.instrument.swap_leg import (
    RateCalculationSwapLeg as RateCalculationSwapLeg,
)
