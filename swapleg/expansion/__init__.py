"""swapleg.expansion -- expanded leg representation and the expansion engine."""

from swapleg.expansion.engine import (
    expand as expand,
)
from swapleg.expansion.periods import (
    ExpandedSwapLeg as ExpandedSwapLeg,
)
from swapleg.expansion.periods import (
    FixedRate as FixedRate,
)
from swapleg.expansion.periods import (
    FxReset as FxReset,
)
from swapleg.expansion.periods import (
    FxResetNotionalExchange as FxResetNotionalExchange,
)
from swapleg.expansion.periods import (
    IborRate as IborRate,
)
from swapleg.expansion.periods import (
    NotionalExchange as NotionalExchange,
)
from swapleg.expansion.periods import (
    PaymentEvent as PaymentEvent,
)
from swapleg.expansion.periods import (
    RateAccrualPeriod as RateAccrualPeriod,
)
from swapleg.expansion.periods import (
    RateObservation as RateObservation,
)
from swapleg.expansion.periods import (
    RatePaymentPeriod as RatePaymentPeriod,
)
