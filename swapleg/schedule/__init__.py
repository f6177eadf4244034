"""swapleg.schedule -- periodic schedule generation."""

from swapleg.schedule.periodic import (
    PeriodicSchedule as PeriodicSchedule,
)
from swapleg.schedule.periodic import (
    SchedulePeriod as SchedulePeriod,
)
