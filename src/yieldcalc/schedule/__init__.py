"""ScheduleBuilder: dated cash-flow descriptions → CashFlowSchedule."""

from yieldcalc.schedule.builder import (
    InvalidScheduleError,
    ScheduleBuilder,
    ScheduleError,
    build_lump_sum_schedule,
    build_periodic_schedule,
    day_offset,
)

__all__ = [
    "InvalidScheduleError",
    "ScheduleBuilder",
    "ScheduleError",
    "build_lump_sum_schedule",
    "build_periodic_schedule",
    "day_offset",
]
