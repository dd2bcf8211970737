"""
yieldcalc — annualized rate of return for dated cash flows

Public contract:
- build_lump_sum_schedule / build_periodic_schedule → CashFlowSchedule
- solve_yield(schedule) → SolverResult (CAGR or XIRR)
- solve_sip_yield(...) → SolverResult (periodic compounding)
"""

from yieldcalc.core.domain import (
    CashFlowEvent,
    CashFlowSchedule,
    Frequency,
    HistoryRecord,
    LumpSumRequest,
    PeriodicPlanRequest,
    SipRequest,
    SolverMethod,
    SolverResult,
    TopUp,
    YieldReport,
)
from yieldcalc.core.math import SolverConfig
from yieldcalc.engine import YieldEngine, lump_sum_report, solve_sip_yield, solve_yield
from yieldcalc.schedule import (
    InvalidScheduleError,
    ScheduleError,
    build_lump_sum_schedule,
    build_periodic_schedule,
)

__version__ = "0.1.0"

__all__ = [
    # Contract functions
    "build_lump_sum_schedule",
    "build_periodic_schedule",
    "solve_yield",
    "solve_sip_yield",
    "lump_sum_report",
    # Orchestration
    "YieldEngine",
    "SolverConfig",
    # Types
    "CashFlowEvent",
    "CashFlowSchedule",
    "Frequency",
    "HistoryRecord",
    "LumpSumRequest",
    "PeriodicPlanRequest",
    "SipRequest",
    "SolverMethod",
    "SolverResult",
    "TopUp",
    "YieldReport",
    # Errors
    "InvalidScheduleError",
    "ScheduleError",
]
