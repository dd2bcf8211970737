"""
Domain models and value objects.

Contains cash-flow schedules, frequencies, calculation requests and results.
"""

from yieldcalc.core.domain.cash_flow import CashFlowEvent, CashFlowSchedule
from yieldcalc.core.domain.frequency import (
    INTERVAL_DAYS,
    PERIODS_PER_YEAR,
    Frequency,
    interval_days,
    months_between,
    period_to_days,
    period_to_years,
    periodic_amount,
    periods_per_year,
)
from yieldcalc.core.domain.history import HistoryRecord, RecordKind
from yieldcalc.core.domain.requests import (
    LumpSumRequest,
    PeriodicPlanRequest,
    SipRequest,
    TopUp,
)
from yieldcalc.core.domain.result import SolverMethod, SolverResult, YieldReport

__all__ = [
    # Cash flows
    "CashFlowEvent",
    "CashFlowSchedule",
    # Frequency
    "Frequency",
    "INTERVAL_DAYS",
    "PERIODS_PER_YEAR",
    "interval_days",
    "months_between",
    "period_to_days",
    "period_to_years",
    "periodic_amount",
    "periods_per_year",
    # Requests
    "LumpSumRequest",
    "PeriodicPlanRequest",
    "SipRequest",
    "TopUp",
    # Results
    "SolverMethod",
    "SolverResult",
    "YieldReport",
    # History
    "HistoryRecord",
    "RecordKind",
]
