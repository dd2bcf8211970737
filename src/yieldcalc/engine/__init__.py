"""YieldEngine: method selection and annualized yield reports."""

from yieldcalc.engine.yield_engine import (
    YieldEngine,
    lump_sum_report,
    solve_sip_yield,
    solve_yield,
    total_periods,
)

__all__ = [
    "YieldEngine",
    "lump_sum_report",
    "solve_sip_yield",
    "solve_yield",
    "total_periods",
]
