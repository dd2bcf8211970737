"""
Core math modules для yieldcalc

Численные алгоритмы расчёта доходности с гарантией стабильности.
"""

# Numerical Safeguards
from yieldcalc.core.math.numerical_safeguards import (
    EPS_CALC,
    denom_safe_signed,
    is_valid_float,
    safe_divide,
    sanitize_float,
    validate_finite,
)

# Closed-form Yield
from yieldcalc.core.math.closed_form import (
    DEGENERATE_RATE,
    cagr,
    compound_annual_rate,
    simple_annual_rate,
    solve_closed_form,
)

# Newton-Raphson Solver
from yieldcalc.core.math.newton_raphson import (
    DEFAULT_SOLVER_CONFIG,
    RATE_LOWER_BOUND,
    RATE_UPPER_BOUND,
    SOLVER_MAX_ITERATIONS,
    SOLVER_TOLERANCE,
    XIRR_INITIAL_GUESS,
    NewtonResult,
    SolverConfig,
    StopReason,
    newton_raphson,
    sip_future_value,
    sip_future_value_derivative,
    solve_periodic_irr,
    solve_sip_periodic,
    solve_xirr,
    xnpv,
    xnpv_derivative,
)

__all__ = [
    # Numerical Safeguards
    "EPS_CALC",
    "denom_safe_signed",
    "is_valid_float",
    "safe_divide",
    "sanitize_float",
    "validate_finite",
    # Closed-form — Constants
    "DEGENERATE_RATE",
    # Closed-form — Functions
    "cagr",
    "compound_annual_rate",
    "simple_annual_rate",
    "solve_closed_form",
    # Newton-Raphson — Constants
    "DEFAULT_SOLVER_CONFIG",
    "RATE_LOWER_BOUND",
    "RATE_UPPER_BOUND",
    "SOLVER_MAX_ITERATIONS",
    "SOLVER_TOLERANCE",
    "XIRR_INITIAL_GUESS",
    # Newton-Raphson — Types
    "NewtonResult",
    "SolverConfig",
    "StopReason",
    # Newton-Raphson — Functions
    "newton_raphson",
    "sip_future_value",
    "sip_future_value_derivative",
    "solve_periodic_irr",
    "solve_sip_periodic",
    "solve_xirr",
    "xnpv",
    "xnpv_derivative",
]
