"""IRR computation via multi-seed Newton-Raphson.

Pure functions. No I/O.
"""

import logging
from collections.abc import Sequence

from src.engine.errors import InvalidRateError
from src.engine.npv import evaluate_npv, evaluate_npv_derivative
from src.models.results import DiagnosticKind, IRRResult

logger = logging.getLogger(__name__)

DEFAULT_INITIAL_GUESS = 0.10
DEFAULT_MAX_ITERATIONS = 100
DEFAULT_PRECISION = 1e-7

# Fallback seeds, tried in order after the caller's guess. The first seed that
# converges determines the returned rate.
SEED_RATES: tuple[float, ...] = (0.01, 0.05, 0.10, 0.15, 0.20, 0.25, 0.30, 0.50, 0.75, 1.00)

# Newton steps outside this range have diverged; the lower bound is exclusive
# because NPV is undefined at -100%.
MIN_RATE = -1.0
MAX_RATE = 100.0


def _newton(
    series: Sequence[float], seed: float, max_iterations: int, precision: float
) -> float | None:
    """Run Newton-Raphson from one seed. Returns the root or None if abandoned."""
    rate = seed
    for _ in range(max_iterations):
        npv = evaluate_npv(series, rate)
        derivative = evaluate_npv_derivative(series, rate)

        # Flat NPV curve: the step would blow up
        if abs(derivative) < precision:
            logger.debug("Seed %s: derivative %.3g below precision at rate %s", seed, derivative, rate)
            return None

        next_rate = rate - npv / derivative

        if abs(next_rate - rate) < precision:
            return next_rate

        if next_rate <= MIN_RATE or next_rate > MAX_RATE:
            logger.debug("Seed %s: diverged to %s", seed, next_rate)
            return None

        rate = next_rate

    logger.debug("Seed %s: no convergence after %d iterations", seed, max_iterations)
    return None


def solve_irr(
    series: Sequence[float],
    initial_guess: float = DEFAULT_INITIAL_GUESS,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    precision: float = DEFAULT_PRECISION,
) -> IRRResult:
    """Find the rate at which the NPV of `series` is zero.

    series[0] should be negative (initial investment).
    series[-1] should include sale proceeds.

    Tries `initial_guess` first, then each of SEED_RATES. Failures are
    returned as an IRRResult with an error diagnostic, never raised.
    """
    if len(series) < 2:
        return IRRResult.failure(
            DiagnosticKind.INSUFFICIENT_DATA,
            "Insufficient data for IRR calculation. Need at least initial investment "
            "and one cash flow.",
        )

    has_positive = any(cf > 0 for cf in series)
    has_negative = any(cf < 0 for cf in series)
    if not has_positive or not has_negative:
        return IRRResult.failure(
            DiagnosticKind.INVALID_CASH_FLOW_SIGN,
            "IRR calculation requires both positive and negative cash flows.",
        )

    for seed in (initial_guess, *SEED_RATES):
        if seed <= MIN_RATE:
            logger.debug("Skipping seed %s: at or below -100%%", seed)
            continue
        try:
            irr = _newton(series, seed, max_iterations, precision)
            if irr is not None:
                return IRRResult(irr=irr, npv=evaluate_npv(series, irr))
        except (OverflowError, ZeroDivisionError, InvalidRateError) as e:
            logger.debug("Seed %s: numeric failure (%s)", seed, e)

    logger.warning("IRR failed to converge for series of length %d", len(series))
    return IRRResult.failure(
        DiagnosticKind.CONVERGENCE_FAILURE,
        "IRR calculation failed to converge with any initial guess.",
    )


def _sign(value: float) -> int:
    return (value > 0) - (value < 0)


def may_have_multiple_roots(series: Sequence[float]) -> bool:
    """Descartes' rule of signs: more than one sign change allows multiple IRRs.

    Zero entries are skipped and do not reset the previous sign.
    """
    if len(series) < 3:
        return False

    sign_changes = 0
    previous = _sign(series[0])
    for cf in series[1:]:
        current = _sign(cf)
        if current == 0:
            continue
        if previous != 0 and current != previous:
            sign_changes += 1
        previous = current

    return sign_changes > 1
