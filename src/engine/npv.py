"""Net present value of a periodic cash-flow series, and its rate derivative.

Pure functions. No I/O.
"""

from collections.abc import Sequence

from src.engine.errors import EmptySeriesError, InvalidRateError


def _check(series: Sequence[float], rate: float) -> None:
    if not series:
        raise EmptySeriesError()
    if rate <= -1:
        raise InvalidRateError(rate)


def evaluate_npv(series: Sequence[float], rate: float) -> float:
    """NPV = sum(CF[t] / (1 + rate)^t) for t = 0..N.

    series[0] is undiscounted (the initial outlay).
    """
    _check(series, rate)
    return sum(cf / (1 + rate) ** t for t, cf in enumerate(series))


def evaluate_npv_derivative(series: Sequence[float], rate: float) -> float:
    """d(NPV)/d(rate) = sum(-t * CF[t] / (1 + rate)^(t + 1)) for t = 1..N.

    Used by the Newton-Raphson step in `src.engine.irr.solve_irr`.
    """
    _check(series, rate)
    return sum(-t * series[t] / (1 + rate) ** (t + 1) for t in range(1, len(series)))
