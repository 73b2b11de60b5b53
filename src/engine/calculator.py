"""Project IRR orchestrator: normalize -> multiplicity check -> solve.

Pure computation. No I/O. Project in, IRRResult out.
"""

import logging
from dataclasses import replace

from src.engine.errors import CalculationError
from src.engine.irr import (
    DEFAULT_INITIAL_GUESS,
    DEFAULT_MAX_ITERATIONS,
    DEFAULT_PRECISION,
    may_have_multiple_roots,
    solve_irr,
)
from src.engine.periods import build_cash_flow_series
from src.models.project import Project
from src.models.results import Diagnostic, DiagnosticKind, IRRResult, Severity

logger = logging.getLogger(__name__)


def compute_project_irr(
    project: Project,
    *,
    initial_guess: float = DEFAULT_INITIAL_GUESS,
    max_iterations: int = DEFAULT_MAX_ITERATIONS,
    precision: float = DEFAULT_PRECISION,
) -> IRRResult:
    """Compute IRR and NPV (at the IRR) for an investment project.

    Never raises for bad project data: failures come back as an IRRResult
    with an error diagnostic. A successful result carries a warning when the
    cash flows change sign more than once.
    """
    try:
        series = build_cash_flow_series(
            project.initial_investment, project.cash_flows, project.sale_proceeds
        )
    except CalculationError as e:
        logger.warning("Cannot build cash flow series: %s", e)
        return IRRResult.failure(e.kind, f"IRR calculation error: {e}")

    result = solve_irr(
        series,
        initial_guess=initial_guess,
        max_iterations=max_iterations,
        precision=precision,
    )
    logger.debug("IRR over %d periods: irr=%s npv=%s", len(series) - 1, result.irr, result.npv)

    # A solver failure outranks the multiplicity warning
    if result.succeeded and may_have_multiple_roots(series):
        return replace(
            result,
            diagnostic=Diagnostic(
                kind=DiagnosticKind.POSSIBLE_MULTIPLE_ROOTS,
                message="Multiple IRR solutions may exist. The calculated value may not be "
                "the only solution.",
                severity=Severity.WARNING,
            ),
        )
    return result
