"""Stateless calculation routes: IRR/NPV for an inline series or project."""

from fastapi import APIRouter, HTTPException

from src.api.schemas import (
    IRRResponse,
    NPVResponse,
    SeriesIRRRequest,
    SeriesNPVRequest,
    SolverOptions,
    invalid_project,
)
from src.config import settings
from src.engine.calculator import compute_project_irr
from src.engine.irr import solve_irr
from src.engine.npv import evaluate_npv
from src.models.records import ProjectRecord
from src.models.validation import ProjectValidationError, to_project

router = APIRouter(prefix="/api/v1", tags=["analysis"])


def _solver_kwargs(opts: SolverOptions) -> dict:
    """Request overrides, falling back to configured defaults."""
    return dict(
        initial_guess=settings.irr_initial_guess if opts.initial_guess is None else opts.initial_guess,
        max_iterations=opts.max_iterations or settings.irr_max_iterations,
        precision=opts.precision or settings.irr_precision,
    )


@router.post("/irr", response_model=IRRResponse)
async def irr_for_series(req: SeriesIRRRequest):
    """IRR of a raw cash-flow series (period 0 first)."""
    return IRRResponse.from_result(solve_irr(req.cash_flows, **_solver_kwargs(req)))


@router.post("/npv", response_model=NPVResponse)
async def npv_for_series(req: SeriesNPVRequest):
    try:
        npv = evaluate_npv(req.cash_flows, req.rate)
    except OverflowError:
        raise HTTPException(status_code=400, detail="NPV is out of floating point range")
    return NPVResponse(rate=req.rate, npv=npv)


@router.post("/projects/irr", response_model=IRRResponse)
async def irr_for_project(record: ProjectRecord):
    """IRR of an unsaved project. Field errors return 422."""
    try:
        project = to_project(record)
    except ProjectValidationError as e:
        raise invalid_project(e.errors)
    return IRRResponse.from_result(compute_project_irr(project, **_solver_kwargs(SolverOptions())))
