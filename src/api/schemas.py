"""Pydantic schemas for API request/response models.

Project bodies use `src.models.records.ProjectRecord` directly.
"""

from fastapi import HTTPException
from pydantic import BaseModel, Field

from src.models.results import IRRResult
from src.models.validation import FieldError


# ---- Request schemas ----

class ProjectCreate(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    description: str | None = Field(None, max_length=1000)


class SolverOptions(BaseModel):
    initial_guess: float | None = Field(None, gt=-1, description="First Newton-Raphson seed")
    max_iterations: int | None = Field(None, ge=1, le=10_000)
    precision: float | None = Field(None, gt=0)


class SeriesIRRRequest(SolverOptions):
    cash_flows: list[float] = Field(..., description="Period 0 first, e.g. [-1000, 300, 400, 500]")


class SeriesNPVRequest(BaseModel):
    cash_flows: list[float] = Field(..., min_length=1)
    rate: float = Field(..., gt=-1, description="Discount rate per period as a decimal")


# ---- Response schemas ----

class DiagnosticResponse(BaseModel):
    kind: str
    message: str
    severity: str


class IRRResponse(BaseModel):
    irr: float | None
    npv: float | None
    diagnostic: DiagnosticResponse | None = None

    @classmethod
    def from_result(cls, result: IRRResult) -> "IRRResponse":
        d = result.diagnostic
        return cls(
            irr=result.irr,
            npv=result.npv,
            diagnostic=DiagnosticResponse(
                kind=d.kind.value, message=d.message, severity=d.severity.value
            )
            if d is not None
            else None,
        )


class NPVResponse(BaseModel):
    rate: float
    npv: float


class FieldErrorResponse(BaseModel):
    field: str
    message: str

    @classmethod
    def from_error(cls, error: FieldError) -> "FieldErrorResponse":
        return cls(field=error.field, message=error.message)


def invalid_project(errors: list[FieldError]) -> HTTPException:
    """422 carrying every field-level validation error."""
    return HTTPException(
        status_code=422,
        detail={"errors": [FieldErrorResponse.from_error(e).model_dump() for e in errors]},
    )
