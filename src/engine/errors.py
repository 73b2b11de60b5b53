"""Exceptions raised by the IRR engine.

Data-dependent failures (no sign change, no convergence, ...) are returned as
diagnostics on `IRRResult`, not raised. Only misuse raises.
"""

from src.models.results import DiagnosticKind


class EmptySeriesError(ValueError):
    """NPV evaluated on a zero-length cash-flow series."""

    def __init__(self) -> None:
        super().__init__("Cash flow series cannot be empty")


class InvalidRateError(ValueError):
    """Discount rate at or below -100%, where NPV is undefined."""

    def __init__(self, rate: float) -> None:
        super().__init__(f"Discount rate must be greater than -1, got {rate}")
        self.rate = rate


class CalculationError(ValueError):
    """Failure while preparing a project for IRR, reported as a diagnostic."""

    kind: DiagnosticKind


class MissingProjectDataError(CalculationError):
    kind = DiagnosticKind.MISSING_PROJECT_DATA

    def __init__(self, missing: list[str]) -> None:
        super().__init__(f"Missing required project data: {', '.join(missing)}")
        self.missing = missing
