from dataclasses import dataclass
from enum import Enum


class DiagnosticKind(Enum):
    INSUFFICIENT_DATA = "insufficient_data"
    INVALID_CASH_FLOW_SIGN = "invalid_cash_flow_sign"
    CONVERGENCE_FAILURE = "convergence_failure"
    MISSING_PROJECT_DATA = "missing_project_data"
    POSSIBLE_MULTIPLE_ROOTS = "possible_multiple_roots"


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"
    INFO = "info"


@dataclass(frozen=True)
class Diagnostic:
    kind: DiagnosticKind
    message: str
    severity: Severity = Severity.ERROR


@dataclass(frozen=True)
class IRRResult:
    """Outcome of an IRR calculation.

    On success `irr` and `npv` are both set; on failure both are None and
    `diagnostic` explains why. A warning diagnostic may accompany a success.
    """
    irr: float | None = None
    npv: float | None = None
    diagnostic: Diagnostic | None = None

    @property
    def succeeded(self) -> bool:
        return self.irr is not None

    @classmethod
    def failure(cls, kind: DiagnosticKind, message: str) -> "IRRResult":
        return cls(diagnostic=Diagnostic(kind=kind, message=message, severity=Severity.ERROR))
