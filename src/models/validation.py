"""Field-level validation of project records.

Validators collect every problem rather than stopping at the first, so a
caller can show all field errors at once. `to_project` is the only way from a
raw `ProjectRecord` to the engine's validated `Project`.
"""

from dataclasses import dataclass, field
from decimal import Decimal

from src.engine.periods import MONTHS_PER_YEAR
from src.models.project import (
    HoldingPeriodUnit,
    InitialInvestment,
    PeriodicCashFlow,
    PeriodUnit,
    Project,
    SaleProceeds,
)
from src.models.records import (
    CashFlowRecord,
    InitialInvestmentRecord,
    ProjectRecord,
    SaleProceedsRecord,
)

NAME_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 1000

# Longest schedule accepted, in years; bounds the dense series the engine builds
MAX_YEARS = 100


@dataclass(frozen=True)
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    errors: list[FieldError] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return not self.errors


class ProjectValidationError(ValueError):
    def __init__(self, errors: list[FieldError]) -> None:
        super().__init__("; ".join(f"{e.field}: {e.message}" for e in errors))
        self.errors = errors


def validate_number(
    value: Decimal | float | int | None,
    field_name: str,
    minimum: float | None = None,
    maximum: float | None = None,
) -> FieldError | None:
    if value is None:
        return FieldError(field_name, f"{field_name} is required")
    if isinstance(value, bool) or not isinstance(value, (Decimal, float, int)):
        return FieldError(field_name, f"{field_name} must be a valid number")
    if isinstance(value, Decimal) and not value.is_finite():
        return FieldError(field_name, f"{field_name} must be a valid number")
    if value != value:  # float NaN
        return FieldError(field_name, f"{field_name} must be a valid number")
    if minimum is not None and value < minimum:
        return FieldError(field_name, f"{field_name} must be at least {minimum}")
    if maximum is not None and value > maximum:
        return FieldError(field_name, f"{field_name} must be at most {maximum}")
    return None


def validate_string(
    value: str | None,
    field_name: str,
    required: bool = True,
    max_length: int | None = None,
) -> FieldError | None:
    if not value:
        if required:
            return FieldError(field_name, f"{field_name} is required")
        return None
    if not isinstance(value, str):
        return FieldError(field_name, f"{field_name} must be a string")
    if max_length is not None and len(value) > max_length:
        return FieldError(field_name, f"{field_name} must be at most {max_length} characters")
    return None


def _collect(*errors: FieldError | None) -> ValidationResult:
    return ValidationResult(errors=[e for e in errors if e is not None])


def validate_initial_investment(investment: InitialInvestmentRecord) -> ValidationResult:
    return _collect(
        validate_number(investment.purchase_price, "Purchase Price", 0),
        validate_number(investment.closing_costs, "Closing Costs", 0),
        validate_number(investment.renovation_costs, "Renovation Costs", 0),
        validate_number(investment.other_upfront_expenses, "Other Upfront Expenses", 0),
    )


def _max_periods(unit: PeriodUnit | HoldingPeriodUnit) -> int:
    if unit in (PeriodUnit.MONTHLY, HoldingPeriodUnit.MONTHS):
        return MAX_YEARS * MONTHS_PER_YEAR
    return MAX_YEARS


def validate_cash_flow(cash_flow: CashFlowRecord) -> ValidationResult:
    return _collect(
        validate_number(cash_flow.period, "Period", 1, _max_periods(cash_flow.period_type)),
        validate_number(cash_flow.rental_income, "Rental Income", 0),
        validate_number(cash_flow.operating_expenses, "Operating Expenses", 0),
        validate_number(cash_flow.debt_service, "Debt Service", 0),
        validate_number(cash_flow.vacancy_loss, "Vacancy Loss", 0),
    )


def validate_sale_proceeds(sale: SaleProceedsRecord) -> ValidationResult:
    return _collect(
        validate_number(sale.estimated_sale_price, "Estimated Sale Price", 0),
        validate_number(sale.selling_costs, "Selling Costs", 0),
        validate_number(
            sale.holding_period, "Holding Period", 1, _max_periods(sale.holding_period_type)
        ),
    )


def validate_project(record: ProjectRecord) -> ValidationResult:
    result = _collect(
        validate_string(record.id, "ID"),
        validate_string(record.name, "Name", max_length=NAME_MAX_LENGTH),
        validate_string(
            record.description, "Description", required=False, max_length=DESCRIPTION_MAX_LENGTH
        ),
    )

    if record.initial_investment is None:
        result.errors.append(FieldError("Initial Investment", "Initial Investment is required"))
    else:
        result.errors.extend(validate_initial_investment(record.initial_investment).errors)

    if not record.cash_flows:
        result.errors.append(FieldError("Cash Flows", "At least one cash flow is required"))
    for i, cash_flow in enumerate(record.cash_flows, start=1):
        for error in validate_cash_flow(cash_flow).errors:
            result.errors.append(
                FieldError(f"Cash Flow {i} - {error.field}", error.message)
            )

    if record.sale_proceeds is None:
        result.errors.append(FieldError("Sale Proceeds", "Sale Proceeds is required"))
    else:
        result.errors.extend(validate_sale_proceeds(record.sale_proceeds).errors)

    return result


def to_project(record: ProjectRecord) -> Project:
    """Validate a record and convert it to the engine's Project.

    Raises:
        ProjectValidationError: with every field error found
    """
    result = validate_project(record)
    if not result.is_valid:
        raise ProjectValidationError(result.errors)

    inv = record.initial_investment
    sale = record.sale_proceeds
    return Project(
        initial_investment=InitialInvestment(
            purchase_price=inv.purchase_price,
            closing_costs=inv.closing_costs,
            renovation_costs=inv.renovation_costs,
            other_upfront_expenses=inv.other_upfront_expenses,
        ),
        cash_flows=tuple(
            PeriodicCashFlow(
                period=cf.period,
                unit=cf.period_type,
                rental_income=cf.rental_income,
                operating_expenses=cf.operating_expenses,
                debt_service=cf.debt_service,
                vacancy_loss=cf.vacancy_loss,
            )
            for cf in record.cash_flows
        ),
        sale_proceeds=SaleProceeds(
            estimated_sale_price=sale.estimated_sale_price,
            selling_costs=sale.selling_costs,
            holding_period=sale.holding_period,
            holding_period_unit=sale.holding_period_type,
        ),
    )
