"""Pydantic models for stored/transported project records.

Records are the raw form of a project: what the store persists and the API
accepts. JSON keys are camelCase. Derived amounts (`total`, `netCashFlow`,
`netProceeds`) are written out for readability but ignored on input and
always recomputed from their components.

Use `src.models.validation.to_project` to turn a record into a validated
`Project` for the engine.
"""

import uuid
from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, computed_field
from pydantic.alias_generators import to_camel

from src.models.project import HoldingPeriodUnit, PeriodUnit

# Exact Decimal in memory, plain JSON number when serialized
JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]


class _Record(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InitialInvestmentRecord(_Record):
    purchase_price: JsonDecimal = Decimal("0")
    closing_costs: JsonDecimal = Decimal("0")
    renovation_costs: JsonDecimal = Decimal("0")
    other_upfront_expenses: JsonDecimal = Decimal("0")

    @computed_field(alias="total")
    @property
    def total(self) -> JsonDecimal:
        return (
            self.purchase_price
            + self.closing_costs
            + self.renovation_costs
            + self.other_upfront_expenses
        )


class CashFlowRecord(_Record):
    period: int = 1
    period_type: PeriodUnit = PeriodUnit.ANNUAL
    rental_income: JsonDecimal = Decimal("0")
    operating_expenses: JsonDecimal = Decimal("0")
    debt_service: JsonDecimal = Decimal("0")
    vacancy_loss: JsonDecimal = Decimal("0")

    @computed_field(alias="netCashFlow")
    @property
    def net_cash_flow(self) -> JsonDecimal:
        return self.rental_income - self.operating_expenses - self.debt_service - self.vacancy_loss


class SaleProceedsRecord(_Record):
    estimated_sale_price: JsonDecimal = Decimal("0")
    selling_costs: JsonDecimal = Decimal("0")
    holding_period: JsonDecimal = Decimal("1")
    holding_period_type: HoldingPeriodUnit = HoldingPeriodUnit.YEARS

    @computed_field(alias="netProceeds")
    @property
    def net_proceeds(self) -> JsonDecimal:
        return self.estimated_sale_price - self.selling_costs


def _now() -> datetime:
    return datetime.now(timezone.utc)


class ProjectRecord(_Record):
    id: str = Field(default_factory=lambda: uuid.uuid4().hex)
    name: str = ""
    description: str | None = None
    created_at: datetime = Field(default_factory=_now)
    updated_at: datetime = Field(default_factory=_now)

    initial_investment: InitialInvestmentRecord | None = None
    cash_flows: list[CashFlowRecord] = Field(default_factory=list)
    sale_proceeds: SaleProceedsRecord | None = None

    # Last computed results
    calculated_irr: float | None = None
    calculated_npv: float | None = None

    def to_json(self) -> str:
        return self.model_dump_json(by_alias=True)

    @classmethod
    def from_json(cls, data: str) -> "ProjectRecord":
        return cls.model_validate_json(data)


def new_project_record(name: str, description: str | None = None) -> ProjectRecord:
    """Fresh project with zeroed investment, one annual cash flow and a 1-year sale."""
    return ProjectRecord(
        name=name,
        description=description,
        initial_investment=InitialInvestmentRecord(),
        cash_flows=[CashFlowRecord()],
        sale_proceeds=SaleProceedsRecord(),
    )
