from dataclasses import dataclass
from decimal import Decimal
from enum import Enum


class PeriodUnit(Enum):
    MONTHLY = "monthly"
    ANNUAL = "annual"


class HoldingPeriodUnit(Enum):
    MONTHS = "months"
    YEARS = "years"


@dataclass(frozen=True)
class InitialInvestment:
    purchase_price: Decimal = Decimal("0")
    closing_costs: Decimal = Decimal("0")
    renovation_costs: Decimal = Decimal("0")
    other_upfront_expenses: Decimal = Decimal("0")

    @property
    def total(self) -> Decimal:
        return (
            self.purchase_price
            + self.closing_costs
            + self.renovation_costs
            + self.other_upfront_expenses
        )


@dataclass(frozen=True)
class PeriodicCashFlow:
    period: int  # 1-based index in `unit`
    unit: PeriodUnit = PeriodUnit.ANNUAL
    rental_income: Decimal = Decimal("0")
    operating_expenses: Decimal = Decimal("0")
    debt_service: Decimal = Decimal("0")
    vacancy_loss: Decimal = Decimal("0")

    @property
    def net_cash_flow(self) -> Decimal:
        return (
            self.rental_income
            - self.operating_expenses
            - self.debt_service
            - self.vacancy_loss
        )


@dataclass(frozen=True)
class SaleProceeds:
    estimated_sale_price: Decimal = Decimal("0")
    selling_costs: Decimal = Decimal("0")  # Agent fees + closing
    holding_period: Decimal = Decimal("1")
    holding_period_unit: HoldingPeriodUnit = HoldingPeriodUnit.YEARS

    @property
    def net_proceeds(self) -> Decimal:
        return self.estimated_sale_price - self.selling_costs


@dataclass(frozen=True)
class Project:
    """A validated investment project, ready for the IRR engine.

    Build one from a stored record with `src.models.validation.to_project`.
    """
    initial_investment: InitialInvestment
    cash_flows: tuple[PeriodicCashFlow, ...]
    sale_proceeds: SaleProceeds
