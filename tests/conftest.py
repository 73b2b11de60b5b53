"""Canonical test fixtures used across engine, store and API tests.

Fixture: $100K purchase, two annual cash flows, sale after 2 years for a net
$123K.
"""

import pytest
from decimal import Decimal

from src.models.project import (
    HoldingPeriodUnit,
    InitialInvestment,
    PeriodicCashFlow,
    PeriodUnit,
    Project,
    SaleProceeds,
)
from src.models.records import ProjectRecord


@pytest.fixture
def simple_series() -> list[float]:
    """IRR between 8% and 9%."""
    return [-1000.0, 300.0, 400.0, 500.0]


@pytest.fixture
def canonical_investment() -> InitialInvestment:
    return InitialInvestment(
        purchase_price=Decimal("95000"),
        closing_costs=Decimal("3000"),
        renovation_costs=Decimal("1500"),
        other_upfront_expenses=Decimal("500"),
    )


@pytest.fixture
def canonical_cash_flows() -> tuple[PeriodicCashFlow, ...]:
    return (
        PeriodicCashFlow(
            period=1,
            unit=PeriodUnit.ANNUAL,
            rental_income=Decimal("12000"),
            operating_expenses=Decimal("4000"),
            debt_service=Decimal("4400"),
            vacancy_loss=Decimal("600"),
        ),
        PeriodicCashFlow(
            period=2,
            unit=PeriodUnit.ANNUAL,
            rental_income=Decimal("12500"),
            operating_expenses=Decimal("4000"),
            debt_service=Decimal("4400"),
            vacancy_loss=Decimal("600"),
        ),
    )


@pytest.fixture
def canonical_sale() -> SaleProceeds:
    return SaleProceeds(
        estimated_sale_price=Decimal("130000"),
        selling_costs=Decimal("7000"),
        holding_period=Decimal("2"),
        holding_period_unit=HoldingPeriodUnit.YEARS,
    )


@pytest.fixture
def canonical_project(canonical_investment, canonical_cash_flows, canonical_sale) -> Project:
    """Series: [-100000, 3000, 3500 + 123000]."""
    return Project(
        initial_investment=canonical_investment,
        cash_flows=canonical_cash_flows,
        sale_proceeds=canonical_sale,
    )


@pytest.fixture
def canonical_record_data() -> dict:
    """Same project as canonical_project, in stored (camelCase) form."""
    return {
        "id": "lz3k9q0abc123",
        "name": "Maple Street Duplex",
        "description": "Two-unit rental",
        "createdAt": "2024-03-01T10:00:00.000Z",
        "updatedAt": "2024-03-01T10:00:00.000Z",
        "initialInvestment": {
            "purchasePrice": 95000,
            "closingCosts": 3000,
            "renovationCosts": 1500,
            "otherUpfrontExpenses": 500,
            "total": 100000,
        },
        "cashFlows": [
            {
                "period": 1,
                "periodType": "annual",
                "rentalIncome": 12000,
                "operatingExpenses": 4000,
                "debtService": 4400,
                "vacancyLoss": 600,
                "netCashFlow": 3000,
            },
            {
                "period": 2,
                "periodType": "annual",
                "rentalIncome": 12500,
                "operatingExpenses": 4000,
                "debtService": 4400,
                "vacancyLoss": 600,
                "netCashFlow": 3500,
            },
        ],
        "saleProceeds": {
            "estimatedSalePrice": 130000,
            "sellingCosts": 7000,
            "netProceeds": 123000,
            "holdingPeriod": 2,
            "holdingPeriodType": "years",
        },
    }


@pytest.fixture
def canonical_record(canonical_record_data) -> ProjectRecord:
    return ProjectRecord.model_validate(canonical_record_data)
