from dataclasses import replace
from decimal import Decimal

import pytest

from src.engine.calculator import compute_project_irr
from src.engine.npv import evaluate_npv
from src.engine.periods import build_cash_flow_series
from src.models.project import (
    HoldingPeriodUnit,
    InitialInvestment,
    PeriodicCashFlow,
    PeriodUnit,
    Project,
    SaleProceeds,
)
from src.models.results import DiagnosticKind, Severity


@pytest.fixture
def two_root_project() -> Project:
    """Series [-100, 230, -132]: NPV is zero at both 10% and 20%."""
    return Project(
        initial_investment=InitialInvestment(purchase_price=Decimal("100")),
        cash_flows=(
            PeriodicCashFlow(period=1, rental_income=Decimal("230")),
            PeriodicCashFlow(period=2, operating_expenses=Decimal("132")),
        ),
        sale_proceeds=SaleProceeds(holding_period=Decimal("2")),
    )


class TestComputeProjectIRR:
    def test_canonical_project(self, canonical_project):
        result = compute_project_irr(canonical_project)
        assert result.succeeded
        assert result.diagnostic is None
        # 100K -> 3K, 126.5K over two years
        assert result.irr == pytest.approx(0.1398, abs=1e-3)

    def test_npv_zero_at_irr(self, canonical_project):
        result = compute_project_irr(canonical_project)
        series = build_cash_flow_series(
            canonical_project.initial_investment,
            canonical_project.cash_flows,
            canonical_project.sale_proceeds,
        )
        assert evaluate_npv(series, result.irr) == pytest.approx(0, abs=1e-4)

    def test_multiple_roots_warning(self, two_root_project):
        result = compute_project_irr(two_root_project)
        assert result.irr == pytest.approx(0.10, abs=1e-6)
        assert result.npv is not None
        assert result.diagnostic.kind is DiagnosticKind.POSSIBLE_MULTIPLE_ROOTS
        assert result.diagnostic.severity is Severity.WARNING

    def test_warning_does_not_change_result(self, two_root_project):
        from src.engine.irr import solve_irr

        plain = solve_irr([-100.0, 230.0, -132.0])
        result = compute_project_irr(two_root_project)
        assert (result.irr, result.npv) == (plain.irr, plain.npv)

    def test_solver_failure_outranks_warning(self):
        """Two sign changes but no real root: convergence failure, no warning."""
        project = Project(
            initial_investment=InitialInvestment(purchase_price=Decimal("100")),
            cash_flows=(
                PeriodicCashFlow(period=1, rental_income=Decimal("50")),
                PeriodicCashFlow(period=2, debt_service=Decimal("100")),
            ),
            sale_proceeds=SaleProceeds(holding_period=Decimal("2")),
        )
        result = compute_project_irr(project)
        assert result.irr is None
        assert result.diagnostic.kind is DiagnosticKind.CONVERGENCE_FAILURE
        assert result.diagnostic.severity is Severity.ERROR

    def test_invalid_sign(self):
        project = Project(
            initial_investment=InitialInvestment(),
            cash_flows=(PeriodicCashFlow(period=1, rental_income=Decimal("100")),),
            sale_proceeds=SaleProceeds(estimated_sale_price=Decimal("1000")),
        )
        result = compute_project_irr(project)
        assert result.irr is None
        assert result.diagnostic.kind is DiagnosticKind.INVALID_CASH_FLOW_SIGN

    def test_missing_project_data(self, canonical_project):
        project = replace(canonical_project, sale_proceeds=None)
        result = compute_project_irr(project)
        assert result.irr is None
        assert result.npv is None
        assert result.diagnostic.kind is DiagnosticKind.MISSING_PROJECT_DATA
        assert result.diagnostic.severity is Severity.ERROR
        assert "sale proceeds" in result.diagnostic.message

    def test_monthly_project(self):
        project = Project(
            initial_investment=InitialInvestment(purchase_price=Decimal("10000")),
            cash_flows=tuple(
                PeriodicCashFlow(period=p, unit=PeriodUnit.MONTHLY, rental_income=Decimal("100"))
                for p in range(1, 13)
            ),
            sale_proceeds=SaleProceeds(
                estimated_sale_price=Decimal("10000"),
                holding_period=Decimal("12"),
                holding_period_unit=HoldingPeriodUnit.MONTHS,
            ),
        )
        result = compute_project_irr(project)
        # 1% per month on a par sale
        assert result.irr == pytest.approx(0.01, abs=1e-9)

    def test_custom_initial_guess(self, canonical_project):
        default = compute_project_irr(canonical_project)
        guessed = compute_project_irr(canonical_project, initial_guess=0.3)
        assert guessed.irr == pytest.approx(default.irr, abs=1e-7)
