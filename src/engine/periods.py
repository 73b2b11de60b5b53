"""Period normalization: project schedule -> single discrete cash-flow series.

Pure functions. No I/O.

Cash flows may be recorded monthly or annually. The whole schedule is
normalized to monthly if any entry is monthly, otherwise to annual. Index 0
of the resulting series is the initial investment; the sale's net proceeds
are added at the holding-period index.
"""

import logging
import math
from collections import defaultdict
from collections.abc import Sequence
from decimal import Decimal

from src.engine.errors import MissingProjectDataError
from src.models.project import (
    HoldingPeriodUnit,
    InitialInvestment,
    PeriodicCashFlow,
    PeriodUnit,
    SaleProceeds,
)

logger = logging.getLogger(__name__)

MONTHS_PER_YEAR = 12


def target_unit(cash_flows: Sequence[PeriodicCashFlow]) -> PeriodUnit:
    """Monthly if any entry is monthly, else annual."""
    if any(cf.unit is PeriodUnit.MONTHLY for cf in cash_flows):
        return PeriodUnit.MONTHLY
    return PeriodUnit.ANNUAL


def _group_by_period(
    cash_flows: Sequence[PeriodicCashFlow], unit: PeriodUnit
) -> dict[int, float]:
    grouped: dict[int, float] = defaultdict(float)

    for cf in sorted(cash_flows, key=lambda c: c.period):
        amount = float(cf.net_cash_flow)

        if unit is PeriodUnit.MONTHLY and cf.unit is PeriodUnit.ANNUAL:
            # Spread evenly over the year's 12 months
            first_month = (cf.period - 1) * MONTHS_PER_YEAR + 1
            for month in range(first_month, first_month + MONTHS_PER_YEAR):
                grouped[month] += amount / MONTHS_PER_YEAR
        elif unit is PeriodUnit.ANNUAL and cf.unit is PeriodUnit.MONTHLY:
            # Aggregate into the containing year
            grouped[math.ceil(cf.period / MONTHS_PER_YEAR)] += amount
        else:
            grouped[cf.period] += amount

    return grouped


def holding_period_index(sale: SaleProceeds, unit: PeriodUnit) -> int:
    """Series index of the sale, expressed in `unit` periods.

    A fractional holding period rounds up to the period in which it ends.
    """
    holding = sale.holding_period
    if unit is PeriodUnit.ANNUAL and sale.holding_period_unit is HoldingPeriodUnit.MONTHS:
        holding = Decimal(math.ceil(holding / MONTHS_PER_YEAR))
    elif unit is PeriodUnit.MONTHLY and sale.holding_period_unit is HoldingPeriodUnit.YEARS:
        holding = holding * MONTHS_PER_YEAR
    return math.ceil(holding)


def build_cash_flow_series(
    initial_investment: InitialInvestment | None,
    cash_flows: Sequence[PeriodicCashFlow] | None,
    sale_proceeds: SaleProceeds | None,
    unit: PeriodUnit | None = None,
) -> list[float]:
    """Build the zero-indexed cash-flow series used for NPV/IRR.

    Args:
        initial_investment: Upfront costs; series[0] = -total
        cash_flows: Periodic cash flows, any mix of monthly and annual
        sale_proceeds: Terminal sale, added at the holding-period index
        unit: Force a target unit instead of inferring it from cash_flows

    Raises:
        MissingProjectDataError: any of the three inputs is None
    """
    missing = [
        name
        for name, value in (
            ("initial investment", initial_investment),
            ("cash flows", cash_flows),
            ("sale proceeds", sale_proceeds),
        )
        if value is None
    ]
    if missing:
        raise MissingProjectDataError(missing)

    if unit is None:
        unit = target_unit(cash_flows)

    series: list[float] = [-float(initial_investment.total)]

    grouped = _group_by_period(cash_flows, unit)
    max_period = max(grouped, default=0)
    series.extend(grouped.get(period, 0.0) for period in range(1, max_period + 1))

    sale_index = holding_period_index(sale_proceeds, unit)
    if len(series) <= sale_index:
        series.extend([0.0] * (sale_index + 1 - len(series)))
    series[sale_index] += float(sale_proceeds.net_proceeds)

    logger.debug(
        "Built %s series: %d periods, sale at index %d", unit.value, len(series) - 1, sale_index
    )
    return series
