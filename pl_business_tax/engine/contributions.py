# pl_business_tax/engine/contributions.py
"""
Social-contribution (ZUS) state machine for the self-employed.

The contribution-base selector decides the monthly base:

    standard               60% of projected average wage
    reduced_new_entrant    30% of minimum wage
    income_scaled_reduced  50% of average monthly income, clamped to [reduced, standard]
    exemption_period       no social contributions (health still due)
    none                   no social contributions

Pension, disability and accident always apply on the base; sickness only when
opted in; the labour fund only under the standard base.
"""
import logging
from decimal import Decimal, Context
from typing import Optional

from pl_business_tax.domain.enums import ContributionBase
from pl_business_tax.domain.rate_table import RateTable
from pl_business_tax.utils.tax_utils import ZERO, TWELVE, clamp_non_negative, make_calculation_context

logger = logging.getLogger(__name__)

_NO_SOCIAL_CONTRIBUTIONS = (ContributionBase.EXEMPTION_PERIOD, ContributionBase.NONE)


def income_scaled_base(yearly_income: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    ctx = ctx or make_calculation_context()
    average_monthly_income = ctx.divide(clamp_non_negative(yearly_income), TWELVE)
    base = ctx.multiply(average_monthly_income, rate_table.income_scaled_ratio)
    minimum_base, maximum_base = rate_table.income_scaled_bounds
    return min(max(base, minimum_base), maximum_base)


def contribution_base_for(selector: ContributionBase,
                          rate_table: RateTable,
                          yearly_income: Decimal = ZERO,
                          ctx: Optional[Context] = None) -> Optional[Decimal]:
    """Monthly contribution base, or None when the selector carries no social contributions."""
    if selector in _NO_SOCIAL_CONTRIBUTIONS:
        return None
    if selector == ContributionBase.STANDARD:
        return rate_table.standard_contribution_base
    if selector == ContributionBase.REDUCED_NEW_ENTRANT:
        return rate_table.reduced_contribution_base
    if selector == ContributionBase.INCOME_SCALED_REDUCED:
        return income_scaled_base(yearly_income, rate_table, ctx)
    raise ValueError(f"Unknown contribution base selector: {selector!r}")


def monthly_social_contributions(selector: ContributionBase,
                                 rate_table: RateTable,
                                 yearly_income: Decimal = ZERO,
                                 pays_sickness: bool = True,
                                 ctx: Optional[Context] = None) -> Decimal:
    """
    Monthly social contributions at full precision.
    yearly_income only matters for the income-scaled base; the lump-sum
    regime passes yearly revenue here instead.
    """
    ctx = ctx or make_calculation_context()
    base = contribution_base_for(selector, rate_table, yearly_income, ctx)
    if base is None:
        return ZERO

    rate = ctx.add(ctx.add(rate_table.pension_rate, rate_table.disability_rate), rate_table.accident_rate)
    if pays_sickness:
        rate = ctx.add(rate, rate_table.sickness_rate)
    if selector == ContributionBase.STANDARD:
        rate = ctx.add(rate, rate_table.labor_fund_rate)

    total = ctx.multiply(base, rate)
    logger.debug(f"Social contributions for {selector.value}: base {base}, rate {rate}, monthly {total}")
    return total
