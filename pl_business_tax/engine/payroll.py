# pl_business_tax/engine/payroll.py
from decimal import Decimal, Context
from typing import Optional

from pl_business_tax.domain.rate_table import RateTable
from pl_business_tax.utils.tax_utils import ZERO, TWELVE, clamp_non_negative, make_calculation_context, progressive_scale_tax


def employee_social_contributions(gross_salary: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    ctx = ctx or make_calculation_context()
    return ctx.multiply(gross_salary, rate_table.employee_social_rate)


def employer_contributions(gross_salary: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    ctx = ctx or make_calculation_context()
    return ctx.multiply(gross_salary, rate_table.employer_contribution_rate)


def employee_health_contribution(gross_salary: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    """Health contribution on gross salary less employee social contributions."""
    ctx = ctx or make_calculation_context()
    base = ctx.subtract(gross_salary, employee_social_contributions(gross_salary, rate_table, ctx))
    return ctx.multiply(base, rate_table.employee_health_rate)


def employee_income_tax(gross_salary: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    """
    Simplified monthly income-tax advance: the monthly base (after social
    contributions and the fixed cost deduction) is annualised, taxed on the
    two-bracket scale with the yearly tax-free amount, and spread back over
    twelve months.
    """
    ctx = ctx or make_calculation_context()
    base = ctx.subtract(gross_salary, employee_social_contributions(gross_salary, rate_table, ctx))
    taxable = clamp_non_negative(ctx.subtract(base, rate_table.employee_monthly_cost_deduction))
    yearly_tax = progressive_scale_tax(ctx.multiply(taxable, TWELVE), rate_table, ctx)
    return ctx.divide(yearly_tax, TWELVE)


def net_salary(gross_salary: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    if gross_salary <= ZERO:
        return ZERO
    ctx = ctx or make_calculation_context()
    deductions = ctx.add(
        ctx.add(employee_social_contributions(gross_salary, rate_table, ctx),
                employee_health_contribution(gross_salary, rate_table, ctx)),
        employee_income_tax(gross_salary, rate_table, ctx),
    )
    return clamp_non_negative(ctx.subtract(gross_salary, deductions))


def total_employment_cost(gross_salary: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    if gross_salary <= ZERO:
        return ZERO
    ctx = ctx or make_calculation_context()
    return ctx.add(gross_salary, employer_contributions(gross_salary, rate_table, ctx))
