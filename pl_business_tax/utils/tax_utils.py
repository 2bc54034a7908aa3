# pl_business_tax/utils/tax_utils.py
from decimal import Decimal, Context
from typing import Optional

from pl_business_tax.domain.rate_table import RateTable
import pl_business_tax.config as global_config

ZERO = Decimal('0')
TWELVE = Decimal('12')

def make_calculation_context() -> Context:
    """Engine-local context so results never depend on the caller's global decimal context."""
    return Context(prec=global_config.INTERNAL_CALCULATION_PRECISION, rounding=global_config.DECIMAL_ROUNDING_MODE)

def clamp_non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO

def progressive_scale_tax(yearly_base: Decimal, rate_table: RateTable, ctx: Optional[Context] = None) -> Decimal:
    """
    Yearly income tax under the two-bracket scale (skala podatkowa).
    The tax-free amount is deducted first; income above the bracket
    threshold is taxed at the upper rate. Non-positive bases pay nothing.
    """
    ctx = ctx or make_calculation_context()
    taxable = ctx.subtract(yearly_base, rate_table.tax_free_amount)
    if taxable <= ZERO:
        return ZERO

    lower_band = ctx.subtract(rate_table.tax_threshold, rate_table.tax_free_amount)
    if taxable <= lower_band:
        return ctx.multiply(taxable, rate_table.scale_lower_rate)

    lower_tax = ctx.multiply(lower_band, rate_table.scale_lower_rate)
    upper_tax = ctx.multiply(ctx.subtract(taxable, lower_band), rate_table.scale_upper_rate)
    return ctx.add(lower_tax, upper_tax)
