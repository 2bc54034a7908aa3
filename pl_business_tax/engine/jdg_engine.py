# pl_business_tax/engine/jdg_engine.py
import logging
from decimal import Decimal
from typing import Dict, List, Optional

from pl_business_tax.domain.enums import ContributionBase, TaxForm
from pl_business_tax.domain.inputs import CalculationInput
from pl_business_tax.domain.rate_table import RateTable, get_rate_table
from pl_business_tax.domain.results import ComparisonResult, MonthlyBreakdown, YearlyFigures, YearlyResult
from pl_business_tax.engine.contributions import monthly_social_contributions
from pl_business_tax.utils.tax_utils import ZERO, TWELVE, clamp_non_negative, make_calculation_context, progressive_scale_tax
import pl_business_tax.config as global_config

logger = logging.getLogger(__name__)

# Order matters: ties in compare_all_forms go to the variant listed first.
VARIANT_ORDER: List[TaxForm] = [TaxForm.SCALE, TaxForm.LINEAR, TaxForm.LINEAR_IP_BOX, TaxForm.RYCZALT]


class JdgEngine:
    """Sole-proprietorship (JDG) burden under each taxation regime."""

    def __init__(self, rate_table: Optional[RateTable] = None):
        self.rate_table = rate_table or get_rate_table(global_config.TAX_YEAR)
        self.ctx = make_calculation_context()
        self.TWO_PLACES = global_config.OUTPUT_PRECISION_AMOUNTS
        self.RATE_PLACES = global_config.OUTPUT_PRECISION_RATES

    def _yearly_deduction_basis(self, calc_input: CalculationInput, yearly_revenue: Decimal) -> Decimal:
        if calc_input.use_notional_costs:
            return self.ctx.multiply(yearly_revenue, self.rate_table.notional_cost_ratio)
        return self.ctx.multiply(calc_input.monthly_costs, TWELVE)

    def _warn_on_eligibility(self, calc_input: CalculationInput, yearly_revenue: Decimal):
        if (calc_input.contribution_base == ContributionBase.INCOME_SCALED_REDUCED
                and yearly_revenue > self.rate_table.income_scaled_revenue_limit):
            logger.warning(
                f"Yearly revenue {yearly_revenue} exceeds the income-scaled contribution limit "
                f"{self.rate_table.income_scaled_revenue_limit}; the income-scaled base is applied as requested."
            )

    def _build_result(self,
                      tax_form: TaxForm,
                      calc_input: CalculationInput,
                      yearly_costs_reported: Decimal,
                      yearly_income_reported: Decimal,
                      monthly_social: Decimal,
                      monthly_health: Decimal,
                      yearly_tax: Decimal) -> YearlyResult:
        """Assembles monthly and yearly figures from full-precision inputs and rounds them once."""
        ctx = self.ctx
        q = lambda value: value.quantize(self.TWO_PLACES, context=ctx)

        yearly_revenue = ctx.multiply(calc_input.monthly_revenue, TWELVE)
        yearly_actual_costs = ctx.multiply(calc_input.monthly_costs, TWELVE)
        yearly_social = ctx.multiply(monthly_social, TWELVE)
        yearly_health = ctx.multiply(monthly_health, TWELVE)
        monthly_tax = ctx.divide(yearly_tax, TWELVE)

        monthly_burden = ctx.add(ctx.add(monthly_social, monthly_health), monthly_tax)
        yearly_burden = ctx.add(ctx.add(yearly_social, yearly_health), yearly_tax)

        # Net cash flow always subtracts the costs actually incurred
        monthly_net = ctx.subtract(ctx.subtract(calc_input.monthly_revenue, calc_input.monthly_costs), monthly_burden)
        yearly_net = ctx.subtract(ctx.subtract(yearly_revenue, yearly_actual_costs), yearly_burden)

        effective_rate = ctx.divide(yearly_burden, yearly_revenue) if yearly_revenue > ZERO else ZERO

        return YearlyResult(
            tax_form=tax_form,
            monthly=MonthlyBreakdown(
                social_contributions=q(monthly_social),
                health_contribution=q(monthly_health),
                tax=q(monthly_tax),
                total_burden=q(monthly_burden),
                net_amount=q(monthly_net),
            ),
            yearly=YearlyFigures(
                revenue=q(yearly_revenue),
                costs=q(yearly_costs_reported),
                income=q(yearly_income_reported),
                social_contributions=q(yearly_social),
                health_contribution=q(yearly_health),
                tax=q(yearly_tax),
                total_burden=q(yearly_burden),
                net_amount=q(yearly_net),
            ),
            effective_rate=effective_rate.quantize(self.RATE_PLACES, context=ctx),
        )

    def _income_based(self, calc_input: CalculationInput, tax_form: TaxForm) -> Optional[YearlyResult]:
        """Shared path of the scale and flat-rate regimes, which tax income after social contributions."""
        if calc_input.monthly_revenue <= ZERO:
            logger.debug(f"Non-positive revenue; no {tax_form.value} result.")
            return None

        ctx = self.ctx
        rt = self.rate_table
        yearly_revenue = ctx.multiply(calc_input.monthly_revenue, TWELVE)
        self._warn_on_eligibility(calc_input, yearly_revenue)

        yearly_costs = self._yearly_deduction_basis(calc_input, yearly_revenue)
        yearly_income = ctx.subtract(yearly_revenue, yearly_costs)

        monthly_social = monthly_social_contributions(
            calc_input.contribution_base, rt, yearly_income, calc_input.pays_sickness, ctx
        )
        income_after_social = ctx.subtract(yearly_income, ctx.multiply(monthly_social, TWELVE))
        tax_base = clamp_non_negative(income_after_social)
        monthly_health_base = ctx.divide(tax_base, TWELVE)

        if tax_form == TaxForm.SCALE:
            monthly_health = max(ctx.multiply(monthly_health_base, rt.health_rate_scale), rt.health_floor)
            yearly_tax = progressive_scale_tax(tax_base, rt, ctx)
        else:
            monthly_health = max(ctx.multiply(monthly_health_base, rt.health_rate_linear), rt.health_floor)
            rate = rt.ip_box_rate if tax_form == TaxForm.LINEAR_IP_BOX else rt.linear_rate
            yearly_tax = ctx.multiply(tax_base, rate)

        logger.debug(
            f"{tax_form.value}: income {yearly_income}, after social {income_after_social}, "
            f"health {monthly_health}/month, tax {yearly_tax}/year"
        )
        return self._build_result(tax_form, calc_input, yearly_costs, yearly_income,
                                  monthly_social, monthly_health, yearly_tax)

    def calculate_scale(self, calc_input: CalculationInput) -> Optional[YearlyResult]:
        """Progressive scale (skala podatkowa): 12%/32% with a tax-free amount, 9% health."""
        return self._income_based(calc_input, TaxForm.SCALE)

    def calculate_linear(self, calc_input: CalculationInput) -> Optional[YearlyResult]:
        """
        Flat rate (podatek liniowy): 19%, 4.9% health. With use_ip_box the 5%
        IP rate replaces the flat rate entirely and the result is reported as
        the LINEAR_IP_BOX variant.
        """
        tax_form = TaxForm.LINEAR_IP_BOX if calc_input.use_ip_box else TaxForm.LINEAR
        return self._income_based(calc_input, tax_form)

    def calculate_ryczalt(self, calc_input: CalculationInput) -> Optional[YearlyResult]:
        """
        Lump sum on revenue (ryczałt). Costs never reach the tax or
        contribution bases; they only reduce the reported net cash flow.
        """
        if calc_input.monthly_revenue <= ZERO:
            logger.debug("Non-positive revenue; no ryczalt result.")
            return None

        ctx = self.ctx
        rt = self.rate_table
        rate = calc_input.lump_sum_rate
        if rate is None:
            rate = rt.lump_sum_rate_for(rt.default_lump_sum_category)
            logger.warning(
                f"No lump-sum rate given; using the {rt.default_lump_sum_category.value} category rate {rate}."
            )

        yearly_revenue = ctx.multiply(calc_input.monthly_revenue, TWELVE)
        self._warn_on_eligibility(calc_input, yearly_revenue)

        monthly_social = monthly_social_contributions(
            calc_input.contribution_base, rt, yearly_revenue, calc_input.pays_sickness, ctx
        )
        monthly_health = rt.lump_sum_health_for(yearly_revenue)
        yearly_tax = ctx.multiply(yearly_revenue, rate)

        return self._build_result(
            TaxForm.RYCZALT, calc_input,
            yearly_costs_reported=ctx.multiply(calc_input.monthly_costs, TWELVE),
            yearly_income_reported=yearly_revenue, # taxable base is revenue
            monthly_social=monthly_social,
            monthly_health=monthly_health,
            yearly_tax=yearly_tax,
        )

    def compare_all_forms(self, calc_input: CalculationInput) -> Optional[ComparisonResult]:
        """
        Evaluates every applicable variant and picks the lowest yearly burden.
        The IP variant is part of the set only when the input asks for it;
        the plain flat-rate variant is always evaluated at 19%.
        """
        if calc_input.monthly_revenue <= ZERO:
            return None

        flat_input = calc_input.model_copy(update={"use_ip_box": False}) if calc_input.use_ip_box else calc_input
        results: Dict[TaxForm, YearlyResult] = {
            TaxForm.SCALE: self.calculate_scale(calc_input),
            TaxForm.LINEAR: self.calculate_linear(flat_input),
        }
        if calc_input.use_ip_box:
            results[TaxForm.LINEAR_IP_BOX] = self.calculate_linear(calc_input)
        results[TaxForm.RYCZALT] = self.calculate_ryczalt(calc_input)

        best: Optional[TaxForm] = None
        for tax_form in VARIANT_ORDER:
            if tax_form not in results:
                continue
            if best is None or results[tax_form].yearly.total_burden < results[best].yearly.total_burden:
                best = tax_form

        best_burden = results[best].yearly.total_burden
        savings = {
            tax_form: self.ctx.subtract(result.yearly.total_burden, best_burden)
            for tax_form, result in results.items()
        }
        logger.debug(f"Best JDG variant: {best.value} with yearly burden {best_burden}")
        return ComparisonResult(results=results, best=best, savings=savings)


def calculate_scale(calc_input: CalculationInput, rate_table: Optional[RateTable] = None) -> Optional[YearlyResult]:
    return JdgEngine(rate_table).calculate_scale(calc_input)

def calculate_linear(calc_input: CalculationInput, rate_table: Optional[RateTable] = None) -> Optional[YearlyResult]:
    return JdgEngine(rate_table).calculate_linear(calc_input)

def calculate_ryczalt(calc_input: CalculationInput, rate_table: Optional[RateTable] = None) -> Optional[YearlyResult]:
    return JdgEngine(rate_table).calculate_ryczalt(calc_input)

def compare_all_forms(calc_input: CalculationInput, rate_table: Optional[RateTable] = None) -> Optional[ComparisonResult]:
    return JdgEngine(rate_table).compare_all_forms(calc_input)
