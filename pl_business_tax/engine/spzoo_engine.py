# pl_business_tax/engine/spzoo_engine.py
import logging
from dataclasses import dataclass
from decimal import Decimal
from typing import Dict, List, Optional

from pl_business_tax.domain.enums import CitRate, ContributionBase, PayoutStrategy, ThresholdSearchStatus
from pl_business_tax.domain.inputs import SpzooCalculationInput
from pl_business_tax.domain.rate_table import RateTable, get_rate_table
from pl_business_tax.domain.results import (
    SpzooComparisonResult, SpzooMonthlyBreakdown, SpzooYearlyFigures, SpzooYearlyResult, ThresholdSearch
)
from pl_business_tax.engine.contributions import monthly_social_contributions
from pl_business_tax.engine import payroll
from pl_business_tax.utils.tax_utils import ZERO, TWELVE, clamp_non_negative, make_calculation_context
import pl_business_tax.config as global_config

logger = logging.getLogger(__name__)

STRATEGY_ORDER: List[PayoutStrategy] = [
    PayoutStrategy.DIVIDEND_ONLY,
    PayoutStrategy.MIN_SALARY_PLUS_DIVIDEND,
    PayoutStrategy.FULL_SALARY,
]


@dataclass
class _MonthlyFlows:
    """Full-precision monthly figures of one payout strategy, before rounding."""
    employment_costs: Decimal = ZERO
    profit_before_tax: Decimal = ZERO
    corporate_tax: Decimal = ZERO
    profit_after_tax: Decimal = ZERO
    dividend_tax: Decimal = ZERO
    owner_net_salary: Decimal = ZERO
    owner_net_dividend: Decimal = ZERO
    owner_total_net: Decimal = ZERO
    owner_mandatory_contributions: Decimal = ZERO
    total_tax_burden: Decimal = ZERO


class SpzooEngine:
    """Owner take-home pay from a single-shareholder Sp. z o.o. under each payout strategy."""

    def __init__(self, rate_table: Optional[RateTable] = None):
        self.rate_table = rate_table or get_rate_table(global_config.TAX_YEAR)
        self.ctx = make_calculation_context()
        self.TWO_PLACES = global_config.OUTPUT_PRECISION_AMOUNTS
        self.RATE_PLACES = global_config.OUTPUT_PRECISION_RATES

    def owner_mandatory_contributions(self) -> Decimal:
        """Full standard social stack (with sickness and labour fund) plus the minimum health contribution."""
        social = monthly_social_contributions(ContributionBase.STANDARD, self.rate_table, pays_sickness=True, ctx=self.ctx)
        return self.ctx.add(social, self.rate_table.health_floor)

    def _salary_deductions(self, gross: Decimal) -> Dict[str, Decimal]:
        rt, ctx = self.rate_table, self.ctx
        return {
            "employee_social": payroll.employee_social_contributions(gross, rt, ctx),
            "employer": payroll.employer_contributions(gross, rt, ctx),
            "health": payroll.employee_health_contribution(gross, rt, ctx),
            "income_tax": payroll.employee_income_tax(gross, rt, ctx),
            "net": payroll.net_salary(gross, rt, ctx),
            "employment_cost": payroll.total_employment_cost(gross, rt, ctx),
        }

    def _dividend_only(self, spzoo_input: SpzooCalculationInput, cit: Decimal) -> _MonthlyFlows:
        ctx, rt = self.ctx, self.rate_table
        profit = ctx.subtract(ctx.subtract(spzoo_input.monthly_revenue, spzoo_input.monthly_operating_costs),
                              rt.company_accounting_cost)
        corporate_tax = ctx.multiply(clamp_non_negative(profit), cit)
        after_tax = ctx.subtract(profit, corporate_tax)
        dividend_tax = ctx.multiply(clamp_non_negative(after_tax), rt.dividend_tax_rate)
        net_dividend = clamp_non_negative(ctx.subtract(after_tax, dividend_tax))

        # Without payroll the owner pays the full self-employed stack personally
        mandatory = self.owner_mandatory_contributions()
        owner_net = clamp_non_negative(ctx.subtract(net_dividend, mandatory))
        burden = ctx.add(ctx.add(corporate_tax, dividend_tax), ctx.add(mandatory, rt.company_accounting_cost))

        return _MonthlyFlows(
            profit_before_tax=profit,
            corporate_tax=corporate_tax,
            profit_after_tax=after_tax,
            dividend_tax=dividend_tax,
            owner_net_dividend=net_dividend,
            owner_total_net=owner_net,
            owner_mandatory_contributions=mandatory,
            total_tax_burden=burden,
        )

    def _min_salary_plus_dividend(self, spzoo_input: SpzooCalculationInput, cit: Decimal) -> _MonthlyFlows:
        ctx, rt = self.ctx, self.rate_table
        salary = self._salary_deductions(rt.minimum_wage)

        profit = ctx.subtract(
            ctx.subtract(spzoo_input.monthly_revenue, spzoo_input.monthly_operating_costs),
            ctx.add(salary["employment_cost"], rt.company_accounting_cost),
        )
        corporate_tax = ctx.multiply(clamp_non_negative(profit), cit)
        after_tax = clamp_non_negative(ctx.subtract(profit, corporate_tax))
        dividend_tax = ctx.multiply(after_tax, rt.dividend_tax_rate)
        net_dividend = ctx.subtract(after_tax, dividend_tax)
        owner_net = clamp_non_negative(ctx.add(salary["net"], net_dividend))

        burden = ZERO
        for component in (salary["employee_social"], salary["employer"], salary["health"], salary["income_tax"],
                          corporate_tax, dividend_tax, rt.company_accounting_cost):
            burden = ctx.add(burden, component)

        return _MonthlyFlows(
            employment_costs=salary["employment_cost"],
            profit_before_tax=profit,
            corporate_tax=corporate_tax,
            profit_after_tax=after_tax,
            dividend_tax=dividend_tax,
            owner_net_salary=salary["net"],
            owner_net_dividend=net_dividend,
            owner_total_net=owner_net,
            total_tax_burden=burden,
        )

    def _full_salary(self, spzoo_input: SpzooCalculationInput, cit: Decimal) -> _MonthlyFlows:
        ctx, rt = self.ctx, self.rate_table
        available = ctx.subtract(ctx.subtract(spzoo_input.monthly_revenue, spzoo_input.monthly_operating_costs),
                                 rt.company_accounting_cost)
        # Largest gross whose total employment cost fits in the available profit
        gross = clamp_non_negative(ctx.divide(available, ctx.add(Decimal(1), rt.employer_contribution_rate)))
        salary = self._salary_deductions(gross)

        residual = clamp_non_negative(ctx.subtract(available, salary["employment_cost"]))
        corporate_tax = ctx.multiply(residual, cit)
        after_tax = clamp_non_negative(ctx.subtract(residual, corporate_tax))

        burden = ZERO
        for component in (salary["employee_social"], salary["employer"], salary["health"], salary["income_tax"],
                          corporate_tax, rt.company_accounting_cost):
            burden = ctx.add(burden, component)

        return _MonthlyFlows(
            employment_costs=salary["employment_cost"],
            profit_before_tax=residual,
            corporate_tax=corporate_tax,
            profit_after_tax=after_tax,
            owner_net_salary=salary["net"],
            owner_total_net=salary["net"],
            total_tax_burden=burden,
        )

    def _build_result(self, spzoo_input: SpzooCalculationInput, flows: _MonthlyFlows) -> SpzooYearlyResult:
        ctx = self.ctx
        q = lambda value: value.quantize(self.TWO_PLACES, context=ctx)
        y = lambda value: q(ctx.multiply(value, TWELVE))

        profit_before_tax = clamp_non_negative(flows.profit_before_tax)
        profit_after_tax = clamp_non_negative(flows.profit_after_tax)
        accounting = self.rate_table.company_accounting_cost

        yearly_revenue = ctx.multiply(spzoo_input.monthly_revenue, TWELVE)
        yearly_burden = ctx.multiply(flows.total_tax_burden, TWELVE)
        effective_rate = ctx.divide(yearly_burden, yearly_revenue) if yearly_revenue > ZERO else ZERO

        return SpzooYearlyResult(
            payout_strategy=spzoo_input.payout_strategy,
            cit_rate=spzoo_input.cit_rate,
            monthly=SpzooMonthlyBreakdown(
                company_revenue=q(spzoo_input.monthly_revenue),
                operating_costs=q(spzoo_input.monthly_operating_costs),
                employment_costs=q(flows.employment_costs),
                profit_before_tax=q(profit_before_tax),
                corporate_tax=q(flows.corporate_tax),
                profit_after_tax=q(profit_after_tax),
                dividend_tax=q(flows.dividend_tax),
                owner_net_salary=q(flows.owner_net_salary),
                owner_net_dividend=q(flows.owner_net_dividend),
                owner_total_net=q(flows.owner_total_net),
                owner_mandatory_contributions=q(flows.owner_mandatory_contributions),
                accounting_cost=q(accounting),
            ),
            yearly=SpzooYearlyFigures(
                revenue=q(yearly_revenue),
                operating_costs=y(spzoo_input.monthly_operating_costs),
                employment_costs=y(flows.employment_costs),
                profit_before_tax=y(profit_before_tax),
                corporate_tax=y(flows.corporate_tax),
                profit_after_tax=y(profit_after_tax),
                dividend_tax=y(flows.dividend_tax),
                owner_net_salary=y(flows.owner_net_salary),
                owner_net_dividend=y(flows.owner_net_dividend),
                owner_total_net=y(flows.owner_total_net),
                owner_mandatory_contributions=y(flows.owner_mandatory_contributions),
                accounting_cost=y(accounting),
                total_tax_burden=q(yearly_burden),
            ),
            effective_rate=effective_rate.quantize(self.RATE_PLACES, context=ctx),
        )

    def calculate_scenario(self, spzoo_input: SpzooCalculationInput) -> Optional[SpzooYearlyResult]:
        """Dispatches on spzoo_input.payout_strategy. Non-positive revenue yields None."""
        if spzoo_input.monthly_revenue <= ZERO:
            logger.debug(f"Non-positive revenue; no {spzoo_input.payout_strategy.value} result.")
            return None

        yearly_revenue = self.ctx.multiply(spzoo_input.monthly_revenue, TWELVE)
        if spzoo_input.cit_rate == CitRate.SMALL and yearly_revenue > self.rate_table.cit_small_taxpayer_limit:
            logger.warning(
                f"Yearly revenue {yearly_revenue} exceeds the small-taxpayer limit "
                f"{self.rate_table.cit_small_taxpayer_limit}; the small CIT rate is applied as requested."
            )
        cit = self.rate_table.cit_rate_for(spzoo_input.cit_rate)

        if spzoo_input.payout_strategy == PayoutStrategy.DIVIDEND_ONLY:
            flows = self._dividend_only(spzoo_input, cit)
        elif spzoo_input.payout_strategy == PayoutStrategy.MIN_SALARY_PLUS_DIVIDEND:
            flows = self._min_salary_plus_dividend(spzoo_input, cit)
        elif spzoo_input.payout_strategy == PayoutStrategy.FULL_SALARY:
            flows = self._full_salary(spzoo_input, cit)
        else:
            raise ValueError(f"Unknown payout strategy: {spzoo_input.payout_strategy!r}")

        logger.debug(
            f"{spzoo_input.payout_strategy.value}: profit {flows.profit_before_tax}, CIT {flows.corporate_tax}, "
            f"owner net {flows.owner_total_net}/month"
        )
        return self._build_result(spzoo_input, flows)

    def _with_strategy(self, spzoo_input: SpzooCalculationInput, strategy: PayoutStrategy) -> Optional[SpzooYearlyResult]:
        return self.calculate_scenario(spzoo_input.model_copy(update={"payout_strategy": strategy}))

    def calculate_dividend_only(self, spzoo_input: SpzooCalculationInput) -> Optional[SpzooYearlyResult]:
        return self._with_strategy(spzoo_input, PayoutStrategy.DIVIDEND_ONLY)

    def calculate_min_salary_plus_dividend(self, spzoo_input: SpzooCalculationInput) -> Optional[SpzooYearlyResult]:
        return self._with_strategy(spzoo_input, PayoutStrategy.MIN_SALARY_PLUS_DIVIDEND)

    def calculate_full_salary(self, spzoo_input: SpzooCalculationInput) -> Optional[SpzooYearlyResult]:
        return self._with_strategy(spzoo_input, PayoutStrategy.FULL_SALARY)

    def compare_scenarios(self, spzoo_input: SpzooCalculationInput) -> Optional[SpzooComparisonResult]:
        """Strict maximum of yearly owner net; ties go to the strategy listed first."""
        if spzoo_input.monthly_revenue <= ZERO:
            return None

        results = {strategy: self._with_strategy(spzoo_input, strategy) for strategy in STRATEGY_ORDER}
        best: Optional[PayoutStrategy] = None
        for strategy in STRATEGY_ORDER:
            if best is None or results[strategy].yearly.owner_total_net > results[best].yearly.owner_total_net:
                best = strategy

        return SpzooComparisonResult(
            results=results,
            best=best,
            best_net_amount=results[best].yearly.owner_total_net,
        )

    def _best_monthly_net(self, monthly_revenue: Decimal, monthly_operating_costs: Decimal, cit_rate: CitRate) -> Decimal:
        comparison = self.compare_scenarios(SpzooCalculationInput(
            monthly_revenue=monthly_revenue,
            monthly_operating_costs=monthly_operating_costs,
            cit_rate=cit_rate,
        ))
        if comparison is None:
            return ZERO
        return self.ctx.divide(comparison.best_net_amount, TWELVE)

    def search_threshold(self,
                         target_monthly_net: Decimal,
                         monthly_operating_costs: Decimal,
                         cit_rate: CitRate,
                         lower_bound: Decimal = global_config.THRESHOLD_SEARCH_LOWER_BOUND,
                         upper_bound: Decimal = global_config.THRESHOLD_SEARCH_UPPER_BOUND,
                         tolerance: Decimal = global_config.THRESHOLD_SEARCH_TOLERANCE) -> ThresholdSearch:
        """
        Bisects monthly revenue for the lowest level at which the best Sp. z o.o.
        strategy nets the owner at least target_monthly_net per month.

        The objective is checked for monotonicity on every sampled point and
        the final bracket is re-evaluated on both sides; any violation turns
        the outcome into NON_MONOTONIC rather than returning a midpoint that
        does not separate "below target" from "at/above target".
        """
        ctx = self.ctx
        objective = lambda revenue: self._best_monthly_net(revenue, monthly_operating_costs, cit_rate)

        def outcome(status: ThresholdSearchStatus, threshold: Optional[Decimal], iterations: int,
                    low: Decimal, high: Decimal) -> ThresholdSearch:
            return ThresholdSearch(
                threshold=threshold,
                status=status,
                target_monthly_net=target_monthly_net,
                iterations=iterations,
                lower_bound=low,
                upper_bound=high,
            )

        low, high = lower_bound, upper_bound
        low_value = objective(low)
        if low_value >= target_monthly_net:
            logger.debug(f"Target {target_monthly_net} already met at the lower bound {low}")
            return outcome(ThresholdSearchStatus.AT_LOWER_BOUND, low.quantize(self.TWO_PLACES, context=ctx), 0, low, high)

        high_value = objective(high)
        if high_value < low_value:
            logger.warning(f"Sp. z o.o. net falls from {low_value} at {low} to {high_value} at {high}; no threshold reported.")
            return outcome(ThresholdSearchStatus.NON_MONOTONIC, None, 0, low, high)
        if high_value < target_monthly_net:
            logger.info(f"Target {target_monthly_net} not reached at the upper bound {high} (best net {high_value}).")
            return outcome(ThresholdSearchStatus.UNREACHABLE, None, 0, low, high)

        iterations = 0
        while ctx.subtract(high, low) > tolerance:
            mid = ctx.divide(ctx.add(low, high), Decimal(2))
            mid_value = objective(mid)
            iterations += 1
            if mid_value < low_value or mid_value > high_value:
                logger.warning(
                    f"Sp. z o.o. net is not monotonic in revenue around {mid} "
                    f"({low_value} at {low}, {mid_value} at {mid}, {high_value} at {high}); no threshold reported."
                )
                return outcome(ThresholdSearchStatus.NON_MONOTONIC, None, iterations, low, high)
            if mid_value >= target_monthly_net:
                high, high_value = mid, mid_value
            else:
                low, low_value = mid, mid_value

        threshold = ctx.divide(ctx.add(low, high), Decimal(2)).quantize(self.TWO_PLACES, context=ctx)

        below = max(lower_bound, ctx.subtract(threshold, tolerance))
        above = min(upper_bound, ctx.add(threshold, tolerance))
        if not (objective(below) < target_monthly_net <= objective(above)):
            logger.warning(f"Threshold {threshold} does not bracket the target net {target_monthly_net}; no threshold reported.")
            return outcome(ThresholdSearchStatus.NON_MONOTONIC, None, iterations, low, high)

        logger.debug(f"Sp. z o.o. threshold {threshold} found after {iterations} iterations")
        return outcome(ThresholdSearchStatus.FOUND, threshold, iterations, low, high)


def calculate_dividend_only(spzoo_input: SpzooCalculationInput, rate_table: Optional[RateTable] = None) -> Optional[SpzooYearlyResult]:
    return SpzooEngine(rate_table).calculate_dividend_only(spzoo_input)

def calculate_min_salary_plus_dividend(spzoo_input: SpzooCalculationInput, rate_table: Optional[RateTable] = None) -> Optional[SpzooYearlyResult]:
    return SpzooEngine(rate_table).calculate_min_salary_plus_dividend(spzoo_input)

def calculate_full_salary(spzoo_input: SpzooCalculationInput, rate_table: Optional[RateTable] = None) -> Optional[SpzooYearlyResult]:
    return SpzooEngine(rate_table).calculate_full_salary(spzoo_input)

def calculate_spzoo_scenario(spzoo_input: SpzooCalculationInput, rate_table: Optional[RateTable] = None) -> Optional[SpzooYearlyResult]:
    return SpzooEngine(rate_table).calculate_scenario(spzoo_input)

def compare_spzoo_scenarios(spzoo_input: SpzooCalculationInput, rate_table: Optional[RateTable] = None) -> Optional[SpzooComparisonResult]:
    return SpzooEngine(rate_table).compare_scenarios(spzoo_input)

def search_spzoo_threshold(target_monthly_net: Decimal,
                           monthly_operating_costs: Decimal,
                           cit_rate: CitRate,
                           rate_table: Optional[RateTable] = None) -> ThresholdSearch:
    return SpzooEngine(rate_table).search_threshold(target_monthly_net, monthly_operating_costs, cit_rate)

def find_spzoo_threshold(target_monthly_net: Decimal,
                         monthly_operating_costs: Decimal,
                         cit_rate: CitRate,
                         rate_table: Optional[RateTable] = None) -> Optional[Decimal]:
    """Monthly revenue at which Sp. z o.o. matches target_monthly_net, or None if there is none in range."""
    return search_spzoo_threshold(target_monthly_net, monthly_operating_costs, cit_rate, rate_table).threshold
