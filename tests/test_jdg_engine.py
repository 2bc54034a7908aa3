"""
JDG Engine Tests

This module executes the scenarios from specs/jdg_scenarios.py against the
JdgEngine and checks the regime-specific rules that hold for any input:

1. Best variant = strict minimum of yearly burden, ties to the first variant
2. Lump-sum tax is proportional to revenue and independent of costs
3. Net always subtracts the costs actually incurred
4. Non-positive revenue yields no result
"""

import logging
import pytest
from decimal import Decimal

from pl_business_tax.domain.enums import ContributionBase, TaxForm
from pl_business_tax.domain.results import YearlyResult
from pl_business_tax.engine.jdg_engine import (
    JdgEngine, VARIANT_ORDER, calculate_linear, calculate_ryczalt, calculate_scale, compare_all_forms
)
from tests.specs.jdg_scenarios import JDG_SCENARIOS
from tests.specs._schema import JdgScenario
from tests.support.builders import make_jdg_input


def _input_for(scenario: JdgScenario):
    return make_jdg_input(
        monthly_revenue=scenario.monthly_revenue,
        monthly_costs=scenario.monthly_costs,
        contribution_base=scenario.contribution_base,
        lump_sum_rate=scenario.lump_sum_rate,
        pays_sickness=scenario.pays_sickness,
        use_ip_box=scenario.use_ip_box,
    )


# =============================================================================
# Scenario tables
# =============================================================================

@pytest.mark.parametrize("scenario", JDG_SCENARIOS, ids=lambda s: s.id)
def test_jdg_scenario(scenario: JdgScenario, rate_table):
    comparison = compare_all_forms(_input_for(scenario), rate_table)
    assert comparison is not None

    for expected in scenario.expected:
        result = comparison.results[expected.tax_form]
        assert result.tax_form == expected.tax_form
        assert result.yearly.social_contributions == expected.yearly_social, f"{scenario.id} {expected.tax_form} social"
        assert result.yearly.health_contribution == expected.yearly_health, f"{scenario.id} {expected.tax_form} health"
        assert result.yearly.tax == expected.yearly_tax, f"{scenario.id} {expected.tax_form} tax"
        assert result.yearly.total_burden == expected.yearly_total_burden, f"{scenario.id} {expected.tax_form} burden"
        assert result.yearly.net_amount == expected.yearly_net, f"{scenario.id} {expected.tax_form} yearly net"
        assert result.monthly.net_amount == expected.monthly_net, f"{scenario.id} {expected.tax_form} monthly net"

    assert comparison.best == scenario.expected_best


# =============================================================================
# Individual regimes
# =============================================================================

class TestScale:

    def test_reference_income_and_costs(self, reference_input, rate_table):
        result = calculate_scale(reference_input, rate_table)
        assert result.tax_form == TaxForm.SCALE
        assert result.yearly.revenue == Decimal("180000.00")
        assert result.yearly.costs == Decimal("36000.00")
        assert result.yearly.income == Decimal("144000.00")
        assert result.effective_rate == Decimal("0.2444")

    def test_health_floor_applies_at_low_income(self, low_revenue_input, rate_table):
        result = calculate_scale(low_revenue_input, rate_table)
        assert result.monthly.health_contribution == Decimal("419.94")

    def test_loss_is_reported_unclamped(self, rate_table):
        result = calculate_scale(make_jdg_input(monthly_revenue="15000", monthly_costs="20000"), rate_table)
        assert result.yearly.income == Decimal("-60000.00")
        assert result.yearly.tax == Decimal("0.00")
        assert result.monthly.health_contribution == Decimal("419.94")
        assert result.yearly.net_amount < Decimal("-60000")

    def test_exemption_period_still_pays_health(self, rate_table):
        result = calculate_scale(make_jdg_input(contribution_base=ContributionBase.EXEMPTION_PERIOD), rate_table)
        assert result.yearly.social_contributions == Decimal("0.00")
        assert result.yearly.health_contribution > Decimal("0")


class TestLinear:

    def test_plain_flat_rate(self, reference_input, rate_table):
        result = calculate_linear(reference_input, rate_table)
        assert result.tax_form == TaxForm.LINEAR
        assert result.monthly.health_contribution == Decimal("501.08")

    def test_ip_rate_replaces_flat_rate(self, rate_table):
        result = calculate_linear(make_jdg_input(use_ip_box=True), rate_table)
        assert result.tax_form == TaxForm.LINEAR_IP_BOX
        assert result.yearly.tax == Decimal("6135.61")

    def test_notional_costs_change_only_the_deduction_basis(self, rate_table):
        calc_input = make_jdg_input(use_notional_costs=True)
        result = calculate_linear(calc_input, rate_table)
        assert result.yearly.costs == Decimal("90000.00")
        assert result.yearly.income == Decimal("90000.00")
        # Net still subtracts the 36 000 actually spent
        expected_net = result.yearly.revenue - Decimal("36000") - result.yearly.total_burden
        assert abs(result.yearly.net_amount - expected_net) <= Decimal("0.01")

    def test_notional_costs_lower_the_tax(self, reference_input, rate_table):
        actual = calculate_linear(reference_input, rate_table)
        notional = calculate_linear(make_jdg_input(use_notional_costs=True), rate_table)
        assert notional.yearly.tax < actual.yearly.tax


class TestRyczalt:

    def test_reference_tax(self, reference_input, rate_table):
        result = calculate_ryczalt(reference_input, rate_table)
        assert result.tax_form == TaxForm.RYCZALT
        assert result.yearly.tax == Decimal("21600.00")
        assert result.yearly.income == Decimal("180000.00")
        assert result.yearly.costs == Decimal("36000.00")

    def test_costs_do_not_change_tax_or_contributions(self, rate_table):
        with_costs = calculate_ryczalt(make_jdg_input(monthly_costs="3000"), rate_table)
        without_costs = calculate_ryczalt(make_jdg_input(monthly_costs="0"), rate_table)
        assert with_costs.yearly.tax == without_costs.yearly.tax
        assert with_costs.yearly.total_burden == without_costs.yearly.total_burden
        assert without_costs.yearly.net_amount - with_costs.yearly.net_amount == Decimal("36000.00")

    @pytest.mark.parametrize("revenue", ["4000", "15000", "33333.33"])
    def test_tax_proportional_to_revenue(self, rate_table, revenue):
        result = calculate_ryczalt(make_jdg_input(monthly_revenue=revenue, lump_sum_rate="0.085"), rate_table)
        expected = (Decimal(revenue) * 12 * Decimal("0.085")).quantize(Decimal("0.01"))
        assert result.yearly.tax == expected

    @pytest.mark.parametrize("monthly_revenue, expected_health", [
        ("5000", Decimal("461.66")),        # 60 000 a year, inclusive bound
        ("5000.01", Decimal("769.43")),
        ("25000", Decimal("769.43")),       # 300 000 a year
        ("25000.01", Decimal("1384.97")),
    ])
    def test_health_tier_boundaries(self, rate_table, monthly_revenue, expected_health):
        result = calculate_ryczalt(make_jdg_input(monthly_revenue=monthly_revenue), rate_table)
        assert result.monthly.health_contribution == expected_health

    def test_missing_rate_uses_default_category(self, rate_table, caplog):
        with caplog.at_level(logging.WARNING, logger="pl_business_tax.engine.jdg_engine"):
            result = calculate_ryczalt(make_jdg_input(lump_sum_rate=None), rate_table)
        assert result.yearly.tax == Decimal("21600.00")
        assert "No lump-sum rate given" in caplog.text

    def test_income_scaled_base_uses_revenue(self, rate_table):
        result = calculate_ryczalt(
            make_jdg_input(monthly_revenue="3000", monthly_costs="2900",
                           contribution_base=ContributionBase.INCOME_SCALED_REDUCED), rate_table
        )
        # 50% of 3 000 = 1 500 > reduced base 1 399,80; costs are ignored
        assert result.monthly.social_contributions == Decimal("474.60")


class TestCompareAllForms:

    def test_variant_set_without_ip(self, reference_input, rate_table):
        comparison = compare_all_forms(reference_input, rate_table)
        assert list(comparison.results) == [TaxForm.SCALE, TaxForm.LINEAR, TaxForm.RYCZALT]

    def test_variant_set_with_ip(self, rate_table):
        comparison = compare_all_forms(make_jdg_input(use_ip_box=True), rate_table)
        assert list(comparison.results) == [TaxForm.SCALE, TaxForm.LINEAR, TaxForm.LINEAR_IP_BOX, TaxForm.RYCZALT]
        assert comparison.results[TaxForm.LINEAR].yearly.tax == Decimal("23315.34")

    def test_best_is_minimum_burden(self, reference_input, rate_table):
        comparison = compare_all_forms(reference_input, rate_table)
        burdens = [r.yearly.total_burden for r in comparison.results.values()]
        assert comparison.best_result.yearly.total_burden == min(burdens)

    def test_savings_relative_to_best(self, reference_input, rate_table):
        comparison = compare_all_forms(reference_input, rate_table)
        assert comparison.savings[TaxForm.SCALE] == Decimal("0")
        assert comparison.savings[TaxForm.LINEAR] == Decimal("6616.19")
        assert comparison.savings[TaxForm.RYCZALT] == Decimal("8121.12")
        assert all(saving >= 0 for saving in comparison.savings.values())

    def test_result_mappings_are_read_only(self, reference_input, rate_table):
        comparison = compare_all_forms(reference_input, rate_table)
        with pytest.raises(TypeError):
            comparison.results[TaxForm.SCALE] = comparison.results[TaxForm.LINEAR]
        with pytest.raises(TypeError):
            comparison.savings[TaxForm.LINEAR] = Decimal("0")
        assert comparison.best_result.tax_form == TaxForm.SCALE

    def test_tie_goes_to_first_declared_variant(self, reference_input, rate_table, monkeypatch):
        scale = calculate_scale(reference_input, rate_table)

        def same_as_scale(self, calc_input):
            return YearlyResult(tax_form=TaxForm.RYCZALT, monthly=scale.monthly, yearly=scale.yearly,
                                effective_rate=scale.effective_rate)

        monkeypatch.setattr(JdgEngine, "calculate_ryczalt", same_as_scale)
        comparison = JdgEngine(rate_table).compare_all_forms(reference_input)
        assert comparison.best == TaxForm.SCALE

    def test_variant_order_constant(self):
        assert VARIANT_ORDER == [TaxForm.SCALE, TaxForm.LINEAR, TaxForm.LINEAR_IP_BOX, TaxForm.RYCZALT]


class TestNonPositiveRevenue:

    @pytest.mark.parametrize("operation", [calculate_scale, calculate_linear, calculate_ryczalt, compare_all_forms])
    def test_zero_revenue_yields_none(self, operation, rate_table):
        assert operation(make_jdg_input(monthly_revenue="0"), rate_table) is None

    def test_default_rate_table(self, reference_input):
        assert calculate_scale(reference_input).yearly.tax == Decimal("11667.93")
