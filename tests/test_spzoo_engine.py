"""
Sp. z o.o. Engine Tests

Executes specs/spzoo_scenarios.py and checks the invariants of the three
payout strategies: profits are reported clamped at zero, a full-salary
payout leaves no dividend, and the owner of a company without payroll
pays the self-employed contribution stack personally.
"""

import logging
import pytest
from decimal import Decimal

from pl_business_tax.domain.enums import CitRate, PayoutStrategy
from pl_business_tax.domain.inputs import SpzooCalculationInput
from pl_business_tax.engine.spzoo_engine import (
    STRATEGY_ORDER,
    SpzooEngine,
    calculate_dividend_only,
    calculate_full_salary,
    calculate_min_salary_plus_dividend,
    calculate_spzoo_scenario,
    compare_spzoo_scenarios,
)
from tests.specs.spzoo_scenarios import SPZOO_SCENARIOS
from tests.specs._schema import SpzooScenario
from tests.support.builders import make_spzoo_input


@pytest.mark.parametrize("scenario", SPZOO_SCENARIOS, ids=lambda s: s.id)
def test_spzoo_scenario(scenario: SpzooScenario, rate_table):
    comparison = compare_spzoo_scenarios(
        make_spzoo_input(
            monthly_revenue=scenario.monthly_revenue,
            monthly_operating_costs=scenario.monthly_operating_costs,
            cit_rate=scenario.cit_rate,
        ),
        rate_table,
    )
    assert comparison is not None

    for expected in scenario.expected:
        result = comparison.results[expected.payout_strategy]
        label = f"{scenario.id} {expected.payout_strategy.value}"
        assert result.payout_strategy == expected.payout_strategy
        assert result.cit_rate == scenario.cit_rate
        assert result.monthly.profit_before_tax == expected.monthly_profit_before_tax, f"{label} profit"
        assert result.monthly.corporate_tax == expected.monthly_corporate_tax, f"{label} CIT"
        assert result.monthly.dividend_tax == expected.monthly_dividend_tax, f"{label} dividend tax"
        assert result.monthly.owner_total_net == expected.monthly_owner_net, f"{label} monthly net"
        assert result.yearly.owner_total_net == expected.yearly_owner_net, f"{label} yearly net"
        if expected.yearly_total_tax_burden is not None:
            assert result.yearly.total_tax_burden == expected.yearly_total_tax_burden, f"{label} burden"

    assert comparison.best == scenario.expected_best
    assert comparison.best_net_amount == comparison.best_result.yearly.owner_total_net


class TestDividendOnly:

    def test_owner_pays_mandatory_contributions(self, rate_table):
        result = calculate_dividend_only(make_spzoo_input(), rate_table)
        assert result.payout_strategy == PayoutStrategy.DIVIDEND_ONLY
        assert result.monthly.owner_mandatory_contributions == Decimal("2193.92")
        assert result.monthly.owner_net_salary == Decimal("0.00")
        assert result.monthly.employment_costs == Decimal("0.00")
        assert result.monthly.owner_net_dividend == Decimal("8255.52")

    def test_owner_net_never_negative(self, rate_table):
        result = calculate_dividend_only(make_spzoo_input(monthly_revenue="4000", monthly_operating_costs="3500"), rate_table)
        assert result.monthly.profit_before_tax == Decimal("0.00")
        assert result.monthly.owner_total_net == Decimal("0.00")

    def test_mandatory_contributions_constant(self, rate_table):
        assert SpzooEngine(rate_table).owner_mandatory_contributions() == Decimal("2193.91542")


class TestMinSalaryPlusDividend:

    def test_payroll_at_minimum_wage(self, rate_table):
        result = calculate_min_salary_plus_dividend(make_spzoo_input(), rate_table)
        assert result.monthly.employment_costs == Decimal("5621.60")
        assert result.monthly.owner_net_salary == Decimal("3510.77")
        assert result.monthly.owner_mandatory_contributions == Decimal("0.00")

    def test_loss_keeps_the_salary(self, rate_table):
        result = calculate_min_salary_plus_dividend(make_spzoo_input(monthly_revenue="5000"), rate_table)
        assert result.monthly.profit_before_tax == Decimal("0.00")
        assert result.monthly.owner_net_dividend == Decimal("0.00")
        assert result.monthly.owner_total_net == Decimal("3510.77")


class TestFullSalary:

    def test_no_dividend_and_owner_net_equals_salary(self, rate_table):
        result = calculate_full_salary(make_spzoo_input(), rate_table)
        assert result.payout_strategy == PayoutStrategy.FULL_SALARY
        assert result.monthly.dividend_tax == Decimal("0.00")
        assert result.monthly.owner_net_dividend == Decimal("0.00")
        assert result.monthly.owner_total_net == result.monthly.owner_net_salary

    def test_payroll_absorbs_the_profit(self, rate_table):
        result = calculate_full_salary(make_spzoo_input(), rate_table)
        # 15 000 - 3 000 - 800 accounting leaves 11 200 for gross pay plus employer contributions
        assert abs(result.monthly.employment_costs - Decimal("11200")) <= Decimal("0.01")
        assert result.monthly.profit_before_tax <= Decimal("0.01")
        assert result.monthly.corporate_tax <= Decimal("0.01")

    def test_nothing_to_pay_out(self, rate_table):
        result = calculate_full_salary(make_spzoo_input(monthly_revenue="3500"), rate_table)
        assert result.monthly.employment_costs == Decimal("0.00")
        assert result.monthly.owner_total_net == Decimal("0.00")


class TestDispatchAndComparison:

    @pytest.mark.parametrize("strategy", list(PayoutStrategy))
    def test_scenario_dispatches_on_strategy(self, rate_table, strategy):
        result = calculate_spzoo_scenario(make_spzoo_input(payout_strategy=strategy), rate_table)
        assert result.payout_strategy == strategy

    def test_specific_calculator_overrides_input_strategy(self, rate_table):
        spzoo_input = make_spzoo_input(payout_strategy=PayoutStrategy.FULL_SALARY)
        assert calculate_dividend_only(spzoo_input, rate_table).payout_strategy == PayoutStrategy.DIVIDEND_ONLY

    def test_unknown_strategy_raises(self, rate_table):
        spzoo_input = SpzooCalculationInput.model_construct(
            monthly_revenue=Decimal("15000"),
            monthly_operating_costs=Decimal("3000"),
            cit_rate=CitRate.SMALL,
            payout_strategy="bonus_only",
        )
        with pytest.raises(ValueError, match="Unknown payout strategy"):
            SpzooEngine(rate_table).calculate_scenario(spzoo_input)

    def test_every_strategy_compared_in_order(self, rate_table):
        comparison = compare_spzoo_scenarios(make_spzoo_input(), rate_table)
        assert list(comparison.results) == STRATEGY_ORDER

    def test_results_are_read_only(self, rate_table):
        comparison = compare_spzoo_scenarios(make_spzoo_input(), rate_table)
        with pytest.raises(TypeError):
            del comparison.results[comparison.best]
        assert comparison.best in comparison.results

    def test_best_is_maximum_owner_net(self, rate_table):
        comparison = compare_spzoo_scenarios(make_spzoo_input(monthly_revenue="40000"), rate_table)
        nets = [r.yearly.owner_total_net for r in comparison.results.values()]
        assert comparison.best_net_amount == max(nets)

    def test_standard_cit_never_beats_small_cit(self, rate_table):
        small = compare_spzoo_scenarios(make_spzoo_input(cit_rate=CitRate.SMALL), rate_table)
        standard = compare_spzoo_scenarios(make_spzoo_input(cit_rate=CitRate.STANDARD), rate_table)
        assert standard.best_net_amount <= small.best_net_amount

    @pytest.mark.parametrize("operation", [
        calculate_dividend_only, calculate_min_salary_plus_dividend, calculate_full_salary,
        calculate_spzoo_scenario, compare_spzoo_scenarios,
    ])
    def test_zero_revenue_yields_none(self, rate_table, operation):
        assert operation(make_spzoo_input(monthly_revenue="0"), rate_table) is None

    def test_small_cit_above_limit_warns(self, rate_table, caplog):
        with caplog.at_level(logging.WARNING, logger="pl_business_tax.engine.spzoo_engine"):
            result = calculate_dividend_only(make_spzoo_input(monthly_revenue="800000"), rate_table)
        assert result is not None
        assert "small-taxpayer limit" in caplog.text

    def test_yearly_figures_are_twelve_months(self, rate_table):
        result = calculate_min_salary_plus_dividend(make_spzoo_input(), rate_table)
        assert result.yearly.revenue == Decimal("180000.00")
        assert result.yearly.accounting_cost == Decimal("9600.00")
        assert result.yearly.operating_costs == Decimal("36000.00")
