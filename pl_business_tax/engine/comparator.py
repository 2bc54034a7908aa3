# pl_business_tax/engine/comparator.py
import logging
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pl_business_tax.domain.enums import BusinessForm, CitRate, TaxForm
from pl_business_tax.domain.inputs import CalculationInput, SpzooCalculationInput
from pl_business_tax.domain.rate_table import RateTable, get_rate_table
from pl_business_tax.domain.results import BusinessFormComparison, EmploymentComparison, RevenueSweep, SweepPoint
from pl_business_tax.engine.employment import calculate_employment_net
from pl_business_tax.engine.jdg_engine import JdgEngine
from pl_business_tax.engine.spzoo_engine import SpzooEngine
from pl_business_tax.utils.tax_utils import ZERO, make_calculation_context
from pl_business_tax.utils.type_utils import safe_decimal
import pl_business_tax.config as global_config

logger = logging.getLogger(__name__)

HUNDRED = Decimal('100')


def _with_revenue(jdg_input: CalculationInput, monthly_revenue: Decimal, **changes: Any) -> CalculationInput:
    """Copy of jdg_input at another revenue level; runs the input validators again."""
    return CalculationInput.model_validate({**jdg_input.model_dump(), "monthly_revenue": monthly_revenue, **changes})


def _sweep_amount(value: Any, name: str) -> Decimal:
    amount = safe_decimal(value)
    if amount is None or not amount.is_finite():
        raise ValueError(f"Sweep {name} must be a finite number, got {value!r}")
    return amount


def _spzoo_input_for(jdg_input: CalculationInput, cit_rate: CitRate, monthly_revenue: Optional[Decimal] = None) -> SpzooCalculationInput:
    return SpzooCalculationInput(
        monthly_revenue=jdg_input.monthly_revenue if monthly_revenue is None else monthly_revenue,
        monthly_operating_costs=jdg_input.monthly_costs,
        cit_rate=cit_rate,
    )


def compare_business_forms(jdg_input: CalculationInput,
                           cit_rate: CitRate,
                           rate_table: Optional[RateTable] = None) -> Optional[BusinessFormComparison]:
    """
    Best JDG variant against the best Sp. z o.o. payout strategy at the same
    revenue and costs. JDG wins ties. Also reports the monthly revenue from
    which the company would match the best JDG net.
    """
    rt = rate_table or get_rate_table(global_config.TAX_YEAR)
    ctx = make_calculation_context()
    jdg_engine = JdgEngine(rt)
    spzoo_engine = SpzooEngine(rt)

    jdg = jdg_engine.compare_all_forms(jdg_input)
    spzoo = spzoo_engine.compare_scenarios(_spzoo_input_for(jdg_input, cit_rate))
    if jdg is None or spzoo is None:
        return None

    jdg_net = jdg.best_result.yearly.net_amount
    spzoo_net = spzoo.best_net_amount
    winner = BusinessForm.JDG if jdg_net >= spzoo_net else BusinessForm.SPZOO
    difference = ctx.abs(ctx.subtract(jdg_net, spzoo_net))

    loser_net = spzoo_net if winner == BusinessForm.JDG else jdg_net
    if loser_net == ZERO:
        difference_pct = None
    else:
        difference_pct = ctx.multiply(ctx.divide(difference, ctx.abs(loser_net)), HUNDRED).quantize(
            global_config.OUTPUT_PRECISION_AMOUNTS, context=ctx
        )

    threshold = spzoo_engine.search_threshold(
        jdg.best_result.monthly.net_amount, jdg_input.monthly_costs, cit_rate
    ).threshold
    above_threshold = threshold is not None and jdg_input.monthly_revenue >= threshold

    logger.debug(
        f"JDG ({jdg.best.value}) {jdg_net} vs Sp. z o.o. ({spzoo.best.value}) {spzoo_net}: "
        f"winner {winner.value}, threshold {threshold}"
    )
    return BusinessFormComparison(
        jdg=jdg,
        spzoo=spzoo,
        winner=winner,
        jdg_yearly_net=jdg_net,
        spzoo_yearly_net=spzoo_net,
        difference=difference,
        difference_pct=difference_pct,
        spzoo_threshold=threshold,
        above_threshold=above_threshold,
    )


def compare_b2b_vs_employment(employment_gross: Any,
                              jdg_input: CalculationInput,
                              rate_table: Optional[RateTable] = None) -> EmploymentComparison:
    """
    Employment net against the best JDG monthly net, both at the entered
    B2B revenue and at a B2B revenue equal to the employment gross with no costs.
    """
    rt = rate_table or get_rate_table(global_config.TAX_YEAR)
    ctx = make_calculation_context()
    jdg_engine = JdgEngine(rt)

    employment_net = calculate_employment_net(employment_gross, rt)
    gross = safe_decimal(employment_gross, default=ZERO)

    jdg = jdg_engine.compare_all_forms(jdg_input)
    b2b_net = jdg.best_result.monthly.net_amount if jdg is not None else ZERO

    at_gross = jdg_engine.compare_all_forms(
        _with_revenue(jdg_input, gross, monthly_costs=ZERO)
    ) if gross > ZERO else None
    b2b_net_at_gross = at_gross.best_result.monthly.net_amount if at_gross is not None else ZERO

    return EmploymentComparison(
        employment_gross=gross.quantize(global_config.OUTPUT_PRECISION_AMOUNTS, context=ctx),
        employment_net=employment_net,
        b2b_revenue=jdg_input.monthly_revenue,
        b2b_net=b2b_net,
        b2b_net_at_employment_gross=b2b_net_at_gross,
        difference=ctx.subtract(b2b_net, employment_net),
    )


def build_revenue_sweep(jdg_input: CalculationInput,
                        cit_rate: CitRate,
                        start: Any = global_config.SWEEP_START_REVENUE,
                        stop: Any = global_config.SWEEP_STOP_REVENUE,
                        step: Any = global_config.SWEEP_STEP,
                        rate_table: Optional[RateTable] = None) -> RevenueSweep:
    """Monthly net per JDG variant and the best Sp. z o.o. net for each revenue level from start to stop inclusive."""
    start = _sweep_amount(start, "start")
    stop = _sweep_amount(stop, "stop")
    step = _sweep_amount(step, "step")
    if step <= ZERO:
        raise ValueError(f"Sweep step must be positive, got {step}")
    if stop < start:
        raise ValueError(f"Sweep stop {stop} is below start {start}")

    rt = rate_table or get_rate_table(global_config.TAX_YEAR)
    ctx = make_calculation_context()
    jdg_engine = JdgEngine(rt)
    spzoo_engine = SpzooEngine(rt)

    points: List[SweepPoint] = []
    revenue = start
    while revenue <= stop:
        jdg = jdg_engine.compare_all_forms(_with_revenue(jdg_input, revenue))
        spzoo = spzoo_engine.compare_scenarios(_spzoo_input_for(jdg_input, cit_rate, revenue))

        jdg_net: Dict[TaxForm, Decimal] = {}
        if jdg is not None:
            jdg_net = {tax_form: result.monthly.net_amount for tax_form, result in jdg.results.items()}
        spzoo_net = spzoo.best_result.monthly.owner_total_net if spzoo is not None else ZERO

        points.append(SweepPoint(monthly_revenue=revenue, jdg_net=jdg_net, spzoo_net=spzoo_net))
        revenue = ctx.add(revenue, step)

    logger.info(f"Revenue sweep computed for {len(points)} revenue levels ({start} to {stop}, step {step}).")
    return tuple(points)
