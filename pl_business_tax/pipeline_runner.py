# pl_business_tax/pipeline_runner.py
import logging
from decimal import Decimal
from typing import Optional

import pl_business_tax.config as config

from pl_business_tax.domain.enums import CitRate
from pl_business_tax.domain.inputs import CalculationInput, SpzooCalculationInput
from pl_business_tax.domain.rate_table import RateTable, get_rate_table
from pl_business_tax.domain.results import (
    BusinessFormComparison, ComparisonResult, EmploymentComparison, EmploymentResult, RevenueSweep,
    SpzooComparisonResult
)
from pl_business_tax.engine.comparator import build_revenue_sweep, compare_b2b_vs_employment, compare_business_forms
from pl_business_tax.engine.employment import calculate_employment
from pl_business_tax.engine.jdg_engine import JdgEngine
from pl_business_tax.engine.spzoo_engine import SpzooEngine

logger = logging.getLogger(__name__)

class CalculationOutput:
    """
    Encapsulates the results of one calculation run.
    Comparisons are None when the entered revenue is not positive.
    """
    def __init__(self,
                 calculation_input: CalculationInput,
                 cit_rate: CitRate,
                 rate_table: RateTable,
                 jdg_comparison: Optional[ComparisonResult],
                 spzoo_comparison: Optional[SpzooComparisonResult],
                 business_form_comparison: Optional[BusinessFormComparison],
                 employment_result: Optional[EmploymentResult] = None,
                 employment_comparison: Optional[EmploymentComparison] = None,
                 revenue_sweep: Optional[RevenueSweep] = None):
        self.calculation_input = calculation_input
        self.cit_rate = cit_rate
        self.rate_table = rate_table
        self.tax_year = rate_table.tax_year
        self.jdg_comparison = jdg_comparison
        self.spzoo_comparison = spzoo_comparison
        self.business_form_comparison = business_form_comparison
        self.employment_result = employment_result
        self.employment_comparison = employment_comparison
        self.revenue_sweep = revenue_sweep


def run_calculation_pipeline(
    calculation_input: CalculationInput,
    cit_rate: CitRate = CitRate(config.DEFAULT_CIT_RATE),
    employment_gross: Optional[Decimal] = None,
    include_sweep: bool = False,
    tax_year: int = config.TAX_YEAR, # Allow override for testing
    rate_table: Optional[RateTable] = None
) -> CalculationOutput:
    """
    Runs every calculation for one set of inputs: JDG variants, Sp. z o.o.
    strategies, the cross-form comparison and, on request, the employment
    reference and the revenue sweep.
    """
    rate_table = rate_table or get_rate_table(tax_year)
    logger.info(f"Running calculations for tax year {rate_table.tax_year}...")

    logger.info("Comparing business forms and searching the Sp. z o.o. threshold...")
    business_form_comparison = compare_business_forms(calculation_input, cit_rate, rate_table)

    if business_form_comparison is not None:
        jdg_comparison = business_form_comparison.jdg
        spzoo_comparison = business_form_comparison.spzoo
    else:
        jdg_comparison = JdgEngine(rate_table).compare_all_forms(calculation_input)
        spzoo_comparison = SpzooEngine(rate_table).compare_scenarios(SpzooCalculationInput(
            monthly_revenue=calculation_input.monthly_revenue,
            monthly_operating_costs=calculation_input.monthly_costs,
            cit_rate=cit_rate,
        ))

    if jdg_comparison is None:
        logger.warning("Monthly revenue is not positive; no JDG results.")
    else:
        logger.info(f"JDG variants evaluated: {len(jdg_comparison.results)}; best is {jdg_comparison.best.value}.")
    if spzoo_comparison is not None:
        logger.info(f"Sp. z o.o. strategies evaluated; best is {spzoo_comparison.best.value}.")

    employment_result = None
    employment_comparison = None
    if employment_gross is not None:
        logger.info(f"Comparing B2B against an employment contract at gross {employment_gross}...")
        employment_result = calculate_employment(employment_gross, rate_table)
        employment_comparison = compare_b2b_vs_employment(employment_gross, calculation_input, rate_table)

    revenue_sweep = None
    if include_sweep:
        revenue_sweep = build_revenue_sweep(calculation_input, cit_rate, rate_table=rate_table)

    logger.info("Calculation pipeline completed.")
    return CalculationOutput(
        calculation_input=calculation_input,
        cit_rate=cit_rate,
        rate_table=rate_table,
        jdg_comparison=jdg_comparison,
        spzoo_comparison=spzoo_comparison,
        business_form_comparison=business_form_comparison,
        employment_result=employment_result,
        employment_comparison=employment_comparison,
        revenue_sweep=revenue_sweep,
    )
