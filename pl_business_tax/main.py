# pl_business_tax/main.py
import logging
import sys
from decimal import getcontext
from typing import List, Optional

from pydantic import ValidationError

# Configuration and CLI
import pl_business_tax.config as config
from pl_business_tax.cli import parse_arguments

# Core
from pl_business_tax.domain.enums import CitRate, ContributionBase, LumpSumCategory
from pl_business_tax.domain.inputs import CalculationInput
from pl_business_tax.domain.rate_table import RateTable, get_rate_table
from pl_business_tax.pipeline_runner import CalculationOutput, run_calculation_pipeline
from pl_business_tax.utils.type_utils import safe_decimal

# Reporting
from pl_business_tax.reporting.console_reporter import generate_console_report, print_revenue_sweep
from pl_business_tax.reporting.pdf_generator import PdfReportGenerator

logging.basicConfig(level=logging.INFO, format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
logger = logging.getLogger(__name__)


def setup_decimal_context():
    """Sets the global decimal precision and rounding mode."""
    getcontext().prec = config.INTERNAL_CALCULATION_PRECISION
    valid_rounding_modes = ["ROUND_CEILING", "ROUND_DOWN", "ROUND_FLOOR", "ROUND_HALF_DOWN",
                            "ROUND_HALF_EVEN", "ROUND_HALF_UP", "ROUND_UP", "ROUND_05UP"]
    rounding_mode_to_set = config.DECIMAL_ROUNDING_MODE
    if rounding_mode_to_set not in valid_rounding_modes:
        logger.warning(f"Invalid DECIMAL_ROUNDING_MODE '{rounding_mode_to_set}' in config. Using ROUND_HALF_UP as fallback.")
        rounding_mode_to_set = "ROUND_HALF_UP"

    getcontext().rounding = rounding_mode_to_set
    logger.info(f"Global decimal precision set to {getcontext().prec}, rounding mode to {getcontext().rounding}.")


def build_calculation_input(args, rate_table: RateTable) -> CalculationInput:
    """Turns parsed CLI arguments into a validated CalculationInput. Raises pydantic.ValidationError."""
    lump_sum_rate = args.lump_sum_rate
    if lump_sum_rate is None:
        lump_sum_rate = rate_table.lump_sum_rate_for(LumpSumCategory(args.lump_sum_category))
    return CalculationInput(
        monthly_revenue=args.revenue,
        monthly_costs=args.costs,
        contribution_base=ContributionBase(args.contribution_base),
        lump_sum_rate=lump_sum_rate,
        pays_sickness=args.pays_sickness,
        use_ip_box=args.ip_box,
        use_notional_costs=args.notional_costs,
    )


def main_application(argv: Optional[List[str]] = None):
    """
    Main application entry point.
    Parses arguments, runs the calculations, and generates reports.
    """
    args = parse_arguments(argv)
    setup_decimal_context()

    logger.info("Starting Polish business-form tax calculator...")

    try:
        rate_table = get_rate_table(args.tax_year)
    except ValueError as e:
        logger.critical(f"{e}. Exiting.")
        sys.exit(1)

    try:
        calculation_input = build_calculation_input(args, rate_table)
    except ValidationError as e:
        logger.critical(f"Invalid input: {e}. Exiting.")
        sys.exit(1)

    employment_gross = None
    if args.employment_gross is not None:
        employment_gross = safe_decimal(args.employment_gross)
        if employment_gross is None or not employment_gross.is_finite():
            logger.critical(f"Invalid --employment-gross value '{args.employment_gross}'. Exiting.")
            sys.exit(1)

    results: CalculationOutput = run_calculation_pipeline(
        calculation_input=calculation_input,
        cit_rate=CitRate(args.cit_rate),
        employment_gross=employment_gross,
        include_sweep=args.sweep,
        rate_table=rate_table,
    )

    generate_console_report(results)
    if results.revenue_sweep:
        print_revenue_sweep(results.revenue_sweep)

    if args.pdf_output_file:
        if results.jdg_comparison is None:
            logger.error(f"PDF report '{args.pdf_output_file}' cannot be generated because there are no results for a non-positive revenue.")
        else:
            logger.info(f"Generating PDF report to {args.pdf_output_file}...")
            pdf_generator = PdfReportGenerator(results, report_version=config.REPORT_VERSION)
            pdf_generator.generate_report(args.pdf_output_file)

    logger.info("Processing finished.")

if __name__ == "__main__":
    main_application()
