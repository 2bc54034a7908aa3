# pl_business_tax/cli.py
import argparse
from typing import List, Optional

import pl_business_tax.config as config # For defaults
from pl_business_tax.domain.enums import CitRate, ContributionBase, LumpSumCategory

def parse_arguments(argv: Optional[List[str]] = None):
    """Parses command line arguments for the application."""
    parser = argparse.ArgumentParser(description="Polish business-form tax calculator (JDG, Sp. z o.o., employment)")

    # Business figures
    parser.add_argument("--revenue", default=str(config.DEFAULT_MONTHLY_REVENUE), help="Monthly net revenue in PLN.")
    parser.add_argument("--costs", default=str(config.DEFAULT_MONTHLY_COSTS), help="Monthly business costs in PLN.")

    # JDG options
    parser.add_argument("--contribution-base", choices=[c.value for c in ContributionBase], default=config.DEFAULT_CONTRIBUTION_BASE,
                        help="Social contribution (ZUS) base.")
    parser.add_argument("--lump-sum-category", choices=[c.value for c in LumpSumCategory], default=config.DEFAULT_LUMP_SUM_CATEGORY,
                        help="Activity category that determines the lump-sum rate.")
    parser.add_argument("--lump-sum-rate", default=None, help="Explicit lump-sum rate (e.g. 0.12). Overrides --lump-sum-category.")
    parser.add_argument("--no-sickness", dest="pays_sickness", action="store_false", help="Do not pay the voluntary sickness contribution.")
    parser.add_argument("--ip-box", action="store_true", help="Apply the 5%% IP rate in the flat-rate regime.")
    parser.add_argument("--notional-costs", action="store_true", help="Deduct 50%% notional costs instead of actual costs.")

    # Sp. z o.o. options
    parser.add_argument("--cit-rate", choices=[c.value for c in CitRate], default=config.DEFAULT_CIT_RATE, help="Corporate income tax rate.")

    # Additional comparisons and reports
    parser.add_argument("--employment-gross", default=None,
                        help=f"Compare against an employment contract with this monthly gross (e.g. {config.DEFAULT_EMPLOYMENT_GROSS}).")
    parser.add_argument("--sweep", action="store_true", help="Print monthly net income across a range of revenues.")
    parser.add_argument("--pdf-output-file", type=str, default=None, help="Filename for the PDF report.")
    parser.add_argument("--tax-year", type=int, default=config.TAX_YEAR, help="Fiscal year whose rates are used.")

    return parser.parse_args(argv)
