# pl_business_tax/engine/employment.py
import logging
from decimal import Decimal
from typing import Any, Optional

from pl_business_tax.domain.rate_table import RateTable, get_rate_table
from pl_business_tax.domain.results import EmploymentResult
from pl_business_tax.engine import payroll
from pl_business_tax.utils.tax_utils import ZERO, make_calculation_context
from pl_business_tax.utils.type_utils import safe_decimal
import pl_business_tax.config as global_config

logger = logging.getLogger(__name__)


def _gross_amount(gross_salary: Any) -> Decimal:
    gross = safe_decimal(gross_salary)
    if gross is None or not gross.is_finite():
        raise ValueError(f"gross_salary must be a finite number, got {gross_salary!r}")
    return gross


def calculate_employment(gross_salary: Any, rate_table: Optional[RateTable] = None) -> EmploymentResult:
    """
    Monthly employment-contract (umowa o pracę) breakdown for a gross salary.
    A non-positive gross yields an all-zero result.
    """
    rt = rate_table or get_rate_table(global_config.TAX_YEAR)
    ctx = make_calculation_context()
    TWO_PLACES = global_config.OUTPUT_PRECISION_AMOUNTS
    q = lambda value: value.quantize(TWO_PLACES, context=ctx)

    gross = _gross_amount(gross_salary)
    if gross <= ZERO:
        logger.debug(f"Non-positive gross salary {gross}; employment result is zero.")
        zero = q(ZERO)
        return EmploymentResult(
            gross_salary=zero,
            social_contributions=zero,
            health_contribution=zero,
            income_tax=zero,
            net_salary=zero,
            employer_contributions=zero,
            total_employer_cost=zero,
        )

    return EmploymentResult(
        gross_salary=q(gross),
        social_contributions=q(payroll.employee_social_contributions(gross, rt, ctx)),
        health_contribution=q(payroll.employee_health_contribution(gross, rt, ctx)),
        income_tax=q(payroll.employee_income_tax(gross, rt, ctx)),
        net_salary=q(payroll.net_salary(gross, rt, ctx)),
        employer_contributions=q(payroll.employer_contributions(gross, rt, ctx)),
        total_employer_cost=q(payroll.total_employment_cost(gross, rt, ctx)),
    )


def calculate_employment_net(gross_salary: Any, rate_table: Optional[RateTable] = None) -> Decimal:
    return calculate_employment(gross_salary, rate_table).net_salary
