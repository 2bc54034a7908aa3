# tests/conftest.py
import pytest
from decimal import Decimal, getcontext, ROUND_HALF_UP # Default rounding for tests if config is invalid

from pl_business_tax import config as app_config
from pl_business_tax.domain.rate_table import RATE_TABLE_2025, RateTable
from pl_business_tax.domain.inputs import CalculationInput
from tests.support.builders import make_jdg_input


@pytest.fixture(scope="session", autouse=True)
def set_decimal_precision_session_wide():
    """
    Set global decimal precision and rounding for all tests in the session.
    This mirrors setup_decimal_context in main_application.
    """
    prec = app_config.INTERNAL_CALCULATION_PRECISION
    rounding_mode_str = app_config.DECIMAL_ROUNDING_MODE

    getcontext().prec = prec

    valid_rounding_modes = ["ROUND_CEILING", "ROUND_DOWN", "ROUND_FLOOR", "ROUND_HALF_DOWN",
                            "ROUND_HALF_EVEN", "ROUND_HALF_UP", "ROUND_UP", "ROUND_05UP"]
    if rounding_mode_str in valid_rounding_modes:
        getcontext().rounding = rounding_mode_str # type: ignore
    else:
        print(f"Warning: Invalid DECIMAL_ROUNDING_MODE '{rounding_mode_str}'. Using ROUND_HALF_UP for tests.")
        getcontext().rounding = ROUND_HALF_UP # type: ignore


@pytest.fixture
def rate_table() -> RateTable:
    return RATE_TABLE_2025


@pytest.fixture
def reference_input() -> CalculationInput:
    """15 000 PLN revenue, 3 000 PLN costs, standard ZUS with sickness, 12% lump sum."""
    return make_jdg_input()


@pytest.fixture
def low_revenue_input() -> CalculationInput:
    return make_jdg_input(monthly_revenue="5000")
