# pl_business_tax/engine/__init__.py
from .jdg_engine import JdgEngine, calculate_scale, calculate_linear, calculate_ryczalt, compare_all_forms
from .spzoo_engine import (
    SpzooEngine,
    calculate_dividend_only,
    calculate_min_salary_plus_dividend,
    calculate_full_salary,
    calculate_spzoo_scenario,
    compare_spzoo_scenarios,
    search_spzoo_threshold,
    find_spzoo_threshold,
)
from .employment import calculate_employment, calculate_employment_net
from .comparator import compare_business_forms, compare_b2b_vs_employment, build_revenue_sweep
