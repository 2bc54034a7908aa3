# pl_business_tax/domain/__init__.py
# This file can be empty or used to make imports easier.

# Example (optional):
# from .enums import TaxForm, ContributionBase, LumpSumCategory, CitRate, PayoutStrategy, BusinessForm
# from .inputs import CalculationInput, SpzooCalculationInput
# from .rate_table import RateTable, HealthTier, get_rate_table
# from .results import YearlyResult, ComparisonResult, SpzooYearlyResult, SpzooComparisonResult
