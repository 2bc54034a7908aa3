# pl_business_tax/config.py

from decimal import Decimal

# Fiscal year whose rate table is used when no table is injected
TAX_YEAR = 2025

# Numerical Precision
INTERNAL_CALCULATION_PRECISION = 28
DECIMAL_ROUNDING_MODE = "ROUND_HALF_UP" # Python's decimal module uses strings like 'ROUND_HALF_UP', 'ROUND_HALF_EVEN'

# Output precisions, applied only when a result is emitted
OUTPUT_PRECISION_AMOUNTS: Decimal = Decimal("0.01")
OUTPUT_PRECISION_RATES: Decimal = Decimal("0.0001") # effective tax rates

# Sp. z o.o. break-even search over monthly revenue (PLN)
THRESHOLD_SEARCH_LOWER_BOUND: Decimal = Decimal("5000")
THRESHOLD_SEARCH_UPPER_BOUND: Decimal = Decimal("100000")
THRESHOLD_SEARCH_TOLERANCE: Decimal = Decimal("100")

# Revenue sweep used for the net-income curve (monthly revenue, PLN, inclusive)
SWEEP_START_REVENUE: Decimal = Decimal("5000")
SWEEP_STOP_REVENUE: Decimal = Decimal("50000")
SWEEP_STEP: Decimal = Decimal("2500")

# CLI defaults
DEFAULT_MONTHLY_REVENUE: Decimal = Decimal("15000")
DEFAULT_MONTHLY_COSTS: Decimal = Decimal("3000")
DEFAULT_CONTRIBUTION_BASE = "standard"
DEFAULT_LUMP_SUM_CATEGORY = "it"
DEFAULT_CIT_RATE = "small"
DEFAULT_EMPLOYMENT_GROSS: Decimal = Decimal("15000")

# PDF report metadata
TAXPAYER_NAME = "Jan Kowalski"  # Placeholder - Please update
REPORT_VERSION = "v1.2.0"
