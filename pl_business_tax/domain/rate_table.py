# pl_business_tax/domain/rate_table.py
"""
Year-scoped tax and contribution constants.

A RateTable is validated once when it is constructed and is read-only
afterwards. Engines receive the table they should use explicitly; the
module-level registry only supplies the default for a given fiscal year.
"""
import logging
from dataclasses import dataclass, field, fields
from decimal import Decimal
from types import MappingProxyType
from typing import Dict, Mapping, Optional, Tuple

from .enums import CitRate, LumpSumCategory

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class HealthTier:
    """Fixed monthly health contribution for lump-sum taxpayers up to a yearly revenue bound."""
    max_yearly_revenue: Optional[Decimal] # None = unbounded (last tier)
    monthly_amount: Decimal


@dataclass(frozen=True)
class RateTable:
    tax_year: int

    # Wage reference values
    projected_average_wage: Decimal
    minimum_wage: Decimal

    # Social contributions (ZUS) for the self-employed
    pension_rate: Decimal
    disability_rate: Decimal
    sickness_rate: Decimal
    accident_rate: Decimal
    labor_fund_rate: Decimal
    standard_base_ratio: Decimal # of projected average wage
    reduced_base_ratio: Decimal # of minimum wage
    income_scaled_ratio: Decimal # of average monthly income
    income_scaled_revenue_limit: Decimal # yearly revenue eligibility limit

    # Health contribution
    health_rate_scale: Decimal
    health_rate_linear: Decimal
    health_floor_ratio: Decimal # of minimum wage
    lump_sum_health_tiers: Tuple[HealthTier, ...]

    # Personal income tax
    tax_free_amount: Decimal
    tax_threshold: Decimal
    scale_lower_rate: Decimal
    scale_upper_rate: Decimal
    linear_rate: Decimal
    ip_box_rate: Decimal
    notional_cost_ratio: Decimal
    lump_sum_rates: Mapping[LumpSumCategory, Decimal]
    default_lump_sum_category: LumpSumCategory

    # Companies
    cit_small_rate: Decimal
    cit_standard_rate: Decimal
    cit_small_taxpayer_limit: Decimal # yearly revenue
    dividend_tax_rate: Decimal
    company_accounting_cost: Decimal # monthly

    # Payroll
    employee_pension_rate: Decimal
    employee_disability_rate: Decimal
    employee_sickness_rate: Decimal
    employee_health_rate: Decimal
    employee_monthly_cost_deduction: Decimal
    employer_pension_rate: Decimal
    employer_disability_rate: Decimal
    employer_accident_rate: Decimal
    employer_labor_fund_rate: Decimal
    employer_fgsp_rate: Decimal

    def __post_init__(self):
        for f in fields(self):
            if not (f.name.endswith("_rate") or f.name.endswith("_ratio")):
                continue
            value = getattr(self, f.name)
            if not isinstance(value, Decimal) or not value.is_finite() or not (Decimal(0) <= value <= Decimal(1)):
                raise ValueError(f"RateTable {self.tax_year}: {f.name} must be a Decimal in [0, 1], got {value!r}")

        for category, rate in self.lump_sum_rates.items():
            if not isinstance(rate, Decimal) or not (Decimal(0) <= rate <= Decimal(1)):
                raise ValueError(f"RateTable {self.tax_year}: lump-sum rate for {category.value} must be in [0, 1], got {rate!r}")
        if self.default_lump_sum_category not in self.lump_sum_rates:
            raise ValueError(f"RateTable {self.tax_year}: default lump-sum category {self.default_lump_sum_category.value} has no rate")

        if self.projected_average_wage <= 0 or self.minimum_wage <= 0:
            raise ValueError(f"RateTable {self.tax_year}: wages must be positive")
        if self.tax_free_amount >= self.tax_threshold:
            raise ValueError(
                f"RateTable {self.tax_year}: tax-free amount {self.tax_free_amount} must be below the bracket threshold {self.tax_threshold}"
            )
        if self.reduced_contribution_base > self.standard_contribution_base:
            raise ValueError(f"RateTable {self.tax_year}: reduced contribution base exceeds the standard base")

        if not self.lump_sum_health_tiers:
            raise ValueError(f"RateTable {self.tax_year}: at least one lump-sum health tier is required")
        previous_bound: Optional[Decimal] = None
        for index, tier in enumerate(self.lump_sum_health_tiers):
            is_last = index == len(self.lump_sum_health_tiers) - 1
            if tier.max_yearly_revenue is None:
                if not is_last:
                    raise ValueError(f"RateTable {self.tax_year}: only the last health tier may be unbounded")
                continue
            if previous_bound is not None and tier.max_yearly_revenue <= previous_bound:
                raise ValueError(f"RateTable {self.tax_year}: health tier bounds must be strictly increasing")
            previous_bound = tier.max_yearly_revenue
        if self.lump_sum_health_tiers[-1].max_yearly_revenue is not None:
            raise ValueError(f"RateTable {self.tax_year}: the last health tier must be unbounded")

    @property
    def standard_contribution_base(self) -> Decimal:
        return self.projected_average_wage * self.standard_base_ratio

    @property
    def reduced_contribution_base(self) -> Decimal:
        return self.minimum_wage * self.reduced_base_ratio

    @property
    def income_scaled_bounds(self) -> Tuple[Decimal, Decimal]:
        """(minimum, maximum) monthly base for the income-scaled contribution base."""
        return self.reduced_contribution_base, self.standard_contribution_base

    @property
    def health_floor(self) -> Decimal:
        return self.minimum_wage * self.health_floor_ratio

    @property
    def employee_social_rate(self) -> Decimal:
        return self.employee_pension_rate + self.employee_disability_rate + self.employee_sickness_rate

    @property
    def employer_contribution_rate(self) -> Decimal:
        return (self.employer_pension_rate + self.employer_disability_rate + self.employer_accident_rate
                + self.employer_labor_fund_rate + self.employer_fgsp_rate)

    def cit_rate_for(self, cit_rate: CitRate) -> Decimal:
        if cit_rate == CitRate.SMALL:
            return self.cit_small_rate
        return self.cit_standard_rate

    def lump_sum_rate_for(self, category: LumpSumCategory) -> Decimal:
        return self.lump_sum_rates[category]

    def lump_sum_health_for(self, yearly_revenue: Decimal) -> Decimal:
        """Monthly lump-sum health contribution; tier upper bounds are inclusive."""
        for tier in self.lump_sum_health_tiers:
            if tier.max_yearly_revenue is None or yearly_revenue <= tier.max_yearly_revenue:
                return tier.monthly_amount
        return self.lump_sum_health_tiers[-1].monthly_amount


D = Decimal

RATE_TABLE_2025 = RateTable(
    tax_year=2025,
    projected_average_wage=D("8673"),
    minimum_wage=D("4666"),
    pension_rate=D("0.1952"),
    disability_rate=D("0.08"),
    sickness_rate=D("0.0245"), # voluntary for JDG
    accident_rate=D("0.0167"), # average
    labor_fund_rate=D("0.0245"),
    standard_base_ratio=D("0.6"),
    reduced_base_ratio=D("0.3"),
    income_scaled_ratio=D("0.5"),
    income_scaled_revenue_limit=D("120000"),
    health_rate_scale=D("0.09"),
    health_rate_linear=D("0.049"),
    health_floor_ratio=D("0.09"),
    lump_sum_health_tiers=(
        HealthTier(max_yearly_revenue=D("60000"), monthly_amount=D("461.66")),
        HealthTier(max_yearly_revenue=D("300000"), monthly_amount=D("769.43")),
        HealthTier(max_yearly_revenue=None, monthly_amount=D("1384.97")),
    ),
    tax_free_amount=D("30000"),
    tax_threshold=D("120000"),
    scale_lower_rate=D("0.12"),
    scale_upper_rate=D("0.32"),
    linear_rate=D("0.19"),
    ip_box_rate=D("0.05"),
    notional_cost_ratio=D("0.5"), # koszty autorskie
    lump_sum_rates=MappingProxyType({
        LumpSumCategory.PROFESSIONALS: D("0.17"),
        LumpSumCategory.SERVICES: D("0.15"),
        LumpSumCategory.IT: D("0.12"),
        LumpSumCategory.BUSINESS_SERVICES: D("0.085"),
        LumpSumCategory.MANUFACTURING: D("0.055"),
        LumpSumCategory.TRADE: D("0.03"),
        LumpSumCategory.AGRICULTURE: D("0.02"),
    }),
    default_lump_sum_category=LumpSumCategory.IT,
    cit_small_rate=D("0.09"),
    cit_standard_rate=D("0.19"),
    cit_small_taxpayer_limit=D("9218000"), # ~2M EUR
    dividend_tax_rate=D("0.19"),
    company_accounting_cost=D("800"),
    employee_pension_rate=D("0.0976"),
    employee_disability_rate=D("0.015"),
    employee_sickness_rate=D("0.0245"),
    employee_health_rate=D("0.09"),
    employee_monthly_cost_deduction=D("250"),
    employer_pension_rate=D("0.0976"),
    employer_disability_rate=D("0.065"),
    employer_accident_rate=D("0.0167"),
    employer_labor_fund_rate=D("0.0245"),
    employer_fgsp_rate=D("0.001"),
)

RATE_TABLES: Dict[int, RateTable] = {
    RATE_TABLE_2025.tax_year: RATE_TABLE_2025,
}


def get_rate_table(tax_year: int) -> RateTable:
    if tax_year not in RATE_TABLES:
        available = ", ".join(str(year) for year in sorted(RATE_TABLES))
        raise ValueError(f"No rate table for tax year {tax_year}. Available: {available}")
    return RATE_TABLES[tax_year]
