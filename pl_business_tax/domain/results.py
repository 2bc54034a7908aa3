# pl_business_tax/domain/results.py
from dataclasses import dataclass
from decimal import Decimal
from types import MappingProxyType
from typing import Mapping, Optional, Tuple

from .enums import BusinessForm, CitRate, PayoutStrategy, TaxForm, ThresholdSearchStatus


# =============================================================================
# Sole proprietorship (JDG)
# =============================================================================

@dataclass(frozen=True)
class MonthlyBreakdown:
    social_contributions: Decimal # składki społeczne ZUS
    health_contribution: Decimal # składka zdrowotna
    tax: Decimal # zaliczka na podatek
    total_burden: Decimal
    net_amount: Decimal


@dataclass(frozen=True)
class YearlyFigures:
    revenue: Decimal
    costs: Decimal # deduction basis; actual costs for the lump-sum regime
    income: Decimal # unclamped, may be negative when costs exceed revenue
    social_contributions: Decimal
    health_contribution: Decimal
    tax: Decimal
    total_burden: Decimal
    net_amount: Decimal


@dataclass(frozen=True)
class YearlyResult:
    tax_form: TaxForm
    monthly: MonthlyBreakdown
    yearly: YearlyFigures
    effective_rate: Decimal # yearly total burden / yearly revenue


@dataclass(frozen=True)
class ComparisonResult:
    results: Mapping[TaxForm, YearlyResult] # in comparison order
    best: TaxForm
    savings: Mapping[TaxForm, Decimal] # yearly burden above the best variant

    def __post_init__(self):
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))
        object.__setattr__(self, "savings", MappingProxyType(dict(self.savings)))

    @property
    def best_result(self) -> YearlyResult:
        return self.results[self.best]


# =============================================================================
# Limited company (Sp. z o.o.)
# =============================================================================

@dataclass(frozen=True)
class SpzooMonthlyBreakdown:
    company_revenue: Decimal
    operating_costs: Decimal
    employment_costs: Decimal # gross payroll + employer contributions
    profit_before_tax: Decimal
    corporate_tax: Decimal
    profit_after_tax: Decimal
    dividend_tax: Decimal
    owner_net_salary: Decimal
    owner_net_dividend: Decimal
    owner_total_net: Decimal
    owner_mandatory_contributions: Decimal # only when no payroll exists
    accounting_cost: Decimal


@dataclass(frozen=True)
class SpzooYearlyFigures:
    revenue: Decimal
    operating_costs: Decimal
    employment_costs: Decimal
    profit_before_tax: Decimal
    corporate_tax: Decimal
    profit_after_tax: Decimal
    dividend_tax: Decimal
    owner_net_salary: Decimal
    owner_net_dividend: Decimal
    owner_total_net: Decimal
    owner_mandatory_contributions: Decimal
    accounting_cost: Decimal
    total_tax_burden: Decimal


@dataclass(frozen=True)
class SpzooYearlyResult:
    payout_strategy: PayoutStrategy
    cit_rate: CitRate
    monthly: SpzooMonthlyBreakdown
    yearly: SpzooYearlyFigures
    effective_rate: Decimal


@dataclass(frozen=True)
class SpzooComparisonResult:
    results: Mapping[PayoutStrategy, SpzooYearlyResult]
    best: PayoutStrategy
    best_net_amount: Decimal # yearly owner total net of the best strategy

    def __post_init__(self):
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    @property
    def best_result(self) -> SpzooYearlyResult:
        return self.results[self.best]


@dataclass(frozen=True)
class ThresholdSearch:
    threshold: Optional[Decimal] # monthly revenue; None unless status is FOUND or AT_LOWER_BOUND
    status: ThresholdSearchStatus
    target_monthly_net: Decimal
    iterations: int
    lower_bound: Decimal # final bracket
    upper_bound: Decimal


# =============================================================================
# Employment contract (umowa o pracę)
# =============================================================================

@dataclass(frozen=True)
class EmploymentResult:
    gross_salary: Decimal
    social_contributions: Decimal # employee side
    health_contribution: Decimal
    income_tax: Decimal
    net_salary: Decimal
    employer_contributions: Decimal
    total_employer_cost: Decimal


# =============================================================================
# Cross-form comparisons
# =============================================================================

@dataclass(frozen=True)
class BusinessFormComparison:
    jdg: ComparisonResult
    spzoo: SpzooComparisonResult
    winner: BusinessForm
    jdg_yearly_net: Decimal
    spzoo_yearly_net: Decimal
    difference: Decimal # yearly, absolute
    difference_pct: Optional[Decimal] # relative to the losing form's net; None if that net is 0
    spzoo_threshold: Optional[Decimal] # monthly revenue at which Sp. z o.o. matches the best JDG net
    above_threshold: bool


@dataclass(frozen=True)
class EmploymentComparison:
    employment_gross: Decimal
    employment_net: Decimal
    b2b_revenue: Decimal
    b2b_net: Decimal # best JDG monthly net at the entered revenue and costs
    b2b_net_at_employment_gross: Decimal # best JDG monthly net with revenue = employment gross, no costs
    difference: Decimal # b2b_net - employment_net, monthly


@dataclass(frozen=True)
class SweepPoint:
    monthly_revenue: Decimal
    jdg_net: Mapping[TaxForm, Decimal] # monthly net per variant
    spzoo_net: Decimal # best monthly owner net

    def __post_init__(self):
        object.__setattr__(self, "jdg_net", MappingProxyType(dict(self.jdg_net)))


RevenueSweep = Tuple[SweepPoint, ...]
