# pl_business_tax/domain/inputs.py
from decimal import Decimal
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from pl_business_tax.domain.enums import CitRate, ContributionBase, PayoutStrategy
from pl_business_tax.utils.type_utils import safe_decimal


def _parse_amount(v: Any, field_name: str) -> Decimal:
    parsed = safe_decimal(v)
    if parsed is None or not parsed.is_finite():
        raise ValueError(f"{field_name} must be a finite number, got {v!r}")
    return parsed


class CalculationBaseInput(BaseModel):
    model_config = ConfigDict(frozen=True, extra='ignore') # Ignore unknown keys from presentation-layer payloads

    monthly_revenue: Decimal

    @field_validator('monthly_revenue', mode='before')
    @classmethod
    def parse_revenue(cls, v: Any) -> Decimal:
        return _parse_amount(v, 'monthly_revenue')

    @field_validator('monthly_revenue')
    @classmethod
    def revenue_not_negative(cls, v: Decimal) -> Decimal:
        if v < Decimal(0):
            raise ValueError(f"monthly_revenue must not be negative, got {v}")
        return v


class CalculationInput(CalculationBaseInput):
    """Monthly figures for a sole proprietorship (JDG)."""
    monthly_costs: Decimal = Decimal('0')
    contribution_base: ContributionBase = ContributionBase.STANDARD
    lump_sum_rate: Optional[Decimal] = None # required for the lump-sum regime only
    pays_sickness: bool = True
    use_ip_box: bool = False
    use_notional_costs: bool = False

    @field_validator('monthly_costs', mode='before')
    @classmethod
    def parse_costs(cls, v: Any) -> Decimal:
        if v is None or str(v).strip() == "":
            return Decimal('0')
        return _parse_amount(v, 'monthly_costs')

    @field_validator('monthly_costs')
    @classmethod
    def costs_not_negative(cls, v: Decimal) -> Decimal:
        if v < Decimal(0):
            raise ValueError(f"monthly_costs must not be negative, got {v}")
        return v

    @field_validator('lump_sum_rate', mode='before')
    @classmethod
    def parse_lump_sum_rate(cls, v: Any) -> Optional[Decimal]:
        if v is None or str(v).strip() == "":
            return None
        rate = _parse_amount(v, 'lump_sum_rate')
        if not (Decimal(0) <= rate <= Decimal(1)):
            raise ValueError(f"lump_sum_rate must be between 0 and 1, got {rate}")
        return rate

    @model_validator(mode='after')
    def preferential_options_exclusive(self) -> 'CalculationInput':
        if self.use_ip_box and self.use_notional_costs:
            raise ValueError("use_ip_box and use_notional_costs cannot both be enabled; choose one")
        return self


class SpzooCalculationInput(CalculationBaseInput):
    """Monthly figures for a single-shareholder limited company (Sp. z o.o.)."""
    monthly_operating_costs: Decimal = Decimal('0') # excluding any payout to the owner
    cit_rate: CitRate = CitRate.SMALL
    payout_strategy: PayoutStrategy = PayoutStrategy.MIN_SALARY_PLUS_DIVIDEND

    @field_validator('monthly_operating_costs', mode='before')
    @classmethod
    def parse_operating_costs(cls, v: Any) -> Decimal:
        if v is None or str(v).strip() == "":
            return Decimal('0')
        return _parse_amount(v, 'monthly_operating_costs')

    @field_validator('monthly_operating_costs')
    @classmethod
    def operating_costs_not_negative(cls, v: Decimal) -> Decimal:
        if v < Decimal(0):
            raise ValueError(f"monthly_operating_costs must not be negative, got {v}")
        return v
