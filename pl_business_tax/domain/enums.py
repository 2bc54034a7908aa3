# pl_business_tax/domain/enums.py
from enum import Enum, auto

class TaxForm(Enum):
    """Sole-proprietorship (JDG) taxation variants, in comparison order."""
    SCALE = "scale"
    LINEAR = "linear"
    LINEAR_IP_BOX = "linear_ip_box" # flat-rate regime with the 5% IP rate replacing 19%
    RYCZALT = "ryczalt" # lump sum on revenue

class ContributionBase(Enum):
    """Which social-contribution (ZUS) base a JDG owner pays on."""
    STANDARD = "standard" # pełny ZUS
    REDUCED_NEW_ENTRANT = "reduced_new_entrant" # preferencyjny ZUS, first 24 months
    INCOME_SCALED_REDUCED = "income_scaled_reduced" # Mały ZUS Plus
    EXEMPTION_PERIOD = "exemption_period" # ulga na start, first 6 months
    NONE = "none"

class LumpSumCategory(Enum):
    PROFESSIONALS = "professionals"
    SERVICES = "services"
    IT = "it"
    BUSINESS_SERVICES = "business_services"
    MANUFACTURING = "manufacturing"
    TRADE = "trade"
    AGRICULTURE = "agriculture"

class CitRate(Enum):
    SMALL = "small" # mały podatnik
    STANDARD = "standard"

class PayoutStrategy(Enum):
    """How the sole shareholder of a Sp. z o.o. takes money out, in comparison order."""
    DIVIDEND_ONLY = "dividend_only"
    MIN_SALARY_PLUS_DIVIDEND = "min_salary_plus_dividend"
    FULL_SALARY = "full_salary"

class BusinessForm(Enum):
    JDG = "jdg"
    SPZOO = "spzoo"

class ThresholdSearchStatus(Enum):
    FOUND = auto()
    AT_LOWER_BOUND = auto() # target already met at the lowest searched revenue
    UNREACHABLE = auto() # target not met even at the highest searched revenue
    NON_MONOTONIC = auto() # objective decreased somewhere; bisection result not trustworthy
