# pl_business_tax/reporting/reporting_utils.py
import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, List, Any

from pl_business_tax.domain.enums import BusinessForm, ContributionBase, PayoutStrategy, TaxForm
import pl_business_tax.config as config # For precision settings


logger = logging.getLogger(__name__)

# ASCII-only labels so the built-in Helvetica font renders them in the PDF
TAX_FORM_LABELS = {
    TaxForm.SCALE: "Skala podatkowa",
    TaxForm.LINEAR: "Podatek liniowy",
    TaxForm.LINEAR_IP_BOX: "Podatek liniowy + IP Box",
    TaxForm.RYCZALT: "Ryczalt",
}

PAYOUT_STRATEGY_LABELS = {
    PayoutStrategy.DIVIDEND_ONLY: "Tylko dywidenda",
    PayoutStrategy.MIN_SALARY_PLUS_DIVIDEND: "Minimalna pensja + dywidenda",
    PayoutStrategy.FULL_SALARY: "Pelna pensja",
}

BUSINESS_FORM_LABELS = {
    BusinessForm.JDG: "JDG",
    BusinessForm.SPZOO: "Sp. z o.o.",
}

CONTRIBUTION_BASE_LABELS = {
    ContributionBase.STANDARD: "Pelny ZUS",
    ContributionBase.REDUCED_NEW_ENTRANT: "Preferencyjny ZUS",
    ContributionBase.INCOME_SCALED_REDUCED: "Maly ZUS Plus",
    ContributionBase.EXEMPTION_PERIOD: "Ulga na start",
    ContributionBase.NONE: "Bez skladek spolecznych",
}

def _q(val: Optional[Decimal | int | float | str]) -> Decimal:
    """Quantize Decimal value for amounts, handling None, int, float, str."""
    if val is None:
        return Decimal('0.00')
    if not isinstance(val, Decimal):
        try:
            val = Decimal(str(val))
        except Exception:
            logger.error(f"Could not convert value '{val}' of type {type(val)} to Decimal in _q. Returning 0.00.")
            return Decimal('0.00')

    return val.quantize(config.OUTPUT_PRECISION_AMOUNTS, rounding=ROUND_HALF_UP)

def format_pln(val: Optional[Decimal | int | float | str]) -> str:
    """Polish amount format: space as thousands separator, comma decimals (e.g. 12 345,67)."""
    return f"{_q(val):,.2f}".replace(",", " ").replace(".", ",")

def format_percent(rate: Optional[Decimal]) -> str:
    """Formats a 0-1 rate as a percentage with two decimals, e.g. 0.2345 -> 23,45%."""
    if rate is None:
        return "-"
    return f"{_q(rate * Decimal(100))}%".replace(".", ",")


# Helper to create a basic table for ReportLab
def create_table(data: List[List[Any]], col_widths: Optional[List[float]] = None, style_commands: Optional[List[Any]] = None):
    from reportlab.platypus import Table, TableStyle
    from reportlab.lib import colors

    table = Table(data, colWidths=col_widths, repeatRows=1)

    # Default style
    ts = [
        ('GRID', (0, 0), (-1, -1), 0.5, colors.grey),
        ('BACKGROUND', (0, 0), (-1, 0), colors.lightgrey), # Header row background
        ('VALIGN', (0, 0), (-1, -1), 'MIDDLE'),
        ('ALIGN', (1, 1), (-1, -1), 'RIGHT'), # amounts
        ('FONTNAME', (0, 0), (-1, 0), 'Helvetica-Bold'), # Header font
        ('FONTNAME', (0, 1), (-1, -1), 'Helvetica'),    # Body font
        ('FONTSIZE', (0,0), (-1,-1), 8),
        ('LEFTPADDING', (0,0), (-1,-1), 3),
        ('RIGHTPADDING', (0,0), (-1,-1), 3),
        ('TOPPADDING', (0,0), (-1,-1), 2),
        ('BOTTOMPADDING', (0,0), (-1,-1), 2),
    ]
    if style_commands:
        ts.extend(style_commands)

    table.setStyle(TableStyle(ts))
    return table
