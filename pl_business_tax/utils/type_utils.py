# pl_business_tax/utils/type_utils.py
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

def safe_decimal(value: Any, default: Optional[Decimal] = None, raise_error: bool = False) -> Optional[Decimal]:
    """
    Safely converts a value to a Decimal.
    Handles None, empty strings, Polish-formatted amounts ("12 345,67",
    "12.345,67") and strings with commas as thousands separators ("12,345.67").
    If default is provided, returns default on conversion error.
    If raise_error is True, re-raises InvalidOperation instead of returning default.
    """
    if value is None:
        return default
    if isinstance(value, bool): # bool is an int subclass, never an amount
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, (int, float)): # via str() so 0.1 stays 0.1
        return Decimal(str(value))

    s_value = str(value).strip().replace("\u00a0", "").replace(" ", "")
    if s_value.lower().endswith("zł"):
        s_value = s_value[:-2]
    elif s_value.upper().endswith("PLN"):
        s_value = s_value[:-3]
    if not s_value:
        return default

    try:
        if '.' in s_value and ',' in s_value: # the separator that comes last is the decimal one
            if s_value.rfind(',') > s_value.rfind('.'): # e.g. "1.234,56"
                s_value = s_value.replace('.', '').replace(',', '.')
            else: # e.g. "1,234.56"
                s_value = s_value.replace(',', '')
        elif ',' in s_value: # e.g. "12,34"
            s_value = s_value.replace(',', '.')
        return Decimal(s_value)
    except InvalidOperation as e:
        if raise_error:
            raise e
        return default
