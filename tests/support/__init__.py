"""
Test Support Module

This module consolidates test infrastructure:
- Input builders with the reference scenario as defaults
- Rate table variants for validation tests
"""

from tests.support.builders import (
    MONTHLY_TO_YEARLY_TOLERANCE,
    make_jdg_input,
    make_spzoo_input,
    rate_table_with,
)

__all__ = [
    "MONTHLY_TO_YEARLY_TOLERANCE",
    "make_jdg_input",
    "make_spzoo_input",
    "rate_table_with",
]
