"""
Decimal Helpers

Every monetary amount in the calculation engine is a ``Decimal``.
Binary floats are converted through ``str`` so that 0.1 stays 0.1.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Union

Number = Union[Decimal, int, float, str]

CENT = Decimal("0.01")
ZERO = Decimal("0.00")
ONE = Decimal(1)
MONTHS_PER_YEAR = 12


def to_decimal(value: Number) -> Decimal:
    """Convert an int, float, str or Decimal to Decimal without float noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def round2(value: Number) -> Decimal:
    """Round to cents using round-half-up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def monthly_rate(annual_rate_percent: Number) -> Decimal:
    """
    Convert an annual nominal rate in percent to a monthly rate.

    Args:
        annual_rate_percent: Annual rate as percent (e.g., 3.5 for 3.5%)

    Returns:
        Monthly rate as decimal (e.g., 0.0029166... for 3.5%)
    """
    return to_decimal(annual_rate_percent) / 100 / MONTHS_PER_YEAR
