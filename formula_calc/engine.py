"""Core calculation engine for the formula calculator.

This module turns a snapshot of the form's text fields into the derived
values: completed months between two dates (matching the spreadsheet
``DATEDIF(start, end, "m")`` function), simple interest over those months,
the resulting total and the quantity times rate costing.

Nothing here reads the system clock. Callers pass the current date in, so
identical arguments always produce identical results.
"""

from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation, Overflow, localcontext
from typing import Tuple

from .data_models import CalculationInputs, CalculationResult
from .utils import parse_date, parse_decimal

logger = logging.getLogger(__name__)

VALIDATION_FAILED = "Please enter valid Date From (yyyy-MM-dd)"
VALIDATION_PASSED = "Computation done, see results"


def completed_months(start: date, end: date) -> int:
    """Return the number of whole calendar months from ``start`` to ``end``.

    A trailing partial month is not counted: from July 10 to September 9 is
    one month, to September 10 is two. When ``end`` precedes ``start`` the
    result is clamped to zero rather than going negative.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if end.day < start.day:
        months -= 1
    if months < 0:
        months = 0
    return months


def compute_results(inputs: CalculationInputs, today: date) -> CalculationResult:
    """Compute months, interest, total and costing for a set of inputs.

    Parameters
    ----------
    inputs: CalculationInputs
        The raw form text. Malformed numbers count as zero; a malformed
        start date yields zero months; a malformed end date falls back to
        ``today``.
    today: date
        The current date, used as the default end date.

    Returns
    -------
    CalculationResult
        The derived values. This function never raises for bad input.
    """
    date_from = parse_date(inputs.date_from_text)
    date_to = parse_date(inputs.date_to_text) or today

    months = 0 if date_from is None else completed_months(date_from, date_to)

    delivery_amount = parse_decimal(inputs.delivery_amount_text)
    interest_rate = parse_decimal(inputs.interest_rate_text)
    k = parse_decimal(inputs.k_text)
    o = parse_decimal(inputs.o_text)

    with localcontext() as ctx:
        # out-of-range magnitudes saturate to Infinity/NaN instead of raising
        ctx.traps[Overflow] = False
        ctx.traps[InvalidOperation] = False
        interest = interest_rate * delivery_amount * Decimal(months)
        total = delivery_amount + interest
        costing = k * o

    logger.debug(
        "Computed months=%s interest=%s total=%s costing=%s", months, interest, total, costing
    )
    return CalculationResult(months=months, interest=interest, total=total, costing=costing)


def validate_inputs(inputs: CalculationInputs) -> Tuple[bool, str]:
    """Check that the start date parses and return a message for the user."""
    if parse_date(inputs.date_from_text) is None:
        return False, VALIDATION_FAILED
    return True, VALIDATION_PASSED
