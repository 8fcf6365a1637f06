"""Utility functions for the formula calculator.

This module provides helpers for turning form text into Python data types and
back. Each parser comes in two flavours: a strict one (``date_from_str``,
``decimal_from_str``) that raises ``ValueError`` on bad input, and a lenient
one (``parse_date``, ``parse_decimal``) that substitutes a safe default so the
calculation can always proceed.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, getcontext, localcontext
from typing import Optional, Union

getcontext().prec = 28  # increase decimal precision to avoid rounding errors

logger = logging.getLogger(__name__)

_DATE_PATTERN = re.compile(r"([0-9]{4})-([0-9]{2})-([0-9]{2})")
_CENT = Decimal("0.01")


def date_from_str(text: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a ``date`` object.

    Parameters
    ----------
    text: str
        A string in the exact form ``"YYYY-MM-DD"``. Surrounding whitespace is
        not accepted.

    Returns
    -------
    date
        The parsed calendar date.

    Raises
    ------
    ValueError
        If the string does not match the pattern or names an impossible date
        (month 13, February 30 and so on).
    """
    match = _DATE_PATTERN.fullmatch(text)
    if match is None:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {text!r}")
    year, month, day = (int(part) for part in match.groups())
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise ValueError(f"Invalid date (expected YYYY-MM-DD): {text!r}") from exc


def decimal_from_str(text: str) -> Decimal:
    """Convert a numeric string into a finite ``Decimal``.

    Surrounding whitespace is ignored. ``NaN`` and infinities are rejected
    along with anything ``Decimal`` cannot read. Raises ``ValueError`` if
    conversion fails.
    """
    try:
        value = Decimal(text.strip())
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric value: {text!r}") from exc
    if not value.is_finite():
        raise ValueError(f"Invalid numeric value: {text!r}")
    return value


def parse_date(text: str) -> Optional[date]:
    """Return the date in ``text`` or ``None`` when it is blank or malformed."""
    if not text or not text.strip():
        return None
    try:
        return date_from_str(text)
    except ValueError:
        logger.debug("Ignoring unparseable date %r", text)
        return None


def parse_decimal(text: str) -> Decimal:
    """Return the number in ``text``, or zero when it cannot be read."""
    try:
        return decimal_from_str(text)
    except ValueError:
        logger.debug("Treating unparseable number %r as 0", text)
        return Decimal("0")


def format_decimal(value: Union[Decimal, float, int]) -> str:
    """Format a number with exactly two digits after the decimal point.

    Halves are rounded away from zero on the decimal value, so ``1.005``
    becomes ``"1.01"`` and ``2.675`` becomes ``"2.68"``. Floats go through
    their shortest ``repr`` so that they round the way they read. Infinities
    and NaN are rendered as ``"Infinity"``, ``"-Infinity"`` and ``"NaN"``.
    """
    if isinstance(value, float):
        value = Decimal(repr(value))
    elif not isinstance(value, Decimal):
        value = Decimal(value)
    if not value.is_finite():
        return str(value)
    with localcontext() as ctx:
        # quantize fails once the integer part outgrows the context precision
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        rounded = value.quantize(_CENT, rounding=ROUND_HALF_UP)
    return f"{rounded:f}"
