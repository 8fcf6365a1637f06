"""Data models for the formula calculator.

This module defines dataclasses for the two values that flow through the
calculator: the raw text typed into the form and the derived results. Both
are frozen so that a recomputation can never leak state into the next one.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class CalculationInputs:
    """Raw text fields of the calculator form.

    Attributes
    ----------
    date_from_text: str
        Start date in ``YYYY-MM-DD`` form. Blank or malformed means no months
        are counted.
    date_to_text: str
        End date in ``YYYY-MM-DD`` form. Blank or malformed falls back to the
        current date supplied by the caller.
    delivery_amount_text: str
        The delivery amount ("F" in the spreadsheet).
    interest_rate_text: str
        Monthly interest rate as a decimal fraction (``"0.02"`` means 2 %).
    k_text: str
        Quantity.
    o_text: str
        Rate per unit.
    """

    date_from_text: str = ""
    date_to_text: str = ""
    delivery_amount_text: str = ""
    interest_rate_text: str = ""
    k_text: str = ""
    o_text: str = ""

    @classmethod
    def defaults(cls, today: date) -> "CalculationInputs":
        """Return the values the form starts with."""
        return cls(
            date_from_text="",
            date_to_text=today.isoformat(),
            delivery_amount_text="2500",
            interest_rate_text="0.02",
            k_text="2860",
            o_text="6.8",
        )


@dataclass(frozen=True)
class CalculationResult:
    """Values derived from a ``CalculationInputs`` snapshot."""

    months: int  # completed calendar months, never negative
    interest: Decimal
    total: Decimal
    costing: Decimal
