"""Output helpers for the formula calculator.

This module renders results for the terminal and serializes a snapshot of
inputs and results into the comma-separated record used by the "Copy CSV"
action, or into a plain dictionary for JSON output.
"""

from __future__ import annotations

import csv
import io
from typing import Dict, List

from .data_models import CalculationInputs, CalculationResult
from .utils import format_decimal, parse_decimal

CSV_HEADER = [
    "dateFrom",
    "dateTo",
    "months",
    "delivery",
    "interestRate",
    "interest",
    "total",
    "k",
    "o",
    "costing",
]

RESULT_LABELS = {
    "months": "Completed months (DATEDIF m):",
    "interest": "Interest (interestRate * F * months):",
    "total": "Total (F + Interest):",
    "costing": "Costing (K * O):",
}


def print_results(result: CalculationResult) -> None:
    """Print the derived values in a human-readable format."""
    width = max(len(label) for label in RESULT_LABELS.values())
    print("Results")
    print("-" * 60)
    print(f"{RESULT_LABELS['months']:{width}s} {result.months}")
    print(f"{RESULT_LABELS['interest']:{width}s} {format_decimal(result.interest)}")
    print(f"{RESULT_LABELS['total']:{width}s} {format_decimal(result.total)}")
    print(f"{RESULT_LABELS['costing']:{width}s} {format_decimal(result.costing)}")
    print("-" * 60)


def _csv_row(inputs: CalculationInputs, result: CalculationResult) -> List[str]:
    # Dates go out as typed, numbers as parsed, derived values rounded.
    return [
        inputs.date_from_text,
        inputs.date_to_text,
        str(result.months),
        str(parse_decimal(inputs.delivery_amount_text)),
        str(parse_decimal(inputs.interest_rate_text)),
        format_decimal(result.interest),
        format_decimal(result.total),
        str(parse_decimal(inputs.k_text)),
        str(parse_decimal(inputs.o_text)),
        format_decimal(result.costing),
    ]


def results_to_csv(inputs: CalculationInputs, result: CalculationResult) -> str:
    """Return the header line and one data line, without a trailing newline."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    writer.writerow(_csv_row(inputs, result))
    return buffer.getvalue().rstrip("\n")


def results_to_dict(inputs: CalculationInputs, result: CalculationResult) -> Dict[str, object]:
    """Return the CSV record as a JSON-serialisable dictionary."""
    record: Dict[str, object] = dict(zip(CSV_HEADER, _csv_row(inputs, result)))
    record["months"] = result.months
    return record
