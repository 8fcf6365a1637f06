"""Command-line interface for the formula calculator.

This module uses the ``click`` library to implement a multi-command interface.
Users can compute the derived values, export them as the CSV record the form
copies to the clipboard, or check that the start date is usable. Results can
be printed to the terminal or written to JSON/CSV files.
"""

from __future__ import annotations

import json
import logging
from datetime import date
from pathlib import Path
from typing import Callable, Optional

import click

from .data_models import CalculationInputs, CalculationResult
from .engine import compute_results, validate_inputs
from .formatter import print_results, results_to_csv, results_to_dict
from .utils import date_from_str, decimal_from_str

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def parse_today(value: Optional[str]) -> date:
    """Return the date given with ``--today`` or the real current date."""
    if not value:
        return date.today()
    try:
        return date_from_str(value)
    except ValueError as exc:
        raise click.BadParameter(str(exc), param_hint="--today")


def check_strict(inputs: CalculationInputs) -> None:
    """Reject inputs that the lenient parsers would silently replace.

    Blank date fields are allowed (no months / today); every other field must
    parse.
    """
    for hint, text in (("--date-from", inputs.date_from_text), ("--date-to", inputs.date_to_text)):
        if not text.strip():
            continue
        try:
            date_from_str(text)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint=hint)
    numeric_fields = (
        ("--delivery", inputs.delivery_amount_text),
        ("--interest-rate", inputs.interest_rate_text),
        ("-k", inputs.k_text),
        ("-o", inputs.o_text),
    )
    for hint, text in numeric_fields:
        try:
            decimal_from_str(text)
        except ValueError as exc:
            raise click.BadParameter(str(exc), param_hint=hint)


def build_inputs_from_options(
    date_from: str,
    date_to: Optional[str],
    delivery: str,
    interest_rate: str,
    k: str,
    o: str,
    today: date,
    strict: bool = False,
) -> CalculationInputs:
    inputs = CalculationInputs(
        date_from_text=date_from,
        date_to_text=date_to if date_to is not None else today.isoformat(),
        delivery_amount_text=delivery,
        interest_rate_text=interest_rate,
        k_text=k,
        o_text=o,
    )
    if strict:
        check_strict(inputs)
    return inputs


def export_to_json(path: Path, inputs: CalculationInputs, result: CalculationResult) -> None:
    """Export inputs and results to a JSON file."""
    with path.open("w", encoding="utf-8") as f:
        json.dump({"results": results_to_dict(inputs, result)}, f, indent=2)


def export_to_csv(path: Path, inputs: CalculationInputs, result: CalculationResult) -> None:
    """Export inputs and results to a CSV file."""
    with path.open("w", newline="", encoding="utf-8") as f:
        f.write(results_to_csv(inputs, result))
        f.write("\n")


def input_options(func: Callable) -> Callable:
    """Attach the six form fields plus ``--today`` and ``--strict`` to a command."""
    defaults = CalculationInputs.defaults(date.today())
    options = [
        click.option("--date-from", "date_from", default="", help="Start date (YYYY-MM-DD)"),
        click.option("--date-to", "date_to", default=None, help="End date (YYYY-MM-DD); defaults to today"),
        click.option("--delivery", "delivery", default=defaults.delivery_amount_text, show_default=True, help="Delivery amount (F)"),
        click.option("--interest-rate", "interest_rate", default=defaults.interest_rate_text, show_default=True, help="Monthly interest rate as a decimal (0.02 = 2%)"),
        click.option("-k", "k", default=defaults.k_text, show_default=True, help="K (quantity)"),
        click.option("-o", "o", default=defaults.o_text, show_default=True, help="O (rate per unit)"),
        click.option("--today", "today", default=None, help="Override the current date (YYYY-MM-DD)"),
        click.option("--strict", "strict", is_flag=True, help="Fail on malformed input instead of using defaults"),
    ]
    for option in reversed(options):
        func = option(func)
    return func


@click.group()
@click.option(
    "--log-level",
    "log_level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="FORMULA_CALC_LOG_LEVEL",
    show_default=True,
    help="Logging verbosity",
)
def cli(log_level: str) -> None:
    """A calculator for completed months, interest, total and costing."""
    logging.basicConfig(
        level=getattr(logging, log_level.upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )


@cli.command()
@input_options
@click.option("--output", "output", type=str, help="Output file path (.json or .csv)")
def compute(
    date_from: str,
    date_to: Optional[str],
    delivery: str,
    interest_rate: str,
    k: str,
    o: str,
    today: Optional[str],
    strict: bool,
    output: Optional[str],
) -> None:
    """Compute and print the derived values."""
    current = parse_today(today)
    inputs = build_inputs_from_options(date_from, date_to, delivery, interest_rate, k, o, current, strict)
    result = compute_results(inputs, current)
    if output:
        path = Path(output)
        if path.suffix.lower() == ".json":
            export_to_json(path, inputs, result)
        elif path.suffix.lower() == ".csv":
            export_to_csv(path, inputs, result)
        else:
            raise click.BadParameter("Unsupported output format; use .json or .csv", param_hint="--output")
        logger.info("Results written to %s", path)
        click.echo(f"Results exported to {path}")
    else:
        print_results(result)


@cli.command()
@input_options
def export(
    date_from: str,
    date_to: Optional[str],
    delivery: str,
    interest_rate: str,
    k: str,
    o: str,
    today: Optional[str],
    strict: bool,
) -> None:
    """Print the CSV record (header and one data line)."""
    current = parse_today(today)
    inputs = build_inputs_from_options(date_from, date_to, delivery, interest_rate, k, o, current, strict)
    click.echo(results_to_csv(inputs, compute_results(inputs, current)))


@cli.command()
@click.option("--date-from", "date_from", default="", help="Start date (YYYY-MM-DD)")
@click.pass_context
def validate(ctx: click.Context, date_from: str) -> None:
    """Check that the start date is a valid YYYY-MM-DD date."""
    ok, message = validate_inputs(CalculationInputs(date_from_text=date_from))
    click.echo(message)
    if not ok:
        ctx.exit(1)


if __name__ == "__main__":
    cli()
