import logging
import os
from datetime import date

from flask import Flask, Response, jsonify, render_template, request

from formula_calc.data_models import CalculationInputs
from formula_calc.engine import compute_results, validate_inputs
from formula_calc.formatter import RESULT_LABELS, results_to_csv, results_to_dict
from formula_calc.utils import format_decimal

logger = logging.getLogger(__name__)

app = Flask(__name__)
app.config["ASSET_VERSION"] = os.environ.get("ASSET_VERSION", "1")
app.secret_key = os.environ.get("FLASK_SECRET_KEY", "dev-secret-key")

FORM_FIELDS = {
    "date_from": "date_from_text",
    "date_to": "date_to_text",
    "delivery_amount": "delivery_amount_text",
    "interest_rate": "interest_rate_text",
    "k": "k_text",
    "o": "o_text",
}


def _form_to_inputs(form, today: date) -> CalculationInputs:
    """Build inputs from posted fields, keeping the defaults for missing ones."""
    defaults = CalculationInputs.defaults(today)
    values = {
        attr: str(form.get(field, getattr(defaults, attr)))
        for field, attr in FORM_FIELDS.items()
    }
    return CalculationInputs(**values)


def _result_rows(result):
    return [
        (RESULT_LABELS["months"], str(result.months)),
        (RESULT_LABELS["interest"], format_decimal(result.interest)),
        (RESULT_LABELS["total"], format_decimal(result.total)),
        (RESULT_LABELS["costing"], format_decimal(result.costing)),
    ]


@app.route("/", methods=["GET", "POST"])
def index():
    today = date.today()
    notice = None
    notice_ok = True

    if request.method == "POST":
        inputs = _form_to_inputs(request.form, today)
        if request.form.get("action") == "validate":
            notice_ok, notice = validate_inputs(inputs)
    else:
        inputs = CalculationInputs.defaults(today)

    result = compute_results(inputs, today)

    return render_template(
        "index.html",
        inputs=inputs,
        rows=_result_rows(result),
        csv_record=results_to_csv(inputs, result),
        notice=notice,
        notice_ok=notice_ok,
        asset_version=app.config["ASSET_VERSION"],
    )


@app.post("/export.csv")
def export_csv():
    today = date.today()
    inputs = _form_to_inputs(request.form, today)
    record = results_to_csv(inputs, compute_results(inputs, today))
    logger.info("Exported CSV record for date_from=%r", inputs.date_from_text)
    return Response(
        record,
        mimetype="text/csv",
        headers={"Content-Disposition": "attachment; filename=results.csv"},
    )


@app.post("/api/compute")
def api_compute():
    today = date.today()
    payload = request.get_json(silent=True)
    if not isinstance(payload, dict):
        payload = request.form
    inputs = _form_to_inputs(payload, today)
    ok, message = validate_inputs(inputs)
    return jsonify(
        {
            "results": results_to_dict(inputs, compute_results(inputs, today)),
            "valid": ok,
            "message": message,
        }
    )


if __name__ == "__main__":
    logging.basicConfig(
        level=getattr(logging, os.environ.get("FORMULA_CALC_LOG_LEVEL", "INFO").upper()),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    print("Starting Formula Calculator web app...")
    app.run(host="0.0.0.0", port=int(os.environ.get("FORMULA_CALC_PORT", "8710")), debug=True)
