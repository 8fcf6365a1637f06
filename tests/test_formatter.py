from datetime import date

from formula_calc.data_models import CalculationInputs
from formula_calc.engine import compute_results
from formula_calc.formatter import CSV_HEADER, print_results, results_to_csv, results_to_dict

TODAY = date(2017, 7, 10)

INPUTS = CalculationInputs(
    date_from_text="2016-07-10",
    date_to_text="2017-07-10",
    delivery_amount_text="2500",
    interest_rate_text="0.02",
    k_text="2860",
    o_text="6.8",
)


def test_csv_record():
    record = results_to_csv(INPUTS, compute_results(INPUTS, TODAY))
    header, data = record.split("\n")
    assert header == "dateFrom,dateTo,months,delivery,interestRate,interest,total,k,o,costing"
    assert data == "2016-07-10,2017-07-10,12,2500,0.02,600.00,3100.00,2860,6.8,19448.00"


def test_csv_keeps_raw_date_text_and_parsed_numbers():
    inputs = CalculationInputs(date_from_text="july", date_to_text="", delivery_amount_text="x", k_text=" 3 ", o_text="2")
    record = results_to_csv(inputs, compute_results(inputs, TODAY))
    assert record.split("\n")[1] == "july,,0,0,0,0.00,0.00,3,2,6.00"


def test_csv_quotes_fields_with_commas():
    inputs = CalculationInputs(date_from_text="10,07,2016")
    data = results_to_csv(inputs, compute_results(inputs, TODAY)).split("\n")[1]
    assert data.startswith('"10,07,2016",')


def test_results_to_dict():
    record = results_to_dict(INPUTS, compute_results(INPUTS, TODAY))
    assert list(record) == CSV_HEADER
    assert record["months"] == 12
    assert record["costing"] == "19448.00"
    assert record["delivery"] == "2500"


def test_print_results(capsys):
    print_results(compute_results(INPUTS, TODAY))
    out = capsys.readouterr().out
    assert "Completed months (DATEDIF m):" in out
    assert "19448.00" in out
    assert "3100.00" in out
