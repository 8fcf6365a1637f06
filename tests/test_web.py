from datetime import date

import pytest

from formula_calc_web.app import app


@pytest.fixture
def client():
    app.config["TESTING"] = True
    with app.test_client() as client:
        yield client


FORM = {
    "date_from": "2016-07-10",
    "date_to": "2017-07-10",
    "delivery_amount": "2500",
    "interest_rate": "0.02",
    "k": "2860",
    "o": "6.8",
}


def test_index_shows_defaults(client):
    response = client.get("/")
    assert response.status_code == 200
    body = response.get_data(as_text=True)
    assert date.today().isoformat() in body
    assert "19448.00" in body
    assert 'value="2500"' in body


def test_post_recomputes(client):
    body = client.post("/", data=FORM).get_data(as_text=True)
    assert "600.00" in body
    assert "3100.00" in body


def test_validate_action_reports_bad_date(client):
    body = client.post("/", data={**FORM, "date_from": "", "action": "validate"}).get_data(as_text=True)
    assert "Please enter valid Date From (yyyy-MM-dd)" in body


def test_validate_action_reports_success(client):
    body = client.post("/", data={**FORM, "action": "validate"}).get_data(as_text=True)
    assert "Computation done, see results" in body


def test_export_csv(client):
    response = client.post("/export.csv", data=FORM)
    assert response.status_code == 200
    assert response.mimetype == "text/csv"
    assert response.get_data(as_text=True).split("\n")[1] == (
        "2016-07-10,2017-07-10,12,2500,0.02,600.00,3100.00,2860,6.8,19448.00"
    )


def test_api_compute_json(client):
    response = client.post("/api/compute", json=FORM)
    data = response.get_json()
    assert data["valid"] is True
    assert data["results"]["months"] == 12
    assert data["results"]["interest"] == "600.00"


def test_api_compute_bad_input_is_not_an_error(client):
    response = client.post("/api/compute", json={"date_from": "nope", "delivery_amount": "x"})
    assert response.status_code == 200
    data = response.get_json()
    assert data["valid"] is False
    assert data["results"]["months"] == 0
    assert data["results"]["delivery"] == "0"


def test_api_compute_ignores_non_object_json(client):
    response = client.post("/api/compute", json=[1, 2])
    assert response.status_code == 200
    assert response.get_json()["valid"] is False


def test_export_csv_with_overflowing_input(client):
    response = client.post("/export.csv", data={**FORM, "k": "1e999999", "o": "100"})
    assert response.status_code == 200
    assert response.get_data(as_text=True).split("\n")[1].endswith(",Infinity")
