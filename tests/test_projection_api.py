from __future__ import annotations

from math import isclose

from flask.testing import FlaskClient


def projection_payload() -> dict:
    return {
        "startingAmount": 1000,
        "monthlyContribution": 500,
        "annualRatePercent": 8,
        "horizonYears": 30,
        "targetYearlySpend": 40000,
    }


def test_projection_endpoint_returns_series_and_summary(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload())

    assert resp.status_code == 200
    body = resp.get_json()
    assert len(body["series"]) == 360
    assert body["series"][0]["monthIndex"] == 1
    assert body["series"][0]["label"] == "Year 1"
    assert body["series"][-1]["balance"] == body["finalBalance"]
    assert body["fireTarget"] == 1_000_000
    assert body["fireYearFraction"] is None
    assert body["totalContributed"] == 181_000
    assert isclose(body["totalContributed"] + body["totalGain"], body["finalBalance"])
    assert set(body["milestones"]) == {"100k", "250k", "500k", "1M"}
    assert body["milestones"]["1M"] is None


def test_projection_display_block_uses_request_currency(client: FlaskClient):
    resp = client.post("/api/projection", json=projection_payload())

    display = resp.get_json()["display"]
    assert display["currency"] == "USD"
    assert display["fireTarget"] == "$1.00M"
    assert display["totalContributed"] == "$181.0k"
    assert display["yearsToFire"] == "N/A"
    assert display["milestones"]["1M"] == "Pending..."
    assert display["milestones"]["100k"].endswith(" years")


def test_idr_amounts_are_converted_to_base_before_simulating(client: FlaskClient, app):
    rate = app.config["USD_TO_IDR_RATE"]
    payload = projection_payload()
    payload.update(
        {
            "currency": "IDR",
            "startingAmount": 1000 * rate,
            "monthlyContribution": 500 * rate,
            "targetYearlySpend": 40000 * rate,
        }
    )

    idr = client.post("/api/projection", json=payload).get_json()
    usd = client.post("/api/projection", json=projection_payload()).get_json()

    assert isclose(idr["finalBalance"], usd["finalBalance"], rel_tol=1e-9)
    assert isclose(idr["fireTarget"], 1_000_000, rel_tol=1e-9)
    assert idr["display"]["currency"] == "IDR"
    assert idr["display"]["fireTarget"].startswith("Rp ")


def test_invalid_payload_returns_400(client: FlaskClient):
    resp = client.post("/api/projection", json={"startingAmount": 1000})

    assert resp.status_code == 400
    body = resp.get_json()
    assert "detail" in body


def test_zero_horizon_is_rejected(client: FlaskClient):
    payload = projection_payload()
    payload["horizonYears"] = 0

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 400
    assert resp.get_json()["detail"][0]["loc"] == ["horizonYears"]


def test_unknown_fields_are_rejected(client: FlaskClient):
    payload = projection_payload()
    payload["inflation"] = 0.03

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 400


def test_overflow_returns_422(client: FlaskClient):
    payload = projection_payload()
    payload.update({"startingAmount": 1.7e308, "annualRatePercent": 100})

    resp = client.post("/api/projection", json=payload)

    assert resp.status_code == 422
    assert "month 1" in resp.get_json()["error"][0]


def test_overflowing_totals_return_422(client: FlaskClient):
    """
    Every balance stays finite here, only the contributed total overflows.
    """
    resp = client.post(
        "/api/projection",
        json={
            "startingAmount": 0,
            "monthlyContribution": 1e306,
            "annualRatePercent": -100,
            "horizonYears": 200,
            "targetYearlySpend": 0,
        },
    )

    assert resp.status_code == 422
    assert resp.get_json()["error"] == ["total_contributed is no longer finite at month 2400"]


def test_sweep_returns_one_scenario_per_rate(client: FlaskClient):
    resp = client.post(
        "/api/projection/sweep",
        json={"parameters": projection_payload(), "annualRatePercents": [4, 8, 12]},
    )

    assert resp.status_code == 200
    scenarios = resp.get_json()["scenarios"]
    assert [s["annualRatePercent"] for s in scenarios] == [4, 8, 12]
    finals = [s["finalBalance"] for s in scenarios]
    assert finals == sorted(finals)
    # 12% for 30 years clears a million
    assert scenarios[2]["milestones"]["1M"] is not None


def test_sweep_rejects_too_many_rates(client: FlaskClient, app):
    rates = list(range(app.config["MAX_SWEEP_RATES"] + 1))

    resp = client.post(
        "/api/projection/sweep",
        json={"parameters": projection_payload(), "annualRatePercents": rates},
    )

    assert resp.status_code == 400
    assert resp.get_json()["error"] == [f"at most {app.config['MAX_SWEEP_RATES']} rates per sweep"]


def test_sweep_requires_rates(client: FlaskClient):
    resp = client.post(
        "/api/projection/sweep",
        json={"parameters": projection_payload(), "annualRatePercents": []},
    )

    assert resp.status_code == 400
