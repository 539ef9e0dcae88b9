"""API tests against an in-memory history store."""
import pytest
from fastapi.testclient import TestClient

from candle_pricing.api.main import app
from candle_pricing.api.state import get_history


@pytest.fixture
def client(history):
    app.dependency_overrides[get_history] = lambda: history
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_root(client):
    response = client.get("/")
    assert response.status_code == 200
    assert response.json()["status"] == "online"


def test_constants(client):
    data = client.get("/constants").json()
    assert data["drops_per_ml"] == 20
    assert data["color_price_per_100ml"] == 149
    assert data["price_per_drop"] == pytest.approx(0.0745)
    assert data["wax_rates_per_kg"] == [170, 175]
    assert data["history_limit"] == 10


def test_calculate(client, sample_inputs):
    response = client.post("/calculate", json=dict(sample_inputs, name="Rose"))
    assert response.status_code == 200

    data = response.json()
    assert data["waxCost"] == pytest.approx(34.5)
    assert data["total"] == pytest.approx(97.445)
    assert data["sellingPrice"] == pytest.approx(126.6785)
    assert data["gstAmount"] == 0
    assert data["formatted"]["sellingPrice"] == "₹126.68"
    assert data["text"].startswith("Candle: Rose")


def test_calculate_coerces_bad_values(client):
    data = client.post("/calculate", json={"jarCost": "abc", "wick": "5", "profitPct": -20}).json()
    assert data["jarCost"] == 0
    assert data["total"] == 5
    assert data["sellingPrice"] == 5


def test_history_lifecycle(client, history, sample_inputs):
    assert client.get("/history").json() == []

    saved = client.post("/history", json={"name": "Rose", "inputs": sample_inputs}).json()
    assert saved["inputs"]["name"] == "Rose"
    assert saved["outputs"]["sellingPrice"] == pytest.approx(126.6785)
    assert len(history) == 1

    listed = client.get("/history").json()
    assert [r["inputs"]["name"] for r in listed] == ["Rose"]

    assert client.delete("/history").json()["success"] is True
    assert client.get("/history").json() == []


def test_calculate_huge_integer_returns_nulls(client):
    response = client.post("/calculate", json={"jarCost": 10 ** 400, "profitPct": 30})
    assert response.status_code == 200

    data = response.json()
    assert data["jarCost"] is None
    assert data["total"] is None
    assert data["formatted"]["total"] == "₹0.00"
    assert "Total Cost: ₹0.00" in data["text"]


def test_history_with_huge_profit(client, history):
    saved = client.post("/history", json={"name": "Huge", "inputs": {"jar": 10, "profitPct": 10 ** 400}})
    assert saved.status_code == 200
    assert saved.json()["inputs"]["profitPct"] is None

    listed = client.get("/history")
    assert listed.status_code == 200
    assert listed.json()[0]["outputs"]["sellingPrice"] is None
    assert history.to_dataframe().iloc[0]["Name"] == "Huge"
