"""
Tests for the FastAPI endpoints
"""

import pytest
from fastapi.testclient import TestClient

from api.main import app
from sms_tracker.main import SMSMessageParser

from .samples import ATM_SMS, CREDIT_DEPOSIT_SMS, DEBIT_CARD_SMS


@pytest.fixture
def client():
    """Client bound to an app with a fresh parsing session"""
    app.state.parser = SMSMessageParser(mode="template")
    return TestClient(app)


class TestServiceEndpoints:

    def test_root(self, client):
        response = client.get("/")

        assert response.status_code == 200
        assert "POST /parse" in response.json()["endpoints"]

    def test_health(self, client):
        response = client.get("/health")

        assert response.status_code == 200
        assert response.json()["status"] == "healthy"


class TestParseEndpoint:

    def test_success(self, client):
        response = client.post("/parse", json={"message": DEBIT_CARD_SMS})

        assert response.status_code == 200
        transaction = response.json()["transaction"]
        assert list(transaction.keys()) == [
            "date", "amount", "currency", "type", "merchant", "card_last4", "category", "raw"
        ]
        assert transaction["amount"] == 15.75
        assert transaction["card_last4"] == "9098"

    def test_duplicate_conflict(self, client):
        client.post("/parse", json={"message": DEBIT_CARD_SMS})
        response = client.post("/parse", json={"message": DEBIT_CARD_SMS})

        assert response.status_code == 409
        assert response.json()["detail"] == "This message has already been parsed"

    def test_empty_message(self, client):
        response = client.post("/parse", json={"message": "   "})
        assert response.status_code == 400

    def test_incomplete_extraction(self, client):
        response = client.post("/parse", json={"message": "Hello from your bank"})

        assert response.status_code == 422
        assert "amount" in response.json()["detail"]

    def test_missing_body_field(self, client):
        response = client.post("/parse", json={})
        assert response.status_code == 422


class TestBatchEndpoint:

    def test_partial_batch(self, client):
        response = client.post("/parse/batch", json={"messages": [DEBIT_CARD_SMS, "", ATM_SMS]})

        assert response.status_code == 200
        body = response.json()
        assert body["status"] == "partial"
        assert len(body["transactions"]) == 2
        assert body["errors"][0]["error"] == "EmptyInput"

    def test_empty_batch(self, client):
        response = client.post("/parse/batch", json={"messages": []})
        assert response.status_code == 400


class TestSessionEndpoints:

    def test_transactions_and_summary(self, client):
        client.post("/parse", json={"message": DEBIT_CARD_SMS})
        client.post("/parse", json={"message": ATM_SMS})
        client.post("/parse", json={"message": CREDIT_DEPOSIT_SMS})

        listing = client.get("/transactions").json()
        assert listing["total_transactions"] == 3

        summary = client.get("/summary", params={"month": "2026-02"}).json()
        assert summary["transaction_count"] == 2
        assert summary["total_debit"] == 215.75
        assert summary["by_category"] == {"Other": 215.75}

    @pytest.mark.parametrize("month", ["Feb 2026", "2026-2", "2026-13", "2026-02-01"])
    def test_summary_rejects_bad_month(self, client, month):
        client.post("/parse", json={"message": DEBIT_CARD_SMS})

        response = client.get("/summary", params={"month": month})
        assert response.status_code == 400

    def test_reset_session(self, client):
        client.post("/parse", json={"message": ATM_SMS})
        assert client.delete("/session").status_code == 200

        response = client.post("/parse", json={"message": ATM_SMS})
        assert response.status_code == 200
        assert client.get("/transactions").json()["total_transactions"] == 1
