import random
from datetime import timedelta

from moneytalk.services.demo_data import WEEKEND_EXTRAS, generate_demo_transactions

from factories import NOW


def test_dashboard_totals(auth_client):
    for fields in (
        {"amount": 2000, "type": "income", "category": "Salary", "description": "Pay"},
        {"amount": 150, "type": "expense", "category": "Bills", "description": "Internet"},
        {"amount": 50, "type": "expense", "category": "Food", "description": "Dinner"},
    ):
        auth_client.post("/transactions/", json=fields)

    body = auth_client.get("/dashboard/").get_json()

    assert body["total_income"] == 2000
    assert body["total_expense"] == 200
    assert body["balance"] == 1800
    assert body["transaction_count"] == 3
    assert body["offer_demo_data"] is False
    assert body["has_openai_key"] is False


def test_new_account_is_offered_demo_data(auth_client):
    body = auth_client.get("/dashboard/").get_json()
    assert body["transaction_count"] == 0
    assert body["offer_demo_data"] is True


def test_seed_reset_and_clear(auth_client):
    resp = auth_client.post("/dashboard/seed")
    assert resp.status_code == 201
    created = resp.get_json()["created"]
    assert created == auth_client.get("/dashboard/").get_json()["transaction_count"]

    assert auth_client.post("/dashboard/seed").status_code == 409

    body = auth_client.post("/dashboard/reset-demo").get_json()
    assert body["deleted"] == created
    assert body["created"] == auth_client.get("/dashboard/").get_json()["transaction_count"]

    body = auth_client.post("/dashboard/clear").get_json()
    assert body["deleted"] > 0
    assert auth_client.get("/transactions/").get_json()["transactions"] == []


def test_demo_transactions_shape():
    rows = generate_demo_transactions(1, NOW, random.Random(7))

    assert 5 * 8 + 12 <= len(rows) <= 5 * 15 + 12
    assert all(r.amount > 0 for r in rows)
    assert all(r.type in ("income", "expense") for r in rows)
    assert all(r.created_at <= NOW for r in rows)
    assert min(r.created_at for r in rows) >= NOW - timedelta(days=35)

    extras = {description for _, _, description in WEEKEND_EXTRAS}
    weekend_rows = [r for r in rows if r.description in extras]
    assert len(weekend_rows) == 12
    assert all(r.created_at.weekday() >= 5 for r in weekend_rows)

    refunds = [r for r in rows if r.type == "income" and r.category == "Bills"]
    assert all(r.description == "Bill refund" for r in refunds)
