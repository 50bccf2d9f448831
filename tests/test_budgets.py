import pytest

from moneytalk.errors import ValidationFailure
from moneytalk.services.budgets import parse_budget_limits


def _limits(client):
    return client.get("/budgets/").get_json()["limits"]


def test_empty_budgets_show_presets(auth_client):
    body = auth_client.get("/budgets/").get_json()
    assert body["limits"] == []
    assert body["presets"][0] == "Food"
    assert len(body["presets"]) == 10


def test_save_replaces_whole_set(auth_client):
    resp = auth_client.put("/budgets/", json={"limits": [
        {"category": "Food", "monthly_limit": 300},
        {"category": "Bills", "monthly_limit": "450.5"},
    ]})
    assert resp.status_code == 200
    assert [(b["category"], b["monthly_limit"]) for b in resp.get_json()["limits"]] == [
        ("Bills", 450.5), ("Food", 300.0),
    ]

    auth_client.put("/budgets/", json={"limits": [{"category": "Travel", "monthly_limit": 90}]})
    assert [b["category"] for b in _limits(auth_client)] == ["Travel"]

    auth_client.put("/budgets/", json={"limits": []})
    assert _limits(auth_client) == []


def test_invalid_save_leaves_existing_limits(auth_client):
    auth_client.put("/budgets/", json={"limits": [{"category": "Food", "monthly_limit": 300}]})

    resp = auth_client.put("/budgets/", json={"limits": [
        {"category": "Groceries", "monthly_limit": 100},
        {"category": "groceries", "monthly_limit": 50},
    ]})

    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Budget limit for groceries already exists"
    assert [b["category"] for b in _limits(auth_client)] == ["Food"]


def test_save_requires_json_object(auth_client):
    resp = auth_client.put("/budgets/", data="limits", content_type="text/plain")
    assert resp.status_code == 400


@pytest.mark.parametrize("rows", [
    "Food",
    [{"category": "", "monthly_limit": 10}],
    [{"category": "Food", "monthly_limit": 0}],
    [{"category": "Food", "monthly_limit": -5}],
    [{"category": "Food", "monthly_limit": "lots"}],
    [{"category": "Food", "monthly_limit": "nan"}],
    [{"category": "Food", "monthly_limit": "inf"}],
    [{"category": 7, "monthly_limit": 10}],
    ["Food"],
])
def test_parse_rejects_bad_rows(rows):
    with pytest.raises(ValidationFailure):
        parse_budget_limits(rows)


def test_parse_trims_categories():
    assert parse_budget_limits([{"category": "  Kids ", "monthly_limit": 20}]) == [("Kids", 20.0)]


def test_save_rejects_non_finite_limit(auth_client):
    resp = auth_client.put("/budgets/", json={"limits": [{"category": "Food", "monthly_limit": "nan"}]})
    assert resp.status_code == 400
    assert resp.get_json()["message"] == "Please enter a valid category and limit amount"
    assert _limits(auth_client) == []
