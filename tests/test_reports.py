from datetime import datetime

from moneytalk.services.reports import build_report, period_bounds

from factories import NOW, make_tx

TRANSACTIONS = [
    make_tx(1000, "Salary", datetime(2026, 10, 2, 9), type="income"),
    make_tx(50, "Food", datetime(2026, 10, 13, 19)),
    make_tx(30, "Transport", datetime(2026, 10, 14, 8)),
    make_tx(20, "Food", datetime(2026, 10, 14, 12)),
    make_tx(99, "Bills", datetime(2026, 9, 30)),
]


def test_period_bounds():
    assert period_bounds("weekly", NOW) == (datetime(2026, 10, 11), datetime(2026, 10, 17, 23, 59, 59, 999999))
    assert period_bounds("monthly", NOW) == (datetime(2026, 10, 1), datetime(2026, 10, 31, 23, 59, 59, 999999))


def test_monthly_report():
    report = build_report(TRANSACTIONS, "monthly", NOW)

    assert report["summary"] == {
        "total_income": 1000,
        "total_expenses": 100,
        "net_income": 900,
        "transaction_count": 4,
    }
    assert report["categories"] == [
        {"category": "Food", "amount": 70},
        {"category": "Transport", "amount": 30},
    ]
    assert report["series"] == {
        "labels": ["Week 1", "Week 2", "Week 3", "Week 4", "Week 5"],
        "income": [1000, 0, 0, 0, 0],
        "expenses": [0, 0, 100, 0, 0],
    }


def test_weekly_report():
    report = build_report(TRANSACTIONS, "weekly", NOW)

    assert report["view"] == "weekly"
    assert report["summary"]["total_income"] == 0
    assert report["summary"]["transaction_count"] == 3
    assert report["series"]["labels"] == ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]
    assert report["series"]["expenses"] == [0, 0, 50, 50, 0, 0, 0]


def test_unknown_view_falls_back_to_monthly():
    assert build_report([], "yearly", NOW)["view"] == "monthly"


def test_report_route(auth_client):
    auth_client.post("/transactions/", json={
        "amount": 12, "type": "expense", "category": "Drinks", "description": "Coffee",
    })

    body = auth_client.get("/reports/?view=weekly").get_json()

    assert body["view"] == "weekly"
    assert body["summary"]["total_expenses"] == 12
    assert body["categories"] == [{"category": "Drinks", "amount": 12}]
