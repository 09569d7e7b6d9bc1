"""Mini README: Tests for the FastAPI cash desk routes.

Structure:
    * test_dashboard_reports_today - empty day payload for the fixed clock.
    * test_transactions_update_summary - scenario totals through the routes.
    * test_invalid_transaction_returns_400 - bad input maps to 400.
    * test_unknown_ids_return_404 - deletes of missing records map to 404.
    * test_summary_rejects_malformed_day - day keys must be DD/MM/YYYY.
    * test_employee_routes - roster add, list and delete.
    * test_export_returns_csv_report - CSV download of the day report.
    * test_delete_reports_the_day_the_record_belonged_to - deletes return the
      summary of the record's own day.
    * test_dashboard_surfaces_unreadable_snapshot - load errors reach the UI.

The application is built around an in-memory register with a fixed clock so
responses can be compared against known totals.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from salondesk.interface import create_application
from salondesk.register import CashRegister


@pytest.fixture()
def client() -> TestClient:
    register = CashRegister(clock=lambda: datetime(2024, 5, 10, 16, 45))
    return TestClient(create_application(register))


def _record_scenario(client: TestClient) -> dict:
    client.post("/opening-float", data={"amount": "4090"})
    cash = client.post(
        "/transactions",
        data={
            "client": "Maria Lopez",
            "payment_method": "cash",
            "service_amount": "1000",
            "amount_received": "1200",
            "served_by": "Ana Garcia",
        },
    )
    client.post(
        "/transactions",
        data={
            "client": "Pedro Ramirez",
            "payment_method": "card",
            "service_amount": "1000",
            "served_by": "Laura Perez",
        },
    )
    client.post("/expenses", data={"amount": "150", "description": "Coffee"})
    return cash.json()


def test_dashboard_reports_today(client: TestClient) -> None:
    response = client.get("/")

    assert response.status_code == 200
    payload = response.json()
    assert payload["summary"]["date"] == "10/05/2024"
    assert payload["summary"]["opening_float"] == "0"
    assert payload["transactions"] == []
    assert payload["currency_symbol"] == "RD$"


def test_transactions_update_summary(client: TestClient) -> None:
    cash = _record_scenario(client)

    assert cash["transaction"]["change_given"] == "200"
    assert cash["transaction"]["timestamp"] == "10/05/2024 04:45 PM"
    summary = client.get("/summary").json()
    assert summary["closing_cash_balance"] == "4940"
    assert summary["grand_total"] == "5990.00"

    response = client.delete(f"/transactions/{cash['transaction']['transaction_id']}")
    assert response.status_code == 200
    assert response.json()["summary"]["closing_cash_balance"] == "3940"


def test_invalid_transaction_returns_400(client: TestClient) -> None:
    response = client.post(
        "/transactions",
        data={"client": "Maria", "payment_method": "bitcoin", "service_amount": "10", "served_by": "Ana"},
    )

    assert response.status_code == 400
    assert "payment method" in response.json()["detail"]


def test_unknown_ids_return_404(client: TestClient) -> None:
    assert client.delete("/transactions/nope").status_code == 404
    assert client.delete("/expenses/nope").status_code == 404
    assert client.delete("/employees/nope").status_code == 404


def test_summary_rejects_malformed_day(client: TestClient) -> None:
    assert client.get("/summary", params={"day": "2024-05-10"}).status_code == 400


def test_employee_routes(client: TestClient) -> None:
    created = client.post("/employees", data={"name": "Ana Garcia"})
    assert created.status_code == 201

    listing = client.get("/employees").json()["employees"]
    assert [employee["name"] for employee in listing] == ["Ana Garcia"]

    employee_id = created.json()["employee_id"]
    assert client.delete(f"/employees/{employee_id}").status_code == 200
    assert client.get("/employees").json()["employees"] == []


def test_export_returns_csv_report(client: TestClient) -> None:
    _record_scenario(client)

    response = client.get("/export", params={"day": "10/05/2024"})

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert "control-caja-10-05-2024.csv" in response.headers["content-disposition"]
    assert "Grand total,\"RD$5,990.00\"" in response.text


def test_delete_reports_the_day_the_record_belonged_to() -> None:
    """Deleting yesterday's records returns yesterday's recomputed totals."""

    moments = {"now": datetime(2024, 5, 10, 16, 45)}
    register = CashRegister(clock=lambda: moments["now"])
    client = TestClient(create_application(register))
    sale = client.post(
        "/transactions",
        data={
            "client": "Maria Lopez",
            "payment_method": "cash",
            "service_amount": "500",
            "amount_received": "500",
            "served_by": "Ana Garcia",
        },
    ).json()["transaction"]
    expense = client.post("/expenses", data={"amount": "20", "description": "Coffee"}).json()["expense"]
    moments["now"] = datetime(2024, 5, 11, 9, 0)

    deleted_sale = client.delete(f"/transactions/{sale['transaction_id']}").json()
    deleted_expense = client.delete(f"/expenses/{expense['expense_id']}").json()

    assert deleted_sale["summary"]["date"] == "10/05/2024"
    assert deleted_sale["summary"]["total_cash"] == "0"
    assert deleted_expense["summary"]["date"] == "10/05/2024"
    assert deleted_expense["summary"]["total_expenses"] == "0"


def test_dashboard_surfaces_unreadable_snapshot(tmp_path) -> None:
    snapshot = tmp_path / "register.json"
    snapshot.write_text("[1, 2", encoding="utf-8")
    register = CashRegister(snapshot, clock=lambda: datetime(2024, 5, 10, 16, 45))

    payload = TestClient(create_application(register)).get("/").json()

    assert payload["messages"][0].startswith("Could not load register snapshot")
