"""Mini README: Tests for the CSV day report.

Structure:
    * test_format_currency - symbol, grouping and two decimals.
    * test_report_counts_clients_per_employee - staff section counts.
    * test_report_uses_register_summary - totals come from the register.
    * test_csv_omits_empty_sections_and_writes_file - CSV layout on disk.

Checks currency formatting, the staff "clients served" counts and that the
report reuses the register's summary rather than adding amounts itself.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from salondesk.export import DayReport, format_currency
from salondesk.register import CashRegister, TransactionDraft


def _register() -> CashRegister:
    register = CashRegister(clock=lambda: datetime(2024, 5, 10, 10, 0))
    register.update_opening_float("4090")
    register.add_employee("Ana Garcia")
    register.add_employee("Laura Perez")
    for client in ("Maria Lopez", "Sofia Gomez"):
        register.add_transaction(
            TransactionDraft(
                client=client,
                payment_method="cash",
                service_amount="500",
                amount_received="500",
                served_by="Ana Garcia",
            )
        )
    return register


def test_format_currency() -> None:
    assert format_currency(Decimal("1234.5")) == "RD$1,234.50"
    assert format_currency(Decimal("-30"), "$") == "-$30.00"


def test_report_counts_clients_per_employee() -> None:
    report = DayReport.build(_register())

    rows = report.employee_rows()

    assert rows[0] == ["Name", "Registration date", "Clients served"]
    assert rows[1:] == [["Ana Garcia", "10/05/2024", "2"], ["Laura Perez", "10/05/2024", "0"]]


def test_report_uses_register_summary() -> None:
    register = _register()
    report = DayReport.build(register, "10/05/2024")

    assert report.summary == register.summary("10/05/2024")
    assert ["Cash in register", "RD$5,090.00"] in report.summary_rows()
    assert ["Transactions", "2"] in report.summary_rows()


def test_csv_omits_empty_sections_and_writes_file(tmp_path) -> None:
    report = DayReport.build(_register())

    text = report.to_csv()
    assert "TRANSACTIONS" in text
    assert "STAFF" in text
    assert "EXPENSES" not in text

    path = report.write_csv(tmp_path / "reports")
    assert path.name == "control-caja-10-05-2024.csv"
    assert path.read_text(encoding="utf-8") == text
