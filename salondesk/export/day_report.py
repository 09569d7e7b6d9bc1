"""Mini README: Export a day's register activity as a CSV report.

Structure:
    * format_currency - renders amounts such as ``RD$1,234.50``.
    * DayReport - gathers the summary, transaction, expense and staff
      sections for one day and writes them as CSV.

The report reads the register's already computed :class:`DailySummary`; it
never adds up transactions itself, so exported totals always match the ones
shown by the web interface.
"""

from __future__ import annotations

import csv
import io
from collections import Counter
from dataclasses import dataclass
from decimal import Decimal
from pathlib import Path
from typing import List, Sequence

from ..logging_utils import get_logger
from ..register import CashRegister, DailySummary, Employee, Expense, Transaction

LOGGER = get_logger(__name__)


def format_currency(amount: Decimal, symbol: str = "RD$") -> str:
    """Format an amount with thousands separators and two decimals."""

    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


@dataclass(slots=True)
class DayReport:
    """Everything exported for a single day."""

    summary: DailySummary
    transactions: List[Transaction]
    expenses: List[Expense]
    employees: List[Employee]
    currency_symbol: str = "RD$"
    title: str = "Salon cash control"

    @classmethod
    def build(cls, register: CashRegister, day: str | None = None, *, currency_symbol: str = "RD$") -> "DayReport":
        summary = register.summary(day)
        return cls(
            summary=summary,
            transactions=register.transactions_for_day(summary.date),
            expenses=register.expenses_for_day(summary.date),
            employees=register.list_employees(),
            currency_symbol=currency_symbol,
        )

    @property
    def filename(self) -> str:
        return f"control-caja-{self.summary.date.replace('/', '-')}.csv"

    def clients_served(self) -> Counter:
        """Number of the day's transactions handled by each staff member."""

        return Counter(transaction.served_by for transaction in self.transactions)

    def summary_rows(self) -> List[Sequence[str]]:
        money = self._money
        summary = self.summary
        return [
            ["Opening float", money(summary.opening_float)],
            ["Total cash received", money(summary.total_cash)],
            ["Cash in register", money(summary.closing_cash_balance)],
            ["Total transfers", money(summary.total_transfers)],
            ["Total change given", money(summary.total_change_given)],
            ["Total expenses", money(summary.total_expenses)],
            ["Grand total", money(summary.grand_total)],
            ["Transactions", str(len(self.transactions))],
            ["Registered staff", str(len(self.employees))],
        ]

    def transaction_rows(self) -> List[Sequence[str]]:
        header = ["Client", "Date and time", "Payment method", "Received", "Service", "Change", "Served by", "Notes"]
        rows: List[Sequence[str]] = [header]
        for transaction in self.transactions:
            rows.append(
                [
                    transaction.client,
                    transaction.timestamp,
                    transaction.payment_method.value,
                    self._money(transaction.amount_received),
                    self._money(transaction.service_amount),
                    self._money(transaction.change_given),
                    transaction.served_by,
                    transaction.notes,
                ]
            )
        return rows

    def expense_rows(self) -> List[Sequence[str]]:
        rows: List[Sequence[str]] = [["Description", "Date and time", "Amount"]]
        for expense in self.expenses:
            rows.append([expense.description, expense.timestamp, self._money(expense.amount)])
        return rows

    def employee_rows(self) -> List[Sequence[str]]:
        served = self.clients_served()
        rows: List[Sequence[str]] = [["Name", "Registration date", "Clients served"]]
        for employee in self.employees:
            rows.append([employee.name, employee.registration_date, str(served.get(employee.name, 0))])
        return rows

    def to_csv(self) -> str:
        """Render the report; record sections with no entries are omitted."""

        buffer = io.StringIO()
        writer = csv.writer(buffer, lineterminator="\n")
        writer.writerow([self.title.upper()])
        writer.writerow([f"Date: {self.summary.date}"])
        writer.writerow([])
        writer.writerow(["DAY SUMMARY"])
        writer.writerows(self.summary_rows())
        sections = (
            ("TRANSACTIONS", self.transactions, self.transaction_rows),
            ("EXPENSES", self.expenses, self.expense_rows),
            ("STAFF", self.employees, self.employee_rows),
        )
        for heading, records, build_rows in sections:
            if not records:
                continue
            writer.writerow([])
            writer.writerow([heading])
            writer.writerows(build_rows())
        return buffer.getvalue()

    def write_csv(self, output_directory: Path) -> Path:
        """Write the report into ``output_directory`` and return its path."""

        output_directory.mkdir(parents=True, exist_ok=True)
        destination = output_directory / self.filename
        LOGGER.info("Exporting report for %s to %s", self.summary.date, destination)
        destination.write_text(self.to_csv(), encoding="utf-8")
        return destination

    def _money(self, amount: Decimal) -> str:
        return format_currency(amount, self.currency_symbol)
