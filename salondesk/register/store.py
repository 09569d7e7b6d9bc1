"""Mini README: The cash register and its per-day summaries.

Structure:
    * CashRegister - holds transactions, expenses, staff and opening floats,
      persists them to an optional JSON snapshot and recomputes the affected
      day's summary after every mutation.

Every mutation runs under one lock as read, compute, write: the record set
is changed, the day's summary is recomputed from source with
:func:`compute_summary`, and the snapshot is written. When the write fails
the in-memory state is restored and an :class:`OperationResult` describing
the failure is returned, so a stored summary never disagrees with the
records it was computed from. Lookups that miss are reported the same way.

Days are created lazily. A day first touched while it has no records opens
with a zero float; a day that already holds records (for example imported
from an older snapshot) falls back to the configured default float.
"""

from __future__ import annotations

import json
import os
import threading
from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Callable, Dict, List, Optional

from ..configuration import SalonDeskSettings
from ..logging_utils import get_logger
from .dates import day_key, day_of_timestamp, format_timestamp, parse_day, records_for_day
from .models import (
    ZERO,
    DailySummary,
    Employee,
    Expense,
    OperationResult,
    PaymentMethod,
    Transaction,
    stored_amount,
)
from .summary import compute_summary
from .transactions import TransactionDraft, create_transaction, to_amount

LOGGER = get_logger(__name__)


@dataclass(slots=True)
class _State:
    transactions: Dict[str, Transaction]
    expenses: Dict[str, Expense]
    employees: Dict[str, Employee]
    opening_floats: Dict[str, Decimal]
    summaries: Dict[str, DailySummary]


class CashRegister:
    """Manage the salon's register with day-scoped summaries."""

    def __init__(
        self,
        snapshot_path: Optional[Path] = None,
        *,
        default_opening_float: Decimal = Decimal("4090"),
        card_surcharge_rate: Decimal = Decimal("0.05"),
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._snapshot_path = Path(snapshot_path) if snapshot_path is not None else None
        self._default_opening_float = Decimal(default_opening_float)
        self._card_surcharge_rate = Decimal(card_surcharge_rate)
        self._clock = clock or datetime.now
        self._lock = threading.RLock()
        self._last_id = 0
        self._state = _State({}, {}, {}, {}, {})
        self.load_error: Optional[str] = None
        if self._snapshot_path is not None and self._snapshot_path.exists():
            self._load(self._snapshot_path)
        LOGGER.debug(
            "Cash register initialised with %s transactions, %s expenses, %s employees",
            len(self._state.transactions),
            len(self._state.expenses),
            len(self._state.employees),
        )

    @classmethod
    def from_settings(cls, settings: SalonDeskSettings) -> "CashRegister":
        """Build a register using the configured defaults and snapshot path."""

        return cls(
            settings.register_path if settings.persist_register else None,
            default_opening_float=settings.default_opening_float,
            card_surcharge_rate=settings.card_surcharge_rate,
        )

    # ------------------------------------------------------------------ reads

    def today(self) -> str:
        """Day key for the register clock's current date."""

        return day_key(self._clock())

    def summary(self, day: Optional[str] = None) -> DailySummary:
        """Return the recomputed summary for ``day`` (today by default).

        Raises:
            ValueError: if ``day`` is not a ``DD/MM/YYYY`` key.
        """

        day = self._resolve_day(day)
        with self._lock:
            created = self._ensure_day(day)
            summary = self._recompute(day)
            if created:
                error = self._persist()
                if error:
                    LOGGER.warning("Summary for %s created but not persisted: %s", day, error)
            return summary

    def transactions_for_day(self, day: Optional[str] = None) -> List[Transaction]:
        day = self._resolve_day(day)
        with self._lock:
            return records_for_day(self._state.transactions.values(), day)

    def expenses_for_day(self, day: Optional[str] = None) -> List[Expense]:
        day = self._resolve_day(day)
        with self._lock:
            return records_for_day(self._state.expenses.values(), day)

    def list_employees(self) -> List[Employee]:
        with self._lock:
            return list(self._state.employees.values())

    # ------------------------------------------------------------- mutations

    def add_transaction(self, draft: TransactionDraft) -> OperationResult:
        """Record a payment stamped with the current time."""

        with self._lock:
            now = self._clock()
            try:
                transaction = create_transaction(
                    draft,
                    transaction_id=self._next_id(now),
                    created_at=now,
                    card_surcharge_rate=self._card_surcharge_rate,
                )
            except ValueError as error:
                LOGGER.warning("Rejected transaction: %s", error)
                return OperationResult.failed(str(error))
            day = day_key(now)
            previous = self._capture()
            self._ensure_day(day)
            self._state.transactions[transaction.transaction_id] = transaction
            result = self._commit(day, previous, payload=transaction)
            if result.success:
                LOGGER.info(
                    "Recorded %s payment %s of %s for %s",
                    transaction.payment_method.value,
                    transaction.transaction_id,
                    transaction.amount_received,
                    transaction.client,
                )
            return result

    def delete_transaction(self, transaction_id: str) -> OperationResult:
        with self._lock:
            transaction = self._state.transactions.get(transaction_id)
            if transaction is None:
                LOGGER.warning("Cannot delete unknown transaction %s", transaction_id)
                return OperationResult.failed(f"Transaction {transaction_id} not found", not_found=True)
            day = day_of_timestamp(transaction.timestamp)
            previous = self._capture()
            self._ensure_day(day)
            del self._state.transactions[transaction_id]
            result = self._commit(day, previous, return_summary=True)
            if result.success:
                LOGGER.info("Deleted transaction %s", transaction_id)
            return result

    def add_expense(self, amount: object, description: str = "") -> OperationResult:
        """Record cash taken out of the drawer."""

        with self._lock:
            try:
                value = to_amount(amount, "amount")
            except ValueError as error:
                LOGGER.warning("Rejected expense: %s", error)
                return OperationResult.failed(str(error))
            if value < 0:
                return OperationResult.failed("Expense amount cannot be negative.")
            now = self._clock()
            expense = Expense(
                expense_id=self._next_id(now),
                amount=value,
                description=(description or "").strip(),
                timestamp=format_timestamp(now),
            )
            day = day_key(now)
            previous = self._capture()
            self._ensure_day(day)
            self._state.expenses[expense.expense_id] = expense
            result = self._commit(day, previous, payload=expense)
            if result.success:
                LOGGER.info("Recorded expense %s of %s", expense.expense_id, expense.amount)
            return result

    def delete_expense(self, expense_id: str) -> OperationResult:
        with self._lock:
            expense = self._state.expenses.get(expense_id)
            if expense is None:
                LOGGER.warning("Cannot delete unknown expense %s", expense_id)
                return OperationResult.failed(f"Expense {expense_id} not found", not_found=True)
            day = day_of_timestamp(expense.timestamp)
            previous = self._capture()
            self._ensure_day(day)
            del self._state.expenses[expense_id]
            result = self._commit(day, previous, return_summary=True)
            if result.success:
                LOGGER.info("Deleted expense %s", expense_id)
            return result

    def update_opening_float(self, amount: object, day: Optional[str] = None) -> OperationResult:
        """Set a day's opening float and return its recomputed summary."""

        with self._lock:
            try:
                day = self._resolve_day(day)
                value = to_amount(amount, "opening_float")
            except ValueError as error:
                LOGGER.warning("Rejected opening float: %s", error)
                return OperationResult.failed(str(error))
            if value < 0:
                return OperationResult.failed("Opening float cannot be negative.")
            previous = self._capture()
            self._state.opening_floats[day] = value
            result = self._commit(day, previous)
            if not result.success:
                return result
            LOGGER.info("Opening float for %s set to %s", day, value)
            return OperationResult.ok(self._state.summaries[day])

    def add_employee(self, name: str) -> OperationResult:
        with self._lock:
            cleaned = (name or "").strip()
            if not cleaned:
                return OperationResult.failed("Employee name is required.")
            now = self._clock()
            employee = Employee(
                employee_id=self._next_id(now),
                name=cleaned,
                registration_date=day_key(now),
            )
            previous = self._capture()
            self._state.employees[employee.employee_id] = employee
            error = self._persist()
            if error:
                self._state = previous
                return OperationResult.failed(error, storage_failure=True)
            LOGGER.info("Registered employee %s (%s)", employee.name, employee.employee_id)
            return OperationResult.ok(employee)

    def delete_employee(self, employee_id: str) -> OperationResult:
        with self._lock:
            if employee_id not in self._state.employees:
                LOGGER.warning("Cannot delete unknown employee %s", employee_id)
                return OperationResult.failed(f"Employee {employee_id} not found", not_found=True)
            previous = self._capture()
            del self._state.employees[employee_id]
            error = self._persist()
            if error:
                self._state = previous
                return OperationResult.failed(error, storage_failure=True)
            LOGGER.info("Removed employee %s", employee_id)
            return OperationResult.ok()

    def seed_demo_data(self) -> OperationResult:
        """Populate an empty register with demo staff and payments for today."""

        with self._lock:
            if self._state.transactions or self._state.employees:
                return OperationResult.failed("Register already holds data; demo data not added.")
            previous = self._capture()
            for name in ("Ana Garcia", "Laura Perez"):
                result = self.add_employee(name)
                if not result.success:
                    return self._abandon_seed(previous, result)
            demo_payments = [
                TransactionDraft(
                    client="Maria Lopez",
                    payment_method=PaymentMethod.CASH,
                    service_amount="1000",
                    amount_received="1200",
                    served_by="Ana Garcia",
                    notes="Cut and blow-dry",
                ),
                TransactionDraft(
                    client="Pedro Ramirez",
                    payment_method=PaymentMethod.CARD,
                    service_amount="1000",
                    served_by="Laura Perez",
                    notes="Manicure and pedicure",
                ),
                TransactionDraft(
                    client="Sofia Gomez",
                    payment_method=PaymentMethod.TRANSFER,
                    service_amount="1500",
                    amount_received="1500",
                    served_by="Ana Garcia",
                    notes="Full colour",
                ),
            ]
            for draft in demo_payments:
                result = self.add_transaction(draft)
                if not result.success:
                    return self._abandon_seed(previous, result)
            LOGGER.info("Seeded register with demo data")
            return OperationResult.ok(self.summary())

    def _abandon_seed(self, previous: _State, result: OperationResult) -> OperationResult:
        """Undo a partly applied demo seed and report why it stopped."""

        self._state = previous
        error = self._persist()
        if error:
            LOGGER.warning("Demo seed rolled back in memory only: %s", error)
        LOGGER.warning("Demo seed abandoned: %s", result.error)
        return result

    # -------------------------------------------------------------- internals

    def _resolve_day(self, day: Optional[str]) -> str:
        if day is None or not str(day).strip():
            return self.today()
        return day_key(parse_day(day))

    def _ensure_day(self, day: str) -> bool:
        """Create the day's opening float on first touch; True when created."""

        if day in self._state.opening_floats:
            return False
        has_activity = bool(
            records_for_day(self._state.transactions.values(), day)
            or records_for_day(self._state.expenses.values(), day)
        )
        opening_float = self._default_opening_float if has_activity else ZERO
        self._state.opening_floats[day] = opening_float
        LOGGER.debug("Created summary for %s with opening float %s", day, opening_float)
        return True

    def _recompute(self, day: str) -> DailySummary:
        totals = compute_summary(
            self._state.opening_floats.get(day, ZERO),
            records_for_day(self._state.transactions.values(), day),
            records_for_day(self._state.expenses.values(), day),
        )
        summary = DailySummary(date=day, opening_float=self._state.opening_floats.get(day, ZERO), totals=totals)
        self._state.summaries[day] = summary
        return summary

    def _commit(
        self,
        day: str,
        previous: _State,
        payload: Optional[object] = None,
        *,
        return_summary: bool = False,
    ) -> OperationResult:
        """Recompute ``day`` and persist, restoring ``previous`` on failure.

        With ``return_summary`` the recomputed summary of ``day`` becomes the
        payload.
        """

        summary = self._recompute(day)
        error = self._persist()
        if error:
            self._state = previous
            return OperationResult.failed(error, storage_failure=True)
        return OperationResult.ok(summary if return_summary else payload)

    def _capture(self) -> _State:
        state = self._state
        return _State(
            dict(state.transactions),
            dict(state.expenses),
            dict(state.employees),
            dict(state.opening_floats),
            dict(state.summaries),
        )

    def _next_id(self, now: datetime) -> str:
        """Millisecond creation time, bumped when two records share a millisecond."""

        candidate = int(now.timestamp() * 1000)
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return str(candidate)

    def _persist(self) -> Optional[str]:
        """Write the snapshot; return an error message instead of raising."""

        if self._snapshot_path is None:
            return None
        state = self._state
        payload = {
            "transactions": [transaction.as_dict() for transaction in state.transactions.values()],
            "expenses": [expense.as_dict() for expense in state.expenses.values()],
            "employees": [employee.as_dict() for employee in state.employees.values()],
            "daily_summaries": [
                state.summaries[day].as_dict()
                if day in state.summaries
                else {"date": day, "opening_float": str(opening_float)}
                for day, opening_float in state.opening_floats.items()
            ],
        }
        temp_path = self._snapshot_path.with_suffix(".tmp")
        try:
            self._snapshot_path.parent.mkdir(parents=True, exist_ok=True)
            temp_path.write_text(json.dumps(payload, indent=2), encoding="utf-8")
            os.replace(temp_path, self._snapshot_path)
        except OSError as error:
            LOGGER.warning("Failed to write register snapshot %s: %s", self._snapshot_path, error)
            return f"Failed to save register: {error}"
        return None

    def _load(self, path: Path) -> None:
        """Read the snapshot, starting empty when it cannot be used.

        An unreadable file is moved aside to ``*.corrupt.json`` so the next
        write does not overwrite it, and the reason is kept in ``load_error``.
        """

        try:
            state = self._read_snapshot(path)
        except (OSError, ValueError, KeyError, TypeError, AttributeError, InvalidOperation) as error:
            self.load_error = f"Could not load register snapshot {path}: {error}"
            LOGGER.error("%s; starting with an empty register", self.load_error)
            backup = path.with_suffix(".corrupt.json")
            try:
                os.replace(path, backup)
            except OSError as move_error:
                LOGGER.warning("Could not move unreadable snapshot aside: %s", move_error)
            else:
                LOGGER.warning("Unreadable snapshot kept as %s", backup)
            return
        self._state = state
        numeric_ids = [
            int(identifier)
            for identifier in (*state.transactions, *state.expenses, *state.employees)
            if identifier.isdigit()
        ]
        self._last_id = max(numeric_ids, default=0)
        LOGGER.info("Loaded register snapshot from %s", path)

    @staticmethod
    def _read_snapshot(path: Path) -> _State:
        data = json.loads(path.read_text(encoding="utf-8"))
        state = _State({}, {}, {}, {}, {})
        for entry in data.get("transactions", []):
            transaction = Transaction.from_dict(entry)
            state.transactions[transaction.transaction_id] = transaction
        for entry in data.get("expenses", []):
            expense = Expense.from_dict(entry)
            state.expenses[expense.expense_id] = expense
        for entry in data.get("employees", []):
            employee = Employee.from_dict(entry)
            state.employees[employee.employee_id] = employee
        for entry in data.get("daily_summaries", []):
            # Only the float is trusted; totals are recomputed on read.
            state.opening_floats[str(entry["date"])] = stored_amount(entry.get("opening_float"))
        return state
