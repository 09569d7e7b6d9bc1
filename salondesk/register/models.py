"""Mini README: Record types shared by the cash register.

Structure:
    * PaymentMethod - closed set of ways a client can pay.
    * Transaction - immutable service payment.
    * Expense - immutable incidental cash outlay.
    * Employee - staff roster entry.
    * SummaryTotals - the derived figures produced by the summary engine.
    * DailySummary - one day's opening float plus its derived totals.
    * OperationResult - explicit success/failure value returned by the register.

Money is held as :class:`decimal.Decimal` throughout. Records serialise to
plain dictionaries with string amounts so JSON snapshots round-trip exactly.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Dict, Mapping, Optional

ZERO = Decimal("0")


def stored_amount(value: object) -> Decimal:
    """Read an amount from a decoded snapshot; null or missing means zero.

    Raises:
        ValueError: when the value is present but not a number.
    """

    if value is None or value == "":
        return ZERO
    try:
        amount = Decimal(str(value))
    except InvalidOperation as error:
        raise ValueError(f"Stored amount is not a number: {value!r}") from error
    return amount if amount.is_finite() else ZERO


class PaymentMethod(str, Enum):
    """Enumerate the supported payment methods."""

    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"

    @classmethod
    def from_str(cls, value: str) -> "PaymentMethod":
        """Coerce arbitrary casing into a valid payment method."""

        try:
            normalised = value.strip().lower()
            return cls(normalised)
        except (ValueError, AttributeError) as error:
            raise ValueError(f"Unsupported payment method: {value}") from error

    @property
    def is_transfer(self) -> bool:
        """Card and bank transfers both land outside the cash drawer."""

        return self in (PaymentMethod.CARD, PaymentMethod.TRANSFER)


@dataclass(frozen=True, slots=True)
class Transaction:
    """A recorded service payment."""

    transaction_id: str
    payment_method: PaymentMethod
    amount_received: Decimal
    service_amount: Decimal
    change_given: Decimal
    client: str
    served_by: str
    notes: str
    timestamp: str

    def as_dict(self) -> Dict[str, str]:
        """Export the transaction with serialisable values."""

        return {
            "transaction_id": self.transaction_id,
            "payment_method": self.payment_method.value,
            "amount_received": str(self.amount_received),
            "service_amount": str(self.service_amount),
            "change_given": str(self.change_given),
            "client": self.client,
            "served_by": self.served_by,
            "notes": self.notes,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Transaction":
        return cls(
            transaction_id=str(data["transaction_id"]),
            payment_method=PaymentMethod.from_str(str(data["payment_method"])),
            amount_received=stored_amount(data.get("amount_received")),
            service_amount=stored_amount(data.get("service_amount")),
            change_given=stored_amount(data.get("change_given")),
            client=str(data.get("client", "")),
            served_by=str(data.get("served_by", "")),
            notes=str(data.get("notes", "")),
            timestamp=str(data["timestamp"]),
        )


@dataclass(frozen=True, slots=True)
class Expense:
    """Cash taken out of the drawer for an incidental purchase."""

    expense_id: str
    amount: Decimal
    description: str
    timestamp: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "expense_id": self.expense_id,
            "amount": str(self.amount),
            "description": self.description,
            "timestamp": self.timestamp,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Expense":
        return cls(
            expense_id=str(data["expense_id"]),
            amount=stored_amount(data.get("amount")),
            description=str(data.get("description", "")),
            timestamp=str(data["timestamp"]),
        )


@dataclass(frozen=True, slots=True)
class Employee:
    """Staff roster entry."""

    employee_id: str
    name: str
    registration_date: str

    def as_dict(self) -> Dict[str, str]:
        return {
            "employee_id": self.employee_id,
            "name": self.name,
            "registration_date": self.registration_date,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, object]) -> "Employee":
        return cls(
            employee_id=str(data["employee_id"]),
            name=str(data["name"]),
            registration_date=str(data["registration_date"]),
        )


@dataclass(frozen=True, slots=True)
class SummaryTotals:
    """Figures derived from one day's transactions and expenses."""

    total_cash: Decimal = ZERO
    total_transfers: Decimal = ZERO
    total_change_given: Decimal = ZERO
    total_expenses: Decimal = ZERO
    closing_cash_balance: Decimal = ZERO
    grand_total: Decimal = ZERO

    def as_dict(self) -> Dict[str, str]:
        return {
            "total_cash": str(self.total_cash),
            "total_transfers": str(self.total_transfers),
            "total_change_given": str(self.total_change_given),
            "total_expenses": str(self.total_expenses),
            "closing_cash_balance": str(self.closing_cash_balance),
            "grand_total": str(self.grand_total),
        }


@dataclass(frozen=True, slots=True)
class DailySummary:
    """Opening float for a day plus the totals last computed for it.

    Instances are produced by the register after recomputation; the totals
    are never edited on their own.
    """

    date: str
    opening_float: Decimal
    totals: SummaryTotals = field(default_factory=SummaryTotals)

    @property
    def total_cash(self) -> Decimal:
        return self.totals.total_cash

    @property
    def total_transfers(self) -> Decimal:
        return self.totals.total_transfers

    @property
    def total_change_given(self) -> Decimal:
        return self.totals.total_change_given

    @property
    def total_expenses(self) -> Decimal:
        return self.totals.total_expenses

    @property
    def closing_cash_balance(self) -> Decimal:
        return self.totals.closing_cash_balance

    @property
    def grand_total(self) -> Decimal:
        return self.totals.grand_total

    def as_dict(self) -> Dict[str, str]:
        return {"date": self.date, "opening_float": str(self.opening_float), **self.totals.as_dict()}


@dataclass(frozen=True, slots=True)
class OperationResult:
    """Outcome of a register mutation.

    Storage and lookup failures are reported here instead of being raised so
    callers always know whether the day's summary reflects their change.
    """

    success: bool
    error: Optional[str] = None
    payload: Optional[object] = None
    not_found: bool = False
    storage_failure: bool = False

    @classmethod
    def ok(cls, payload: Optional[object] = None) -> "OperationResult":
        return cls(success=True, payload=payload)

    @classmethod
    def failed(cls, error: str, *, not_found: bool = False, storage_failure: bool = False) -> "OperationResult":
        return cls(success=False, error=error, not_found=not_found, storage_failure=storage_failure)
