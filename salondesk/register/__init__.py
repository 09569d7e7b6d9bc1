"""Mini README: Cash register records, summaries and storage.

This package holds the salon's day-to-day bookkeeping: record types, the
transaction builder that applies the card surcharge and change rules, the
pure daily summary calculation, and the :class:`CashRegister` that stores
records and keeps each day's summary recomputed from source.
"""

from .dates import day_key, format_timestamp, parse_day, records_for_day
from .models import (
    DailySummary,
    Employee,
    Expense,
    OperationResult,
    PaymentMethod,
    SummaryTotals,
    Transaction,
)
from .store import CashRegister
from .summary import compute_summary
from .transactions import TransactionDraft, create_transaction

__all__ = [
    "CashRegister",
    "DailySummary",
    "Employee",
    "Expense",
    "OperationResult",
    "PaymentMethod",
    "SummaryTotals",
    "Transaction",
    "TransactionDraft",
    "compute_summary",
    "create_transaction",
    "day_key",
    "format_timestamp",
    "parse_day",
    "records_for_day",
]
