"""Mini README: Daily summary recalculation.

Structure:
    * compute_summary - turns an opening float plus one day's transactions
      and expenses into :class:`SummaryTotals`.

The function is pure: it reads the records it is handed and returns a fresh
value, so the register can call it after every mutation and the web layer
and exports never need their own arithmetic. Records may be model instances
or plain mappings using the model field names. Missing or unreadable numbers
count as zero so one malformed record cannot abort the whole day.

Card payments already carry their surcharge in ``amount_received``; it is
applied when the transaction is created and never re-derived here.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Iterable, Mapping, Optional

from ..logging_utils import get_logger
from .models import ZERO, PaymentMethod, SummaryTotals

LOGGER = get_logger(__name__)


def _read(record: object, name: str) -> object:
    if isinstance(record, Mapping):
        return record.get(name)
    return getattr(record, name, None)


def _as_decimal(value: object) -> Decimal:
    """Coerce a numeric field, treating missing or unreadable values as zero."""

    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    try:
        coerced = Decimal(str(value))
    except (InvalidOperation, ValueError):
        LOGGER.warning("Ignoring non-numeric amount %r", value)
        return ZERO
    return coerced if coerced.is_finite() else ZERO


def _payment_method(record: object) -> Optional[PaymentMethod]:
    value = _read(record, "payment_method")
    if isinstance(value, PaymentMethod):
        return value
    try:
        return PaymentMethod.from_str(str(value))
    except ValueError:
        LOGGER.warning("Transaction with unknown payment method %r counted as neither cash nor transfer", value)
        return None


def compute_summary(
    opening_float: object,
    transactions: Iterable[object],
    expenses: Iterable[object],
) -> SummaryTotals:
    """Compute one day's cash position.

    Args:
        opening_float: Cash in the drawer at opening; ``None`` counts as zero.
        transactions: The day's transactions.
        expenses: The day's expenses.

    Returns:
        The six derived totals. ``closing_cash_balance`` is the cash expected
        in the drawer and ``grand_total`` adds card and transfer receipts.
    """

    transactions = list(transactions)
    expenses = list(expenses)
    methods = [_payment_method(transaction) for transaction in transactions]

    total_cash = sum(
        (
            _as_decimal(_read(transaction, "amount_received"))
            for transaction, method in zip(transactions, methods)
            if method is PaymentMethod.CASH
        ),
        ZERO,
    )
    total_transfers = sum(
        (
            _as_decimal(_read(transaction, "amount_received"))
            for transaction, method in zip(transactions, methods)
            if method is not None and method.is_transfer
        ),
        ZERO,
    )
    # Summed over every method; non-cash records normally carry zero change.
    total_change_given = sum(
        (_as_decimal(_read(transaction, "change_given")) for transaction in transactions),
        ZERO,
    )
    total_expenses = sum((_as_decimal(_read(expense, "amount")) for expense in expenses), ZERO)

    closing_cash_balance = _as_decimal(opening_float) + total_cash - total_change_given - total_expenses
    grand_total = closing_cash_balance + total_transfers

    LOGGER.debug(
        "Summary computed from %s transactions and %s expenses -> closing %s grand %s",
        len(transactions),
        len(expenses),
        closing_cash_balance,
        grand_total,
    )
    return SummaryTotals(
        total_cash=total_cash,
        total_transfers=total_transfers,
        total_change_given=total_change_given,
        total_expenses=total_expenses,
        closing_cash_balance=closing_cash_balance,
        grand_total=grand_total,
    )
