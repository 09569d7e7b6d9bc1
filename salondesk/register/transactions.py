"""Mini README: Building transactions from submitted payment details.

Structure:
    * TransactionDraft - the fields a cashier fills in for a service payment.
    * create_transaction - validates a draft and returns the stored record.

This is the only place the card surcharge and the cash change rule are
applied. Card payments receive ``service_amount * (1 + surcharge)`` rounded
to cents; cash payments give back ``max(0, received - service)``; transfers
keep the amount the cashier entered and never give change.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from .dates import format_timestamp
from .models import ZERO, PaymentMethod, Transaction

CENTS = Decimal("0.01")


@dataclass(slots=True)
class TransactionDraft:
    """Unvalidated payment details as entered at the counter."""

    client: str
    payment_method: PaymentMethod | str
    service_amount: object
    served_by: str
    amount_received: object = None
    notes: str = ""


def to_amount(value: object, field_name: str) -> Decimal:
    """Parse a user supplied amount; a comma works as the decimal separator."""

    if value is None or value == "":
        return ZERO
    try:
        amount = Decimal(str(value).strip().replace(",", "."))
    except InvalidOperation as error:
        raise ValueError(f"{field_name} must be a number, got {value!r}") from error
    if not amount.is_finite():
        raise ValueError(f"{field_name} must be a finite number")
    return amount


def round_cents(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def create_transaction(
    draft: TransactionDraft,
    *,
    transaction_id: str,
    created_at: datetime,
    card_surcharge_rate: Decimal,
) -> Transaction:
    """Validate ``draft`` and derive the received amount and change.

    Raises:
        ValueError: when the client or staff member is missing, the payment
            method is unknown, or an amount is negative or not a number.
    """

    client = (draft.client or "").strip()
    served_by = (draft.served_by or "").strip()
    if not client or not served_by:
        raise ValueError("Client and the staff member who served them are required.")

    method = (
        draft.payment_method
        if isinstance(draft.payment_method, PaymentMethod)
        else PaymentMethod.from_str(str(draft.payment_method))
    )
    service_amount = to_amount(draft.service_amount, "service_amount")
    entered = to_amount(draft.amount_received, "amount_received")
    if service_amount < 0 or entered < 0:
        raise ValueError("Amounts cannot be negative.")

    if method is PaymentMethod.CARD:
        amount_received = round_cents(service_amount * (Decimal("1") + Decimal(card_surcharge_rate)))
    else:
        amount_received = entered

    if method is PaymentMethod.CASH:
        change_given = max(ZERO, amount_received - service_amount)
    else:
        change_given = ZERO

    return Transaction(
        transaction_id=transaction_id,
        payment_method=method,
        amount_received=amount_received,
        service_amount=service_amount,
        change_given=change_given,
        client=client,
        served_by=served_by,
        notes=(draft.notes or "").strip(),
        timestamp=format_timestamp(created_at),
    )
