"""Mini README: Tests for building transactions from cashier input.

Structure:
    * test_card_payment_adds_surcharge_and_no_change - card surcharge.
    * test_card_surcharge_rounds_to_cents - half-up rounding.
    * test_cash_payment_gives_change_above_service_price - cash change.
    * test_cash_underpayment_never_gives_negative_change - change floor.
    * test_transfer_keeps_entered_amount - transfers are not adjusted.
    * test_comma_decimal_separator_is_accepted - "99,50" style input.
    * test_invalid_drafts_are_rejected - missing or malformed fields.

These tests pin down the card surcharge, the cash change rule and the
validation errors raised for incomplete or malformed submissions.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

import pytest

from salondesk.register import PaymentMethod, TransactionDraft, create_transaction

CREATED_AT = datetime(2024, 5, 10, 14, 5)


def _create(draft: TransactionDraft, rate: str = "0.05"):
    return create_transaction(
        draft,
        transaction_id="1715349900000",
        created_at=CREATED_AT,
        card_surcharge_rate=Decimal(rate),
    )


def test_card_payment_adds_surcharge_and_no_change() -> None:
    transaction = _create(
        TransactionDraft(
            client="Pedro Ramirez",
            payment_method="card",
            service_amount="1000",
            amount_received="5000",
            served_by="Laura Perez",
        )
    )

    assert transaction.payment_method is PaymentMethod.CARD
    assert transaction.amount_received == Decimal("1050")
    assert transaction.change_given == Decimal("0")


def test_card_surcharge_rounds_to_cents() -> None:
    transaction = _create(
        TransactionDraft(client="A", payment_method="CARD", service_amount="333.33", served_by="B")
    )

    assert transaction.amount_received == Decimal("350.00")


def test_cash_payment_gives_change_above_service_price() -> None:
    transaction = _create(
        TransactionDraft(
            client="Maria Lopez",
            payment_method=PaymentMethod.CASH,
            service_amount="1000",
            amount_received="1200",
            served_by="Ana Garcia",
            notes="  Cut and blow-dry ",
        )
    )

    assert transaction.amount_received == Decimal("1200")
    assert transaction.change_given == Decimal("200")
    assert transaction.notes == "Cut and blow-dry"
    assert transaction.timestamp == "10/05/2024 02:05 PM"


def test_cash_underpayment_never_gives_negative_change() -> None:
    transaction = _create(
        TransactionDraft(
            client="Maria Lopez",
            payment_method="cash",
            service_amount="1000",
            amount_received="900",
            served_by="Ana Garcia",
        )
    )

    assert transaction.change_given == Decimal("0")


def test_transfer_keeps_entered_amount() -> None:
    transaction = _create(
        TransactionDraft(
            client="Sofia Gomez",
            payment_method="transfer",
            service_amount="1500",
            amount_received="1600",
            served_by="Ana Garcia",
        )
    )

    assert transaction.amount_received == Decimal("1600")
    assert transaction.change_given == Decimal("0")


def test_comma_decimal_separator_is_accepted() -> None:
    transaction = _create(
        TransactionDraft(
            client="A",
            payment_method="cash",
            service_amount="99,50",
            amount_received="100",
            served_by="B",
        )
    )

    assert transaction.change_given == Decimal("0.50")


@pytest.mark.parametrize(
    "draft",
    [
        TransactionDraft(client="", payment_method="cash", service_amount="10", served_by="Ana"),
        TransactionDraft(client="Maria", payment_method="cash", service_amount="10", served_by="   "),
        TransactionDraft(client="Maria", payment_method="cheque", service_amount="10", served_by="Ana"),
        TransactionDraft(client="Maria", payment_method="cash", service_amount="ten", served_by="Ana"),
        TransactionDraft(client="Maria", payment_method="cash", service_amount="-5", served_by="Ana"),
    ],
)
def test_invalid_drafts_are_rejected(draft: TransactionDraft) -> None:
    with pytest.raises(ValueError):
        _create(draft)
