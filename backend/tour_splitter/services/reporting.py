from datetime import date as date_type
from decimal import Decimal
from typing import Optional
from uuid import uuid4

from ..models import (
    PaymentRecord,
    Settlement,
    SettlementRow,
    Tour,
    Traveler,
    TravelerSummary,
)
from .currency import round_money, to_base, to_decimal
from .settlement import calculate_balances, calculate_settlements, expense_base_amount, split_base_amount


def traveler_name(traveler_id: str, travelers: list[Traveler]) -> str:
    """Get a traveler's display name, or "Unknown" if not in the list."""
    for traveler in travelers:
        if traveler.id == traveler_id:
            return traveler.name
    return "Unknown"


def summarize_travelers(tour: Tour) -> list[TravelerSummary]:
    """
    Build the paid / share / net summary for every traveler of a tour.

    All amounts are in base currency. ``net`` equals the traveler's balance.

    Args:
        tour: The tour snapshot

    Returns:
        List of TravelerSummary objects in tour traveler order
    """
    zero = Decimal("0")
    paid = {t.id: zero for t in tour.travelers}
    share = dict(paid)
    sent = dict(paid)
    received = dict(paid)

    for expense in tour.expenses:
        if expense.paid_by_id in paid:
            paid[expense.paid_by_id] += expense_base_amount(expense, tour)
        for split in expense.splits:
            if split.traveler_id in share:
                share[split.traveler_id] += split_base_amount(split, expense, tour)

    for payment in tour.payments:
        amount = to_base(payment.amount, payment.currency_code, tour)
        if payment.from_traveler_id in sent:
            sent[payment.from_traveler_id] += amount
        if payment.to_traveler_id in received:
            received[payment.to_traveler_id] += amount

    balances = calculate_balances(tour)

    return [
        TravelerSummary(
            traveler_id=t.id,
            name=t.name,
            paid=float(round_money(paid[t.id])),
            share=float(round_money(share[t.id])),
            payments_sent=float(round_money(sent[t.id])),
            payments_received=float(round_money(received[t.id])),
            net=float(balances[t.id]),
        )
        for t in tour.travelers
    ]


def settlement_rows(tour: Tour, threshold: Optional[Decimal] = None) -> list[SettlementRow]:
    """Get the settlement plan of a tour with traveler names resolved."""
    return [
        SettlementRow(
            from_name=traveler_name(s.from_id, tour.travelers),
            to_name=traveler_name(s.to_id, tour.travelers),
            amount=s.amount,
            currency_code=s.currency_code,
        )
        for s in calculate_settlements(tour, threshold)
    ]


def apply_settlements(
    balances: dict[str, Decimal],
    settlements: list[Settlement],
) -> dict[str, Decimal]:
    """
    Apply settlements to a balance map as if they had been paid.

    Returns a new map; the input is not modified.
    """
    result = dict(balances)
    for s in settlements:
        amount = to_decimal(s.amount)
        result[s.from_id] = result.get(s.from_id, Decimal("0")) + amount
        result[s.to_id] = result.get(s.to_id, Decimal("0")) - amount
    return result


def payment_from_settlement(
    settlement: Settlement,
    payment_date: Optional[date_type] = None,
    method: str = "cash",
    notes: Optional[str] = None,
) -> PaymentRecord:
    """
    Draft a payment record for a settlement the travelers have acted on.

    Args:
        settlement: The suggested settlement
        payment_date: Date of the payment (defaults to today)
        method: Payment method, e.g. "cash" or "bank transfer"
        notes: Optional free-text notes

    Returns:
        A PaymentRecord with a fresh id
    """
    return PaymentRecord(
        id=str(uuid4()),
        from_traveler_id=settlement.from_id,
        to_traveler_id=settlement.to_id,
        amount=settlement.amount,
        currency_code=settlement.currency_code,
        date=(payment_date or date_type.today()).isoformat(),
        method=method,
        notes=notes,
    )
