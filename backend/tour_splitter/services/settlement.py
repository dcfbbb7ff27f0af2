import logging
from decimal import Decimal
from typing import Optional

from ..models import Balance, Expense, ExpenseSplit, Settlement, Tour
from .currency import round_money, to_base, to_decimal

logger = logging.getLogger(__name__)

SETTLEMENT_THRESHOLD = Decimal("0.01")


def expense_base_amount(expense: Expense, tour: Tour) -> Decimal:
    """Amount of an expense in base currency, preferring its cached base amount."""
    if expense.base_amount is not None:
        return to_decimal(expense.base_amount)
    return to_base(expense.amount, expense.currency_code, tour)


def split_base_amount(split: ExpenseSplit, expense: Expense, tour: Tour) -> Decimal:
    """
    Amount of a split in base currency.

    Uses the split's cached base amount if present, then scales by the
    expense's cached base amount, and finally converts the split amount.
    """
    if split.base_amount is not None:
        return to_decimal(split.base_amount)

    if expense.base_amount is not None and expense.amount:
        ratio = to_decimal(expense.base_amount) / to_decimal(expense.amount)
        return to_decimal(split.amount) * ratio

    return to_base(split.amount, expense.currency_code, tour)


def _adjust(balances: dict[str, Decimal], traveler_id: str, delta: Decimal, tour: Tour) -> None:
    if traveler_id not in balances:
        # Phantom entry: the traveler was removed but still has ledger rows
        logger.warning(f"Traveler {traveler_id} is not part of tour {tour.id}")
        balances[traveler_id] = Decimal("0")
    balances[traveler_id] += delta


def calculate_balances(tour: Tour) -> dict[str, Decimal]:
    """
    Calculate the balance for each traveler in a tour.

    Positive balance = traveler is owed money (paid more than their share)
    Negative balance = traveler owes money (consumed more than they paid)

    Args:
        tour: The tour snapshot

    Returns:
        Dict mapping traveler_id to their balance in base currency
    """
    # Initialize balances for all travelers
    balances: dict[str, Decimal] = {t.id: Decimal("0") for t in tour.travelers}

    # Payers get credit for the full amount, split travelers owe their share
    for expense in tour.expenses:
        _adjust(balances, expense.paid_by_id, expense_base_amount(expense, tour), tour)

        for split in expense.splits:
            _adjust(balances, split.traveler_id, -split_base_amount(split, expense, tour), tour)

    # Direct payments: sender owes less, recipient is owed less
    for payment in tour.payments:
        amount = to_base(payment.amount, payment.currency_code, tour)
        _adjust(balances, payment.from_traveler_id, amount, tour)
        _adjust(balances, payment.to_traveler_id, -amount, tour)

    return {tid: round_money(balance) for tid, balance in balances.items()}


def plan_settlements(
    balances: dict[str, Decimal],
    currency_code: str,
    threshold: Decimal = SETTLEMENT_THRESHOLD,
) -> list[Settlement]:
    """
    Calculate settlements using a greedy algorithm.

    Repeatedly matches the largest debtor with the largest creditor
    until one side runs out. Residual amounts below the threshold are dropped.

    Args:
        balances: Dict mapping traveler_id to their balance
        currency_code: Currency the balances are expressed in
        threshold: Smallest amount treated as a real debt

    Returns:
        List of Settlement objects representing payments to make
    """
    # Separate creditors (positive) and debtors (negative)
    creditors: list[tuple[str, Decimal]] = []
    debtors: list[tuple[str, Decimal]] = []

    for tid, balance in balances.items():
        bal = to_decimal(balance)
        if bal > threshold:
            creditors.append((tid, bal))
        elif bal < -threshold:
            debtors.append((tid, -bal))  # Store as positive amount owed

    settlements: list[Settlement] = []

    while creditors and debtors:
        # Re-sorted every round so both heads are the current largest
        creditors.sort(key=lambda x: x[1], reverse=True)
        debtors.sort(key=lambda x: x[1], reverse=True)

        creditor_id, credit_amount = creditors.pop(0)
        debtor_id, debt_amount = debtors.pop(0)

        settle_amount = min(credit_amount, debt_amount)
        rounded = round_money(settle_amount)

        if rounded > threshold:
            settlements.append(Settlement(
                from_id=debtor_id,
                to_id=creditor_id,
                amount=float(rounded),
                currency_code=currency_code,
            ))

        new_credit = credit_amount - settle_amount
        new_debt = debt_amount - settle_amount

        # A zero remainder is always dropped, whatever the threshold
        if new_credit > 0 and new_credit >= threshold:
            creditors.append((creditor_id, new_credit))
        if new_debt > 0 and new_debt >= threshold:
            debtors.append((debtor_id, new_debt))

    logger.debug(f"Planned {len(settlements)} settlements in {currency_code}")
    return settlements


def calculate_settlements(tour: Tour, threshold: Optional[Decimal] = None) -> list[Settlement]:
    """
    Get the settlement plan for a tour, in its base currency.

    Args:
        tour: The tour snapshot
        threshold: Smallest amount treated as a real debt (defaults to one cent)

    Returns:
        List of Settlement objects
    """
    balances = calculate_balances(tour)
    return plan_settlements(
        balances,
        tour.base_currency_code,
        SETTLEMENT_THRESHOLD if threshold is None else threshold,
    )


def get_tour_balances(tour: Tour) -> list[Balance]:
    """
    Get balances for all travelers in a tour.

    Args:
        tour: The tour snapshot

    Returns:
        List of Balance objects
    """
    balances = calculate_balances(tour)
    return [
        Balance(traveler_id=tid, amount=float(amount))
        for tid, amount in balances.items()
    ]
