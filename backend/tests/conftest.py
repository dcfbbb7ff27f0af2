import pytest

from tour_splitter.models import (
    Currency,
    Expense,
    ExpenseSplit,
    PaymentRecord,
    Tour,
    Traveler,
)


@pytest.fixture
def sample_travelers():
    """Three test travelers."""
    return [
        Traveler(id="alice", name="Alice"),
        Traveler(id="bob", name="Bob"),
        Traveler(id="carol", name="Carol"),
    ]


@pytest.fixture
def sample_currencies():
    """USD base plus EUR (1 USD = 0.9 EUR) and JPY (1 USD = 150 JPY)."""
    return [
        Currency(code="USD", name="US Dollar", exchange_rate=1.0),
        Currency(code="EUR", name="Euro", exchange_rate=0.9),
        Currency(code="JPY", name="Japanese Yen", exchange_rate=150.0),
    ]


@pytest.fixture
def dinner_expense():
    """Alice pays $300, split equally between all three."""
    return Expense(
        id="e1",
        date="2024-06-01",
        amount=300.0,
        currency_code="USD",
        description="Dinner",
        paid_by_id="alice",
        splits=[
            ExpenseSplit(traveler_id="alice", amount=100.0),
            ExpenseSplit(traveler_id="bob", amount=100.0),
            ExpenseSplit(traveler_id="carol", amount=100.0),
        ],
        category_id="restaurants",
    )


@pytest.fixture
def empty_tour(sample_travelers, sample_currencies):
    """Tour with travelers but no expenses or payments."""
    return Tour(
        id="tour1",
        name="Lisbon",
        base_currency_code="USD",
        travelers=sample_travelers,
        currencies=sample_currencies,
    )


@pytest.fixture
def dinner_tour(empty_tour, dinner_expense):
    """Tour with a single $300 dinner paid by Alice."""
    return empty_tour.model_copy(update={"expenses": [dinner_expense]})


@pytest.fixture
def mixed_currency_tour(empty_tour, dinner_expense):
    """Tour with expenses in three currencies and a direct payment."""
    expenses = [
        dinner_expense,
        Expense(
            id="e2",
            amount=90.0,
            currency_code="EUR",
            paid_by_id="bob",
            splits=[
                ExpenseSplit(traveler_id="alice", amount=45.0),
                ExpenseSplit(traveler_id="bob", amount=45.0),
            ],
        ),
        Expense(
            id="e3",
            amount=1000.0,
            currency_code="JPY",
            paid_by_id="carol",
            splits=[
                ExpenseSplit(traveler_id="alice", amount=333.33),
                ExpenseSplit(traveler_id="bob", amount=333.33),
                ExpenseSplit(traveler_id="carol", amount=333.34),
            ],
        ),
    ]
    payments = [
        PaymentRecord(
            id="p1",
            from_traveler_id="carol",
            to_traveler_id="alice",
            amount=45.0,
            currency_code="EUR",
            date="2024-06-03",
            method="cash",
        ),
    ]
    return empty_tour.model_copy(update={"expenses": expenses, "payments": payments})
