from pydantic import BaseModel, Field
from typing import Optional


class Traveler(BaseModel):
    """A participant in a tour."""
    id: str
    name: str


class Currency(BaseModel):
    """A currency usable in a tour.

    1 unit of the base currency equals ``exchange_rate`` units of this currency.
    """
    code: str = Field(..., min_length=3, max_length=3)
    name: str = ""
    exchange_rate: float = Field(..., gt=0)


class ExpenseSplit(BaseModel):
    """One traveler's portion of an expense, in the expense currency.

    ``percentage`` is carried for callers only; balances use the amounts.
    """
    traveler_id: str
    amount: float
    base_amount: Optional[float] = None
    percentage: Optional[float] = None


class Expense(BaseModel):
    """An amount spent in one currency, paid by one traveler and split among many."""
    id: str
    date: str = ""
    amount: float
    currency_code: str
    base_amount: Optional[float] = None
    description: str = ""
    paid_by_id: str
    splits: list[ExpenseSplit] = []
    category_id: str = "general"


class PaymentRecord(BaseModel):
    """A direct transfer between travelers already made outside the app."""
    id: str
    from_traveler_id: str
    to_traveler_id: str
    amount: float
    currency_code: str
    date: str = ""
    method: str = "cash"
    notes: Optional[str] = None


class Tour(BaseModel):
    """A trip scoping a shared expense ledger."""
    id: str
    name: str = ""
    base_currency_code: str
    travelers: list[Traveler] = []
    currencies: list[Currency] = []
    expenses: list[Expense] = []
    payments: list[PaymentRecord] = []


class Balance(BaseModel):
    """A traveler's net position in a tour's base currency."""
    traveler_id: str
    amount: float  # Positive = owed money, Negative = owes money


class Settlement(BaseModel):
    """A suggested payment from one traveler to another."""
    from_id: str
    to_id: str
    amount: float
    currency_code: str


class TravelerSummary(BaseModel):
    """Paid / share / net totals for one traveler, in base currency."""
    traveler_id: str
    name: str
    paid: float
    share: float
    payments_sent: float
    payments_received: float
    net: float


class SettlementRow(BaseModel):
    """A settlement with traveler names resolved, as shown in exports."""
    from_name: str
    to_name: str
    amount: float
    currency_code: str


class ConversionRequest(BaseModel):
    """Request body for converting an amount between two tour currencies."""
    base_currency_code: str
    currencies: list[Currency]
    amount: float
    from_currency: str
    to_currency: str


class ConversionResponse(BaseModel):
    """Response for currency conversions."""
    amount: float
    from_currency: str
    to_currency: str
