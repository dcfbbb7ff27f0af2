import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Union

from ..models import Tour

logger = logging.getLogger(__name__)

CENT = Decimal("0.01")

Number = Union[Decimal, float, int]


def to_decimal(value: Number) -> Decimal:
    """Convert a float or int to Decimal without binary float artifacts."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Number) -> Decimal:
    """Round a monetary value to cents (half up)."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def get_rate(currency_code: str, tour: Tour) -> Optional[Decimal]:
    """
    Look up the exchange rate of a currency within a tour.

    Args:
        currency_code: Currency code to look up
        tour: The tour whose currencies are searched

    Returns:
        Units of this currency per 1 unit of base currency, or None if the
        tour has no such currency
    """
    if currency_code == tour.base_currency_code:
        return Decimal("1")

    for currency in tour.currencies:
        if currency.code == currency_code:
            return to_decimal(currency.exchange_rate)

    logger.warning(
        f"Currency {currency_code} not found in tour {tour.id}; using unconverted amount"
    )
    return None


def _to_base(amount: Decimal, currency_code: str, tour: Tour) -> Decimal:
    rate = get_rate(currency_code, tour)
    if rate is None:
        return amount
    return amount / rate


def _from_base(amount: Decimal, currency_code: str, tour: Tour) -> Decimal:
    rate = get_rate(currency_code, tour)
    if rate is None:
        return amount
    return amount * rate


def to_base(amount: Number, currency_code: str, tour: Tour) -> Decimal:
    """
    Convert an amount in the given currency to the tour's base currency.

    Unknown currency codes fall back to the unconverted amount.

    Args:
        amount: Amount denominated in currency_code
        currency_code: Currency of the amount
        tour: The tour providing base currency and exchange rates

    Returns:
        The amount in base currency, rounded to cents
    """
    return round_money(_to_base(to_decimal(amount), currency_code, tour))


def from_base(amount: Number, currency_code: str, tour: Tour) -> Decimal:
    """
    Convert an amount in the tour's base currency to the given currency.

    Unknown currency codes fall back to the unconverted amount.
    """
    return round_money(_from_base(to_decimal(amount), currency_code, tour))


def convert(amount: Number, from_currency: str, to_currency: str, tour: Tour) -> Decimal:
    """
    Convert an amount between any two currencies of a tour, via the base currency.

    Args:
        amount: Amount denominated in from_currency
        from_currency: Source currency code
        to_currency: Target currency code
        tour: The tour providing base currency and exchange rates

    Returns:
        The amount in to_currency, rounded to cents
    """
    value = to_decimal(amount)
    if from_currency == to_currency:
        return round_money(value)

    in_base = _to_base(value, from_currency, tour)
    return round_money(_from_base(in_base, to_currency, tour))
