from fastapi import APIRouter, HTTPException

from ..models import ConversionRequest, ConversionResponse, Tour
from ..services.currency import convert

router = APIRouter(prefix="/currencies", tags=["Currencies"])


@router.post("/convert", response_model=ConversionResponse)
async def convert_amount(request: ConversionRequest) -> ConversionResponse:
    """
    Convert an amount between two currencies of a tour.

    Conversion goes through the base currency. Unknown currency codes
    leave the amount unconverted.
    """
    tour = Tour(
        id="conversion",
        base_currency_code=request.base_currency_code,
        currencies=request.currencies,
    )
    try:
        amount = convert(request.amount, request.from_currency, request.to_currency, tour)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to convert amount: {str(e)}")

    return ConversionResponse(
        amount=float(amount),
        from_currency=request.from_currency,
        to_currency=request.to_currency,
    )
