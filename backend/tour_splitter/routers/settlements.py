from decimal import Decimal
from fastapi import APIRouter, HTTPException

from ..config import get_settings
from ..models import Balance, Settlement, SettlementRow, Tour, TravelerSummary
from ..services.reporting import settlement_rows, summarize_travelers
from ..services.settlement import calculate_settlements, get_tour_balances

router = APIRouter(prefix="/tours", tags=["Settlements"])


def _threshold() -> Decimal:
    return Decimal(str(get_settings().settlement_threshold))


@router.post("/balances", response_model=list[Balance])
async def get_balances(tour: Tour) -> list[Balance]:
    """
    Get the balance for each traveler in a tour.

    Positive balance = traveler is owed money (paid more than their share)
    Negative balance = traveler owes money (consumed more than they paid)
    """
    try:
        return get_tour_balances(tour)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to calculate balances: {str(e)}")


@router.post("/summary", response_model=list[TravelerSummary])
async def get_summary(tour: Tour) -> list[TravelerSummary]:
    """Get paid, share and net totals per traveler in base currency."""
    try:
        return summarize_travelers(tour)
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to summarize travelers: {str(e)}")


@router.post("/settlements", response_model=list[Settlement])
async def get_settlements(tour: Tour) -> list[Settlement]:
    """
    Get the list of payments that settles all balances in a tour.

    Uses a greedy algorithm that repeatedly matches the largest debtor
    with the largest creditor to keep the number of transactions low.
    """
    try:
        return calculate_settlements(tour, _threshold())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to calculate settlements: {str(e)}")


@router.post("/settlements/rows", response_model=list[SettlementRow])
async def get_settlement_rows(tour: Tour) -> list[SettlementRow]:
    """Get the settlement plan with traveler names, as used by exports."""
    try:
        return settlement_rows(tour, _threshold())
    except Exception as e:
        raise HTTPException(status_code=500, detail=f"Failed to calculate settlements: {str(e)}")
