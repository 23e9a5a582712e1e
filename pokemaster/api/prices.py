"""
Price API endpoints.
"""

from fastapi import APIRouter
from pydantic import BaseModel

from pokemaster.services.price_sync import sync_prices

router = APIRouter(prefix="/prices", tags=["prices"])


class SyncResponse(BaseModel):
    """Response model for a price sync request."""

    status: str


@router.post("/sync", response_model=SyncResponse)
async def sync_market_prices() -> SyncResponse:
    """
    Trigger a marketplace price sync.

    Not implemented yet; returns a fixed status message.
    """
    return SyncResponse(status=await sync_prices())
