"""
Marketplace price synchronization.

Not implemented yet: fetching quotes from TCGplayer and Cardmarket, writing
them to the prices table and appending price_history rows is planned but has
no contract yet. The public operation reports that.
"""

PRICE_SYNC_NOT_IMPLEMENTED = "Price sync not yet implemented"


async def sync_prices() -> str:
    """Return a status message for the price sync request."""
    return PRICE_SYNC_NOT_IMPLEMENTED
