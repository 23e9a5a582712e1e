"""
Job to import card sets from the Pokémon TCG API.

Fetches every set in the catalog and upserts it into the local store.
Can be run as a standalone script or called from the API.
"""

import asyncio
import logging

import httpx
from sqlalchemy.ext.asyncio import AsyncSession

from pokemaster.db.database import acquire_store, close_store
from pokemaster.db.operations import upsert_set
from pokemaster.services.pokemon_tcg import create_client, fetch_sets

logger = logging.getLogger(__name__)


async def import_sets(session: AsyncSession, client: httpx.AsyncClient) -> int:
    """
    Import all catalog sets using an existing session.

    Args:
        session: Session the sets are written to; the caller commits
        client: HTTP client for the catalog

    Returns:
        Number of sets imported

    Raises:
        CatalogError: If the catalog cannot be read
    """
    logger.info("Fetching sets from the Pokémon TCG API...")
    sets = await fetch_sets(client)
    logger.info("Fetched %d sets", len(sets))

    for card_set in sets:
        await upsert_set(session, card_set)

    return len(sets)


async def run_set_import() -> int:
    """
    Import all catalog sets into the process-wide store.

    Returns:
        Number of sets imported
    """
    store = await acquire_store()

    async with create_client() as client, store.session() as session:
        count = await import_sets(session, client)

    logger.info("Set import complete. Total sets imported: %d", count)
    return count


async def _run() -> None:
    try:
        await run_set_import()
    finally:
        await close_store()


def main() -> None:
    """CLI entry point for running the set import."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(_run())


if __name__ == "__main__":
    main()
