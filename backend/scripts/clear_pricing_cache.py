import asyncio
import logging

from cost_report.core.database import async_session, init_db
from cost_report.services.provider_store import ProviderStore

# Configure logging to print to stdout
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


async def clear_pricing_cache():
    await init_db()
    async with async_session() as session:
        cleared = await ProviderStore(session).clear_pricing()
    logger.info(f"Updated {cleared} providers, pricing cache cleared")


if __name__ == "__main__":
    asyncio.run(clear_pricing_cache())
