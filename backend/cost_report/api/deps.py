"""
API Dependencies
Shared dependency injection
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from cost_report.core.database import get_db
from cost_report.services.llm_service import LLMService, get_llm_service
from cost_report.services.provider_store import ProviderStore
from cost_report.services.report.cache import ReportCache, report_cache
from cost_report.services.report.generator import ReportGenerator


async def get_provider_store(db: AsyncSession = Depends(get_db)) -> ProviderStore:
    return ProviderStore(db)


def get_report_cache() -> ReportCache:
    """Process-wide report cache; override to swap the policy"""
    return report_cache


async def get_report_generator(
    store: ProviderStore = Depends(get_provider_store),
    llm: LLMService = Depends(get_llm_service),
    cache: ReportCache = Depends(get_report_cache),
) -> ReportGenerator:
    return ReportGenerator(store, llm, cache)
