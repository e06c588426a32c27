"""
Services module
Export all services
"""

from cost_report.services.llm_service import LLMService, get_llm_service
from cost_report.services.provider_store import ProviderStore

__all__ = [
    "LLMService",
    "get_llm_service",
    "ProviderStore",
]
