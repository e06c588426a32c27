"""
Provider Catalog API
Create, list, edit, duplicate and delete providers
"""

from fastapi import APIRouter, Depends, status

from cost_report.api.deps import get_provider_store, get_report_cache
from cost_report.schemas.provider import (
    DuplicateProviderRequest,
    MessageResponse,
    PricingResetResponse,
    ProviderCreate,
    ProviderEnvelope,
    ProviderListResponse,
    ProviderUpdate,
)
from cost_report.services.provider_store import ProviderStore
from cost_report.services.report.cache import ReportCache

router = APIRouter(prefix="/providers", tags=["Providers"])


@router.get("", response_model=ProviderListResponse)
async def list_providers(store: ProviderStore = Depends(get_provider_store)):
    """List all providers in creation order"""
    return {"providers": await store.list_providers()}


@router.post("", response_model=ProviderEnvelope, status_code=status.HTTP_201_CREATED)
async def create_provider(
    provider_data: ProviderCreate,
    store: ProviderStore = Depends(get_provider_store),
):
    """Create a provider; names are unique"""
    return {"provider": await store.create(provider_data)}


@router.post("/duplicate", response_model=ProviderEnvelope, status_code=status.HTTP_201_CREATED)
async def duplicate_provider(
    request: DuplicateProviderRequest,
    store: ProviderStore = Depends(get_provider_store),
):
    """Copy a provider under a fresh id and a "<name> Copy" name"""
    return {"provider": await store.duplicate(request.provider_id)}


@router.delete("/pricing", response_model=PricingResetResponse)
async def clear_pricing(
    store: ProviderStore = Depends(get_provider_store),
    cache: ReportCache = Depends(get_report_cache),
):
    """Forget every memoized price and cached report fragment"""
    cleared = await store.clear_pricing()
    cache_entries = cache.clear()
    return PricingResetResponse(cleared=cleared, cache_entries=cache_entries)


@router.put("/{id_or_name}", response_model=ProviderEnvelope)
async def update_provider(
    id_or_name: str,
    provider_data: ProviderUpdate,
    store: ProviderStore = Depends(get_provider_store),
):
    """Update a provider by id or name"""
    return {"provider": await store.update(id_or_name, provider_data)}


@router.delete("/{id_or_name}", response_model=MessageResponse)
async def delete_provider(
    id_or_name: str,
    store: ProviderStore = Depends(get_provider_store),
):
    """Delete a provider by id or name"""
    await store.delete(id_or_name)
    return MessageResponse(message="Provider deleted successfully")
