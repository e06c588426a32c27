"""
Provider Store
CRUD over the provider catalog plus pricing memo maintenance
"""

from __future__ import annotations

import copy
from uuid import UUID

from loguru import logger
from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from cost_report.core.exceptions import ResourceExistsError, ResourceNotFoundError
from cost_report.models.provider import Provider
from cost_report.schemas.provider import ProviderCreate, ProviderUpdate

COPY_SUFFIX = " Copy"


def _dump_inputs(inputs) -> list[dict]:
    return [field.model_dump(by_alias=True) for field in inputs]


def _dump_pricing(pricing) -> dict | None:
    if pricing is None:
        return None
    return {key: entry.model_dump() for key, entry in pricing.items()}


class ProviderStore:
    """Provider catalog backed by one table"""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def list_providers(self) -> list[Provider]:
        result = await self.db.execute(
            select(Provider).order_by(Provider.created_at, Provider.name)
        )
        return list(result.scalars().all())

    async def find(self, id_or_name: str) -> Provider | None:
        """Resolve an id or a name; None when nothing matches"""
        try:
            provider_id = UUID(str(id_or_name))
        except ValueError:
            condition = Provider.name == id_or_name
        else:
            condition = or_(Provider.id == provider_id, Provider.name == id_or_name)

        result = await self.db.execute(select(Provider).where(condition))
        return result.scalars().first()

    async def get(self, id_or_name: str) -> Provider:
        provider = await self.find(id_or_name)
        if provider is None:
            raise ResourceNotFoundError("Provider", id_or_name)
        return provider

    async def name_exists(self, name: str) -> bool:
        result = await self.db.execute(select(Provider.id).where(Provider.name == name))
        return result.first() is not None

    async def create(self, data: ProviderCreate) -> Provider:
        if await self.name_exists(data.name):
            raise ResourceExistsError("Provider", data.name)

        provider = Provider(
            name=data.name,
            inputs=_dump_inputs(data.inputs),
            pricing=_dump_pricing(data.pricing),
        )
        self.db.add(provider)
        await self.db.commit()
        await self.db.refresh(provider)
        logger.info(f"Created provider {provider.name}", provider_id=str(provider.id))
        return provider

    async def update(self, id_or_name: str, patch: ProviderUpdate) -> Provider:
        provider = await self.get(id_or_name)
        update_data = patch.model_dump(exclude_unset=True)

        new_name = update_data.get("name")
        if new_name and new_name != provider.name and await self.name_exists(new_name):
            raise ResourceExistsError("Provider", new_name)

        if new_name:
            provider.name = new_name
        if patch.inputs is not None:
            provider.inputs = _dump_inputs(patch.inputs)
        if "pricing" in update_data:
            provider.pricing = _dump_pricing(patch.pricing)

        await self.db.commit()
        await self.db.refresh(provider)
        return provider

    async def delete(self, id_or_name: str) -> None:
        provider = await self.get(id_or_name)
        await self.db.delete(provider)
        await self.db.commit()
        logger.info(f"Deleted provider {provider.name}", provider_id=str(provider.id))

    async def duplicate(self, id_or_name: str) -> Provider:
        """Copy everything but id and name; the name gets a free " Copy" suffix"""
        source = await self.get(id_or_name)

        name = f"{source.name}{COPY_SUFFIX}"
        counter = 2
        while await self.name_exists(name):
            name = f"{source.name}{COPY_SUFFIX} {counter}"
            counter += 1

        duplicate = Provider(
            name=name,
            inputs=copy.deepcopy(source.inputs),
            pricing=copy.deepcopy(source.pricing),
        )
        self.db.add(duplicate)
        await self.db.commit()
        await self.db.refresh(duplicate)
        return duplicate

    async def save_pricing(self, provider: Provider, entries: dict[str, dict[str, str]]) -> None:
        """Upsert entries into the pricing memo, creating it when absent"""
        if not entries:
            return
        # Reassign so the JSON column is flagged dirty
        provider.pricing = {**(provider.pricing or {}), **entries}
        await self.db.commit()
        logger.debug(
            f"Stored {len(entries)} prices for {provider.name}",
            provider_id=str(provider.id),
        )

    async def clear_pricing(self) -> int:
        """Drop every pricing memo; returns the number of providers touched"""
        result = await self.db.execute(
            update(Provider).where(Provider.pricing.is_not(None)).values(pricing=None)
        )
        await self.db.commit()
        return result.rowcount or 0
