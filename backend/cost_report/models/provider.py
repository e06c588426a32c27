"""
Provider Model
Catalog record of a billable service and its metered inputs
"""

from __future__ import annotations

import uuid
from datetime import datetime, timezone
from typing import Any

from sqlalchemy import JSON, DateTime, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from cost_report.core.database import Base


def utcnow() -> datetime:
    return datetime.now(timezone.utc).replace(tzinfo=None)


class Provider(Base):
    """A provider with an ordered input schema and a pricing memo"""

    __tablename__ = "providers"

    id: Mapped[uuid.UUID] = mapped_column(Uuid(), primary_key=True, default=uuid.uuid4)

    # Human-facing lookup key, unique across the catalog
    name: Mapped[str] = mapped_column(String(200), nullable=False, unique=True, index=True)

    # Ordered list of {name, label, type, defaultValue, description}
    inputs: Mapped[list[dict[str, Any]]] = mapped_column(JSON, nullable=False, default=list)

    # "<inputName>:<inputValue>" -> {"price": ..., "url": ...}; null until a report fills it
    pricing: Mapped[dict[str, dict[str, str]] | None] = mapped_column(
        JSON(none_as_null=True), nullable=True
    )

    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, onupdate=utcnow)
