"""
Provider Schemas
Request/response models for the provider catalog
"""

from datetime import datetime
from typing import Annotated, Literal
from uuid import UUID

from pydantic import AfterValidator, BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from cost_report.utils.rich_text import sanitize_rich_text

# "dropdown" is accepted for older clients and handled as "text"
InputType = Literal["number", "text", "dropdown"]


class CamelModel(BaseModel):
    """camelCase on the wire, snake_case in Python"""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class InputField(CamelModel):
    """One metered input of a provider"""

    name: str
    label: str | None = None
    type: InputType = "text"
    default_value: str = ""
    description: str = ""

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Input name is required")
        return value

    @field_validator("default_value", "description", mode="before")
    @classmethod
    def coerce_text(cls, value):
        if value is None:
            return ""
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return str(value)
        return value

    @field_validator("description")
    @classmethod
    def sanitize_description(cls, value: str) -> str:
        return sanitize_rich_text(value)

    @property
    def is_numeric(self) -> bool:
        return self.type == "number"


def _validate_name(value: str) -> str:
    value = value.strip()
    if not value:
        raise ValueError("Provider name is required")
    return value


def _validate_inputs(inputs: list[InputField]) -> list[InputField]:
    if not inputs:
        raise ValueError("At least one input is required")
    seen: set[str] = set()
    for field in inputs:
        if field.name in seen:
            raise ValueError(f"Duplicate input name: {field.name}")
        seen.add(field.name)
    return inputs


class PricingEntry(BaseModel):
    """A previously observed price for one (input, value) pair"""

    price: str
    url: str = ""


ProviderName = Annotated[str, Field(max_length=200), AfterValidator(_validate_name)]
InputSchema = Annotated[list[InputField], AfterValidator(_validate_inputs)]


class ProviderCreate(CamelModel):
    name: ProviderName
    inputs: InputSchema
    pricing: dict[str, PricingEntry] | None = None


class ProviderUpdate(CamelModel):
    name: ProviderName | None = None
    inputs: InputSchema | None = None
    pricing: dict[str, PricingEntry] | None = None


class ProviderResponse(CamelModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)

    id: UUID
    name: str
    inputs: list[InputField]
    pricing: dict[str, PricingEntry] | None = None
    created_at: datetime
    updated_at: datetime


class ProviderEnvelope(BaseModel):
    provider: ProviderResponse


class ProviderListResponse(BaseModel):
    providers: list[ProviderResponse]


class DuplicateProviderRequest(CamelModel):
    provider_id: str = Field(..., min_length=1)


class MessageResponse(BaseModel):
    message: str


class PricingResetResponse(CamelModel):
    cleared: int
    cache_entries: int
