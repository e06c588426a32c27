"""
Report Schemas
Selections submitted for a cost report and the rendered result
"""

import json

from pydantic import AliasChoices, BaseModel, Field, field_validator

from cost_report.schemas.provider import CamelModel, InputField


class ProviderSnapshot(CamelModel):
    """The provider as the client last saw it"""

    # "_id" is what the document-store era client sends
    id: str | None = Field(None, validation_alias=AliasChoices("id", "_id"))
    name: str
    inputs: list[InputField] = []

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value):
        return None if value is None else str(value)

    @field_validator("name")
    @classmethod
    def name_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Provider name is required")
        return value


class SelectedProvider(BaseModel):
    """One provider plus the values the user typed for its inputs"""

    provider: ProviderSnapshot
    inputs: dict[str, str] = {}

    @field_validator("inputs", mode="before")
    @classmethod
    def stringify_values(cls, value):
        if not isinstance(value, dict):
            return value
        return {
            str(k): "" if v is None else v if isinstance(v, str) else json.dumps(v)
            for k, v in value.items()
        }

    def serialized_inputs(self) -> str:
        """Compact JSON in submitted key order"""
        return json.dumps(self.inputs, separators=(",", ":"), ensure_ascii=False)

    def resolved_inputs(self) -> list[tuple[InputField | None, str, str]]:
        """
        (field, name, value) for every input the report covers.

        Schema order wins; values fall back to the field default. Without a
        schema the submitted pairs are used as is.
        """
        if not self.provider.inputs:
            return [(None, name, value) for name, value in self.inputs.items()]
        return [
            (field, field.name, self.inputs.get(field.name, field.default_value))
            for field in self.provider.inputs
        ]


class ReportRequest(BaseModel):
    providers: list[SelectedProvider] = []


class ReportResponse(BaseModel):
    report: str


class SelectionResponse(BaseModel):
    selection: SelectedProvider
