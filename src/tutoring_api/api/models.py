"""Request models for the HTTP API."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator


class EndRecurrenceRequest(BaseModel):
    """Body of an end-recurrence call."""

    model_config = ConfigDict(populate_by_name=True)

    template_id: str = Field(alias="templateId", min_length=1)
    end_date: date = Field(alias="endDate")

    @field_validator("end_date", mode="before")
    @classmethod
    def _require_iso_string(cls, value: object) -> object:
        if not isinstance(value, str):
            raise ValueError("endDate must be an ISO calendar date string")
        return value


class MaterializeClassRequest(BaseModel):
    """Body of a materialize-virtual-class call."""

    template_id: str = Field(min_length=1)
    class_date: datetime
