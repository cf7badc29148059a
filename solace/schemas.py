"""Pydantic data transfer objects shared by the API and the browse client."""
from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class AdvocateDTO(BaseModel):
    """Advocate as exposed on the wire (camelCase keys)."""
    model_config = ConfigDict(
        from_attributes=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    id: int
    first_name: str
    last_name: str
    city: str
    degree: str
    specialties: list[str] = Field(default_factory=list)
    years_of_experience: int = Field(ge=0)
    phone_number: int
    created_at: datetime | None = None


class AdvocatePage(BaseModel):
    """Page of advocates returned by the query endpoint."""
    data: list[AdvocateDTO]


class SeedResponse(BaseModel):
    """Rows actually inserted by a seed run."""
    advocates: list[AdvocateDTO]


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    version: str


class ErrorResponse(BaseModel):
    """Error response."""
    error: str
    detail: str | None = None
