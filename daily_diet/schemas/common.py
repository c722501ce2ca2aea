from datetime import datetime
from typing import Annotated
from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel

from daily_diet.core.security import ensure_aware


def to_iso(dt: datetime) -> str:
    """UTC ISO-8601 with millisecond precision and a Z suffix, e.g. 2024-01-01T00:00:00.000Z."""
    dt = ensure_aware(dt)
    return dt.strftime("%Y-%m-%dT%H:%M:%S.") + f"{dt.microsecond // 1000:03d}Z"


# Timestamps always leave the API in the same textual form.
IsoDatetime = Annotated[datetime, PlainSerializer(to_iso, return_type=str, when_used="json-unless-none")]


class CamelModel(BaseModel):
    """Base for every wire model: snake_case in Python, camelCase on the wire."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class ErrorResponse(BaseModel):
    error: str = Field(..., description="Short error kind, e.g. Unauthorized")
    message: str = Field(..., description="Human readable reason")


class MessageResponse(BaseModel):
    message: str


def error_responses(*codes: int) -> dict:
    """OpenAPI `responses` entries for the error statuses a route can return."""
    return {code: {"model": ErrorResponse} for code in codes}
