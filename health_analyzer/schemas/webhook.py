"""Schemas for the database webhook envelope and responses."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class WebhookEvent(BaseModel):
    """Supabase database webhook payload."""

    model_config = ConfigDict(extra="ignore")

    type: str
    table: str
    record: dict[str, Any] | None = None
    old_record: dict[str, Any] | None = None
    db_schema: str | None = Field(default=None, alias="schema")


class WebhookResponse(BaseModel):
    message: str


class WebhookError(BaseModel):
    error: str
