"""Schemas for user profiles and role assignment."""

from typing import Literal

from pydantic import BaseModel, ConfigDict, field_validator

Role = Literal["ASHA_WORKER", "OFFICIAL"]

DEFAULT_ROLE: Role = "ASHA_WORKER"
OFFICIAL_ROLE: Role = "OFFICIAL"


class UserProfile(BaseModel):
    """A row of the profiles table."""

    model_config = ConfigDict(extra="ignore")

    id: str | int
    phone: str | None = None
    role: str = DEFAULT_ROLE

    @field_validator("phone", mode="before")
    @classmethod
    def _blank_phone_is_missing(cls, v):
        if v is None:
            return None
        v = str(v).strip()
        return v or None

    @field_validator("role", mode="before")
    @classmethod
    def _missing_role_is_default(cls, v):
        return v or DEFAULT_ROLE
