"""Schemas for community health reports."""

import logging
from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

logger = logging.getLogger(__name__)

SHARED_WATER_SOURCES = ("Community Well", "River")


class Coordinates(BaseModel):
    """A resolved (lat, lon) pair in decimal degrees."""

    model_config = ConfigDict(frozen=True)

    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)


class Report(BaseModel):
    """A row of the reports table as delivered by the insert webhook or the RPC view."""

    model_config = ConfigDict(extra="ignore")

    id: int | str
    village_name: str = ""
    diarrhea_cases: int = Field(default=0, ge=0)
    fever_cases: int = Field(default=0, ge=0)
    vomiting_cases: int = Field(default=0, ge=0)
    cases_in_children: int = Field(default=0, ge=0)
    water_source_tested: str | None = None
    lat: float | None = None
    lon: float | None = None
    location: Any = None
    created_at: datetime | None = None

    # Written back by the analyzer
    risk_level: str | None = None
    weather_snapshot: str | None = None
    analysis_notes: str | None = None

    @field_validator(
        "diarrhea_cases", "fever_cases", "vomiting_cases", "cases_in_children", mode="before"
    )
    @classmethod
    def _missing_count_is_zero(cls, v):
        return 0 if v is None else v

    @field_validator("lat", "lon", mode="before")
    @classmethod
    def _unparseable_coordinate_is_missing(cls, v, info):
        if v is None or isinstance(v, (int, float)):
            return v
        try:
            return float(v)
        except (TypeError, ValueError):
            logger.warning("Unparseable %s %r treated as unresolved", info.field_name, v)
            return None

    @field_validator("village_name", mode="before")
    @classmethod
    def _missing_village_is_blank(cls, v):
        return "" if v is None else v

    @property
    def total_cases(self) -> int:
        return self.diarrhea_cases + self.fever_cases + self.vomiting_cases
