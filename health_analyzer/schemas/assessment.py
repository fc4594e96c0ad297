"""Schemas for the result of one scoring run."""

from typing import Literal, NamedTuple

from pydantic import BaseModel, ConfigDict

Tier = Literal["Normal", "Low", "Warning", "High", "Critical"]

NO_WEATHER_DATA = "No data"


class Signal(NamedTuple):
    """Additive contribution of one scoring rule."""

    points: int
    note: str


class RiskAssessment(BaseModel):
    """Immutable accumulator threaded through the scoring steps.

    Each step returns a new instance; notes keep evaluation order
    (trend, demographic, severity, environmental, weather).
    """

    model_config = ConfigDict(frozen=True)

    score: int = 0
    notes: tuple[str, ...] = ()
    weather_snapshot: str = NO_WEATHER_DATA
    tier: Tier | None = None

    def apply(self, signal: Signal | None) -> "RiskAssessment":
        if signal is None:
            return self
        return self.model_copy(
            update={"score": self.score + signal.points, "notes": self.notes + (signal.note,)}
        )

    def with_weather(self, snapshot: str) -> "RiskAssessment":
        return self.model_copy(update={"weather_snapshot": snapshot})

    def with_tier(self, tier: Tier) -> "RiskAssessment":
        return self.model_copy(update={"tier": tier})

    @property
    def notes_text(self) -> str:
        return " ".join(self.notes)
