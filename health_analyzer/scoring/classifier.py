"""Map a risk score to an ordinal tier."""

from health_analyzer.schemas.assessment import Tier

# (minimum score, tier), evaluated top-down; lower edge is inclusive
TIER_POLICY: tuple[tuple[int, Tier], ...] = (
    (75, "Critical"),
    (50, "High"),
    (25, "Warning"),
    (10, "Low"),
)
DEFAULT_TIER: Tier = "Normal"

# Tiers that trigger an SMS alert
ALERT_TIERS: frozenset[str] = frozenset({"High", "Critical"})


def classify_score(
    score: float,
    policy: tuple[tuple[int, Tier], ...] = TIER_POLICY,
    default: Tier = DEFAULT_TIER,
) -> Tier:
    """Return the tier of the highest threshold the score reaches."""
    for minimum, tier in sorted(policy, key=lambda row: row[0], reverse=True):
        if score >= minimum:
            return tier
    return default
