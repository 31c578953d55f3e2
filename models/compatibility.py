"""
models/compatibility.py
═══════════════════════
ScoreAggregator — weighted compatibility score between two users.

Five Scoring Factors
────────────────────
  Skill match       weight 0.40   cap 20   → max  8.0
  Mutual benefit    weight 0.30   cap 25   → max  7.5
  Reputation        weight 0.15   cap 10   → max  1.5
  Activity          weight 0.10   cap 10   → max  1.0
  Location          weight 0.05   cap 10   → max  0.5
                                             ─────────
                                             max 18.5

The weights and caps live in one ``ScoringConfig`` handed to the
aggregator. The total is rounded half-up to two decimals.

Activity depends on the evaluation time, so repeated calls are only
identical when the same ``evaluated_at`` is passed in.

Usage
─────
  from models.compatibility import ScoreAggregator

  aggregator = ScoreAggregator()
  result = aggregator.score(current, candidate, evaluated_at=now)
  result.total_score, result.breakdown.skill_match
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Decimal

from models.errors import InvalidInput
from models.profile import UserProfile, as_utc
from models.scorers import (
    ActivityScorer,
    LocationScorer,
    LocationStrategy,
    MutualBenefitScorer,
    ReputationScorer,
    SkillMatchScorer,
    SubScore,
)


# ─────────────────────────────────────────────────────────────────────────────
#  Configuration
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class FactorConfig:
    weight: float
    cap:    float

    def __post_init__(self) -> None:
        if self.weight < 0 or self.cap < 0:
            raise ValueError(f"weight and cap must be non-negative, got {self}")

    @property
    def max_points(self) -> Decimal:
        return exact(self.weight) * exact(self.cap)


@dataclass(frozen=True)
class ScoringConfig:
    skill_match:      FactorConfig = FactorConfig(weight=0.40, cap=20.0)
    mutual_benefit:   FactorConfig = FactorConfig(weight=0.30, cap=25.0)
    reputation_bonus: FactorConfig = FactorConfig(weight=0.15, cap=10.0)
    activity_bonus:   FactorConfig = FactorConfig(weight=0.10, cap=10.0)
    location_bonus:   FactorConfig = FactorConfig(weight=0.05, cap=10.0)

    def factors(self) -> dict[str, FactorConfig]:
        return {
            "skill_match":      self.skill_match,
            "mutual_benefit":   self.mutual_benefit,
            "reputation_bonus": self.reputation_bonus,
            "activity_bonus":   self.activity_bonus,
            "location_bonus":   self.location_bonus,
        }

    @property
    def max_total_score(self) -> float:
        return round_half_up(sum(f.max_points for f in self.factors().values()))


DEFAULT_SCORING = ScoringConfig()


def exact(value: float | int | Decimal) -> Decimal:
    """Decimal with the shortest digits that round-trip the float (4.1, not 4.0999…)."""
    if isinstance(value, Decimal):
        return value
    return Decimal(repr(value))


def round_half_up(value: float | Decimal, places: int = 2) -> float:
    quantum = Decimal(1).scaleb(-places)
    return float(exact(value).quantize(quantum, rounding=ROUND_HALF_UP))


# ─────────────────────────────────────────────────────────────────────────────
#  Results
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class ScoreBreakdown:
    """Unweighted sub-scores, each within its cap."""
    skill_match:      float = 0.0
    mutual_benefit:   float = 0.0
    reputation_bonus: float = 0.0
    activity_bonus:   float = 0.0
    location_bonus:   float = 0.0

    def to_dict(self) -> dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class CompatibilityScore:
    total_score: float
    breakdown:   ScoreBreakdown
    reasons:     dict[str, list[str]] = field(default_factory=dict)


def require_profile(profile: object, role: str) -> UserProfile:
    if profile is None:
        raise InvalidInput(f"{role} profile is missing")
    if not isinstance(profile, UserProfile):
        raise InvalidInput(f"{role} must be a UserProfile, got {type(profile).__name__}")
    return profile


# ─────────────────────────────────────────────────────────────────────────────
#  Aggregator
# ─────────────────────────────────────────────────────────────────────────────

class ScoreAggregator:
    """
    Parameters
    ----------
    config            : weights and caps for the five factors
    location_strategy : replaces the default text-based location comparison
    """

    def __init__(
        self,
        config: ScoringConfig = DEFAULT_SCORING,
        location_strategy: LocationStrategy | None = None,
    ) -> None:
        self.config = config
        self._skill = SkillMatchScorer(cap=config.skill_match.cap)
        self._mutual = MutualBenefitScorer(cap=config.mutual_benefit.cap)
        self._reputation = ReputationScorer(cap=config.reputation_bonus.cap)
        self._activity = ActivityScorer(cap=config.activity_bonus.cap)
        self._location = LocationScorer(location_strategy, cap=config.location_bonus.cap)

    def score(
        self,
        current: UserProfile,
        candidate: UserProfile,
        evaluated_at: datetime | None = None,
    ) -> CompatibilityScore:
        current = require_profile(current, "current user")
        candidate = require_profile(candidate, "candidate")
        now = as_utc(evaluated_at) if evaluated_at is not None else datetime.now(timezone.utc)

        parts: dict[str, SubScore] = {
            "skill_match":      self._skill.score(current, candidate),
            "mutual_benefit":   self._mutual.score(current, candidate),
            "reputation_bonus": self._reputation.score(current, candidate),
            "activity_bonus":   self._activity.score(current, candidate, now),
            "location_bonus":   self._location.score(current, candidate),
        }

        weights = self.config.factors()
        # summed in Decimal so a total ending in 5 at the third decimal rounds up
        total = sum(
            (exact(parts[name].value) * exact(weights[name].weight) for name in weights),
            Decimal(0),
        )

        return CompatibilityScore(
            total_score=round_half_up(max(total, Decimal(0))),
            breakdown=ScoreBreakdown(**{name: part.value for name, part in parts.items()}),
            reasons={name: list(part.reasons) for name, part in parts.items()},
        )
