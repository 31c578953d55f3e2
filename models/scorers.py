"""
models/scorers.py
═════════════════
The five independent sub-scorers behind the compatibility score.

Factor                 Cap   Inputs
──────────────────────────────────────────────────────────────────────
  Skill match           20   current.skills_wanted  × candidate.skills_offered
  Mutual benefit        25   current.skills_offered × candidate.skills_wanted
  Reputation            10   candidate.average_rating
  Activity              10   candidate.last_active_at vs evaluation time
  Location              10   both free-text locations (pluggable strategy)

Every scorer returns a ``SubScore``: the capped value, the per-skill
matches that produced it, and human-readable reasons for the breakdown.
Scorers never raise on malformed skill records; unknown levels and
priorities fall back to the defaults in ``models.skills``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import Protocol, runtime_checkable

from models.profile import UserProfile, as_utc
from models.skills import SkillIndex, level_compatibility


@dataclass(frozen=True)
class ScoredMatch:
    """One skill pairing that contributed points."""
    skill:    str
    level:    str
    priority: str
    points:   float


@dataclass(frozen=True)
class SubScore:
    value:   float
    cap:     float
    matches: tuple[ScoredMatch, ...] = ()
    reasons: tuple[str, ...] = field(default_factory=tuple)


def _clamp(value: float, cap: float) -> float:
    return min(max(value, 0.0), cap)


# ─────────────────────────────────────────────────────────────────────────────
#  Skill-based scorers
# ─────────────────────────────────────────────────────────────────────────────

SKILL_MATCH_BASE = 5
SKILL_MATCH_PRIORITY_BONUS = {"high": 3, "medium": 2, "low": 1}

MUTUAL_BENEFIT_BASE = 8
MUTUAL_BENEFIT_PRIORITY_BONUS = {"high": 4, "medium": 2, "low": 1}
MULTI_MATCH_BONUS = 5

# low and unrecognised priorities share the smallest bonus
_FALLBACK_PRIORITY_BONUS = 1


class SkillMatchScorer:
    """What the candidate can teach the current user."""

    def __init__(self, cap: float = 20.0) -> None:
        self.cap = cap

    def score(self, current: UserProfile, candidate: UserProfile) -> SubScore:
        offered = SkillIndex(candidate.skills_offered)
        matches: list[ScoredMatch] = []

        for wanted in current.skills_wanted:
            hit = offered.find(wanted.name)
            if hit is None:
                continue
            points = (
                SKILL_MATCH_BASE
                + SKILL_MATCH_PRIORITY_BONUS.get(wanted.priority, _FALLBACK_PRIORITY_BONUS)
                + level_compatibility(wanted.priority, hit.level)
            )
            matches.append(ScoredMatch(wanted.name, hit.level, wanted.priority, points))

        raw = sum(m.points for m in matches)
        value = _clamp(raw, self.cap)
        reasons = [
            f"They teach '{m.skill}' ({m.level}) you want at {m.priority} priority → {m.points:g} pts"
            for m in matches
        ] or ["None of your wanted skills are offered"]
        if raw > self.cap:
            reasons.append(f"Capped at {self.cap:g} (raw {raw:g})")
        return SubScore(value, self.cap, tuple(matches), tuple(reasons))


class MutualBenefitScorer:
    """What the current user can teach the candidate in return."""

    def __init__(self, cap: float = 25.0) -> None:
        self.cap = cap

    def score(self, current: UserProfile, candidate: UserProfile) -> SubScore:
        wanted_by_candidate = SkillIndex(candidate.skills_wanted)
        matches: list[ScoredMatch] = []

        for offered in current.skills_offered:
            hit = wanted_by_candidate.find(offered.name)
            if hit is None:
                continue
            points = (
                MUTUAL_BENEFIT_BASE
                + MUTUAL_BENEFIT_PRIORITY_BONUS.get(hit.priority, _FALLBACK_PRIORITY_BONUS)
                + level_compatibility(hit.priority, offered.level)
            )
            matches.append(ScoredMatch(offered.name, offered.level, hit.priority, points))

        raw = sum(m.points for m in matches)
        reasons = [
            f"You teach '{m.skill}' ({m.level}) they want at {m.priority} priority → {m.points:g} pts"
            for m in matches
        ] or ["None of your offered skills are wanted"]

        if len(matches) > 1:
            bonus = (len(matches) - 1) * MULTI_MATCH_BONUS
            raw += bonus
            reasons.append(f"{len(matches)} mutual matches → +{bonus} pts")

        value = _clamp(raw, self.cap)
        if raw > self.cap:
            reasons.append(f"Capped at {self.cap:g} (raw {raw:g})")
        return SubScore(value, self.cap, tuple(matches), tuple(reasons))


# ─────────────────────────────────────────────────────────────────────────────
#  Profile-level scorers
# ─────────────────────────────────────────────────────────────────────────────

class ReputationScorer:
    def __init__(self, cap: float = 10.0) -> None:
        self.cap = cap

    def score(self, current: UserProfile, candidate: UserProfile) -> SubScore:
        value = _clamp(candidate.average_rating * 2, self.cap)
        if candidate.average_rating <= 0:
            reason = "No ratings yet"
        else:
            reason = f"Average rating {candidate.average_rating:.2f}/5 → {value:g} pts"
        return SubScore(value, self.cap, reasons=(reason,))


class ActivityScorer:
    """Recency of the candidate's last activity relative to ``evaluated_at``."""

    def __init__(self, cap: float = 10.0) -> None:
        self.cap = cap

    def score(
        self, current: UserProfile, candidate: UserProfile, evaluated_at: datetime
    ) -> SubScore:
        if candidate.last_active_at is None:
            return SubScore(0.0, self.cap, reasons=("Last activity unknown",))

        days = days_between(candidate.last_active_at, evaluated_at)
        value = _clamp(float(self.cap - days), self.cap)
        return SubScore(value, self.cap, reasons=(f"Last active {max(days, 0)} day(s) ago → {value:g} pts",))


def days_between(earlier: datetime, later: datetime) -> int:
    """Whole days elapsed, floored; negative when ``earlier`` is in the future."""
    return (as_utc(later) - as_utc(earlier)) // timedelta(days=1)


# ─────────────────────────────────────────────────────────────────────────────
#  Location
# ─────────────────────────────────────────────────────────────────────────────

@runtime_checkable
class LocationStrategy(Protocol):
    """Anything that scores two free-text locations on a 0–10 scale."""

    def score(self, a: str | None, b: str | None) -> float:
        ...


class TextLocationStrategy:
    """
    Coarse, case-insensitive comparison of "City, Region, …" strings.

    exact match → 10, same city → 8, same region → 5, otherwise 0.
    Empty city or region segments never match. No geocoding takes place.
    """

    EXACT = 10.0
    SAME_CITY = 8.0
    SAME_REGION = 5.0

    def score(self, a: str | None, b: str | None) -> float:
        if not a or not b:
            return 0.0
        left = a.strip().lower()
        right = b.strip().lower()
        if not left or not right:
            return 0.0
        if left == right:
            return self.EXACT

        left_parts = [p.strip() for p in left.split(",")]
        right_parts = [p.strip() for p in right.split(",")]

        left_city, right_city = left_parts[0], right_parts[0]
        if left_city and right_city and (left_city in right_city or right_city in left_city):
            return self.SAME_CITY

        if len(left_parts) > 1 and len(right_parts) > 1:
            if left_parts[1] and left_parts[1] == right_parts[1]:
                return self.SAME_REGION
        return 0.0


class LocationScorer:
    _LABELS = {10.0: "Same location", 8.0: "Same city", 5.0: "Same region"}

    def __init__(self, strategy: LocationStrategy | None = None, cap: float = 10.0) -> None:
        self.strategy = strategy or TextLocationStrategy()
        self.cap = cap

    def score(self, current: UserProfile, candidate: UserProfile) -> SubScore:
        if not current.location or not candidate.location:
            return SubScore(0.0, self.cap, reasons=("Location missing",))
        value = _clamp(float(self.strategy.score(current.location, candidate.location)), self.cap)
        label = self._LABELS.get(value, "No location overlap" if value == 0 else "Partial location overlap")
        return SubScore(
            value,
            self.cap,
            reasons=(f"{label}: '{current.location}' vs '{candidate.location}' → {value:g} pts",),
        )
