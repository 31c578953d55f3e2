"""
models/ranker.py
════════════════
Ranker — scores a candidate set against the current user and orders it.

Ordering
────────
  Results are sorted by ``total_score`` descending with a stable sort, so
  candidates with equal scores keep their input order. Identical inputs and
  evaluation time therefore always yield identical pages.

  All candidates in one ``rank`` call share a single evaluation time.

Usage
─────
  from models.ranker import Ranker, paginate

  ranker  = Ranker()
  results = ranker.rank(current, candidates)
  page    = paginate(results, page=1, limit=10)
  detail  = ranker.detail(current, candidate)
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Generic, Iterable, Sequence, TypeVar

import pandas as pd

from models.compatibility import (
    DEFAULT_SCORING,
    ScoreAggregator,
    ScoreBreakdown,
    ScoringConfig,
    require_profile,
)
from models.errors import InvalidInput
from models.explainer import MatchExplainer, SkillMatchTrace
from models.profile import UserProfile, as_utc
from models.scorers import LocationStrategy
from utils.logger import get_logger

T = TypeVar("T")

logger = get_logger("engine")


@dataclass(frozen=True)
class MatchResult:
    candidate:   UserProfile
    total_score: float
    breakdown:   ScoreBreakdown
    reasons:     dict[str, list[str]] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class MatchDetail:
    result: MatchResult
    trace:  SkillMatchTrace


@dataclass(frozen=True)
class Page(Generic[T]):
    items:         list[T]
    current_page:  int
    limit:         int
    total_items:   int
    total_pages:   int
    has_next:      bool
    has_prev:      bool


def paginate(items: Sequence[T], page: int = 1, limit: int = 10) -> Page[T]:
    """Slice a 1-based page out of an already ordered sequence."""
    if page < 1 or limit < 1:
        raise InvalidInput(f"page and limit must be positive, got page={page}, limit={limit}")
    start = (page - 1) * limit
    end = start + limit
    total = len(items)
    return Page(
        items=list(items[start:end]),
        current_page=page,
        limit=limit,
        total_items=total,
        total_pages=math.ceil(total / limit),
        has_next=end < total,
        has_prev=page > 1,
    )


class Ranker:
    def __init__(
        self,
        config: ScoringConfig = DEFAULT_SCORING,
        location_strategy: LocationStrategy | None = None,
    ) -> None:
        self.aggregator = ScoreAggregator(config, location_strategy)
        self.explainer = MatchExplainer()

    def _evaluate(
        self, current: UserProfile, candidate: UserProfile, now: datetime
    ) -> MatchResult:
        score = self.aggregator.score(current, candidate, evaluated_at=now)
        return MatchResult(candidate, score.total_score, score.breakdown, score.reasons)

    def rank(
        self,
        current: UserProfile,
        candidates: Iterable[UserProfile],
        evaluated_at: datetime | None = None,
    ) -> list[MatchResult]:
        current = require_profile(current, "current user")
        if candidates is None:
            raise InvalidInput("candidate list is missing")
        now = as_utc(evaluated_at) if evaluated_at is not None else datetime.now(timezone.utc)

        results = [self._evaluate(current, candidate, now) for candidate in candidates]
        # sorted() is stable with reverse=True: equal scores keep input order
        results = sorted(results, key=lambda r: r.total_score, reverse=True)

        logger.debug(
            f"Ranked {len(results)} candidates for user {current.id}"
            + (f" (top score {results[0].total_score})" if results else "")
        )
        return results

    def detail(
        self,
        current: UserProfile,
        candidate: UserProfile,
        evaluated_at: datetime | None = None,
    ) -> MatchDetail:
        current = require_profile(current, "current user")
        candidate = require_profile(candidate, "candidate")
        now = as_utc(evaluated_at) if evaluated_at is not None else datetime.now(timezone.utc)
        return MatchDetail(
            result=self._evaluate(current, candidate, now),
            trace=self.explainer.explain(current, candidate),
        )


# ─────────────────────────────────────────────────────────────────────────────
#  Tabular export
# ─────────────────────────────────────────────────────────────────────────────

RESULT_COLUMNS = [
    "Rank", "User_ID", "Name", "Total_Score",
    "Skill_Match", "Mutual_Benefit", "Reputation_Bonus", "Activity_Bonus", "Location_Bonus",
]


def results_to_frame(results: Sequence[MatchResult]) -> pd.DataFrame:
    """One row per candidate, in ranking order."""
    rows = [
        {
            "Rank":             position,
            "User_ID":          r.candidate.id,
            "Name":             r.candidate.name,
            "Total_Score":      r.total_score,
            "Skill_Match":      r.breakdown.skill_match,
            "Mutual_Benefit":   r.breakdown.mutual_benefit,
            "Reputation_Bonus": r.breakdown.reputation_bonus,
            "Activity_Bonus":   r.breakdown.activity_bonus,
            "Location_Bonus":   r.breakdown.location_bonus,
        }
        for position, r in enumerate(results, start=1)
    ]
    return pd.DataFrame(rows, columns=RESULT_COLUMNS)


def run_matching(
    profiles_path: str | Path,
    user_id: str,
    top_k: int = 10,
    evaluated_at: datetime | None = None,
) -> pd.DataFrame:
    """
    One-liner: load → filter visible candidates → rank → return top_k rows.

    Example
    -------
    >>> from models.ranker import run_matching
    >>> df = run_matching("data/profiles.json", "u1", top_k=5)
    >>> print(df[["User_ID", "Total_Score"]])
    """
    from utils.data_loader import ProfileStore

    store = ProfileStore.from_file(profiles_path)
    current = store.get(user_id)
    results = Ranker().rank(current, store.visible_candidates(current.id), evaluated_at)
    return results_to_frame(results[:top_k])


if __name__ == "__main__":
    import sys

    path = sys.argv[1] if len(sys.argv) > 1 else "data/profiles.json"
    user = sys.argv[2] if len(sys.argv) > 2 else "u1"
    print(run_matching(path, user).to_string(index=False))
