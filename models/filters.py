"""
models/filters.py
─────────────────
Candidate narrowing applied before the engine runs, plus browse ordering.

Filters keep ranking cost bounded: the engine scores every candidate it
is given.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Callable, Iterable

from models.profile import AvailabilitySlot, UserProfile
from models.skills import normalise_name

_EPOCH = datetime.min.replace(tzinfo=timezone.utc)


class SortKey(str, Enum):
    AVERAGE_RATING = "average_rating"
    NEWEST = "newest"
    LAST_ACTIVE = "last_active"


_SORT_KEYS: dict[SortKey, Callable[[UserProfile], object]] = {
    SortKey.AVERAGE_RATING: lambda p: p.average_rating,
    SortKey.NEWEST:         lambda p: p.joined_at or _EPOCH,
    SortKey.LAST_ACTIVE:    lambda p: p.last_active_at or _EPOCH,
}


def is_visible(profile: UserProfile) -> bool:
    """Public, active and not banned."""
    return profile.is_public and profile.is_active and not profile.is_banned


@dataclass(frozen=True)
class CandidateFilter:
    location:      str | None = None
    availability:  AvailabilitySlot | None = None
    skill:         str | None = None
    offered_only:  bool = False

    def matches(self, profile: UserProfile) -> bool:
        if self.location:
            if not profile.location or self.location.strip().lower() not in profile.location.lower():
                return False
        if self.availability is not None and not profile.availability.allows(self.availability):
            return False
        if self.skill:
            needle = normalise_name(self.skill)
            names = [s.key for s in profile.skills_offered]
            if not self.offered_only:
                names += [s.key for s in profile.skills_wanted]
            if not any(needle in name for name in names):
                return False
        return True

    def apply(self, profiles: Iterable[UserProfile]) -> list[UserProfile]:
        return [p for p in profiles if self.matches(p)]


def sort_profiles(profiles: Iterable[UserProfile], key: SortKey = SortKey.AVERAGE_RATING) -> list[UserProfile]:
    """Descending, stable."""
    return sorted(profiles, key=_SORT_KEYS[SortKey(key)], reverse=True)
