"""
models/profile.py
─────────────────
Read-only user profiles handed to the matching engine.

``UserProfile.from_dict`` accepts both snake_case keys and the camelCase
keys used by the platform's document store (``skillsOffered``,
``averageRating``, ``lastActive`` …).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Callable, Mapping

from models.skills import OfferedSkill, SkillIndex, WantedSkill


class AvailabilitySlot(str, Enum):
    WEEKDAYS = "weekdays"
    WEEKENDS = "weekends"
    EVENINGS = "evenings"
    MORNINGS = "mornings"


class ProfileType(str, Enum):
    PUBLIC = "public"
    PRIVATE = "private"


@dataclass(frozen=True)
class Availability:
    weekdays: bool = False
    weekends: bool = True
    evenings: bool = True
    mornings: bool = False
    notes: str = ""

    def allows(self, slot: AvailabilitySlot) -> bool:
        return _SLOT_FLAGS[AvailabilitySlot(slot)](self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any] | None) -> "Availability":
        if not data:
            return cls()
        defaults = cls()
        return cls(
            weekdays=bool(data.get("weekdays", defaults.weekdays)),
            weekends=bool(data.get("weekends", defaults.weekends)),
            evenings=bool(data.get("evenings", defaults.evenings)),
            mornings=bool(data.get("mornings", defaults.mornings)),
            notes=str(data.get("notes") or ""),
        )


_SLOT_FLAGS: dict[AvailabilitySlot, Callable[[Availability], bool]] = {
    AvailabilitySlot.WEEKDAYS: lambda a: a.weekdays,
    AvailabilitySlot.WEEKENDS: lambda a: a.weekends,
    AvailabilitySlot.EVENINGS: lambda a: a.evenings,
    AvailabilitySlot.MORNINGS: lambda a: a.mornings,
}


# ─────────────────────────────────────────────────────────────────────────────
#  Parsing helpers
# ─────────────────────────────────────────────────────────────────────────────

def _pick(data: Mapping[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the first key present with a usable value."""
    for key in keys:
        if key in data:
            value = data[key]
            if value is None:
                continue
            if isinstance(value, float) and math.isnan(value):
                continue
            return value
    return default


def as_utc(value: datetime) -> datetime:
    """Naive datetimes are read as UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def parse_timestamp(value: Any) -> datetime | None:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return as_utc(value)
    if isinstance(value, (int, float)):
        if isinstance(value, float) and math.isnan(value):
            return None
        # epoch milliseconds, as the document store exports them
        return datetime.fromtimestamp(value / 1000.0, tz=timezone.utc)
    try:
        return as_utc(datetime.fromisoformat(str(value).strip()))
    except ValueError:
        return None


def _safe_float(value: Any, default: float = 0.0) -> float:
    try:
        result = float(value)
    except (TypeError, ValueError):
        return default
    return default if math.isnan(result) else result


# ─────────────────────────────────────────────────────────────────────────────
#  Profile
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class UserProfile:
    id: str
    name: str = ""
    skills_offered: tuple[OfferedSkill, ...] = ()
    skills_wanted: tuple[WantedSkill, ...] = ()
    average_rating: float = 0.0
    total_ratings: int = 0
    last_active_at: datetime | None = None
    joined_at: datetime | None = None
    location: str | None = None
    availability: Availability = field(default_factory=Availability)
    profile_type: str = ProfileType.PUBLIC.value
    is_active: bool = True
    is_banned: bool = False

    @property
    def offered_index(self) -> SkillIndex:
        return SkillIndex(self.skills_offered)

    @property
    def wanted_index(self) -> SkillIndex:
        return SkillIndex(self.skills_wanted)

    @property
    def is_public(self) -> bool:
        return self.profile_type == ProfileType.PUBLIC.value

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "UserProfile":
        offered = _pick(data, "skills_offered", "skillsOffered", default=[])
        wanted = _pick(data, "skills_wanted", "skillsWanted", default=[])
        location = _pick(data, "location")
        location = str(location).strip() if location is not None else None

        rating = _safe_float(_pick(data, "average_rating", "averageRating", default=0.0))

        return cls(
            id=str(_pick(data, "id", "_id", default="")),
            name=str(_pick(data, "name", default="")),
            skills_offered=tuple(OfferedSkill.from_dict(s) for s in offered if isinstance(s, Mapping)),
            skills_wanted=tuple(WantedSkill.from_dict(s) for s in wanted if isinstance(s, Mapping)),
            average_rating=min(max(rating, 0.0), 5.0),
            total_ratings=int(_safe_float(_pick(data, "total_ratings", "totalRatings", default=0))),
            last_active_at=parse_timestamp(_pick(data, "last_active_at", "lastActive", "lastActiveAt")),
            joined_at=parse_timestamp(_pick(data, "joined_at", "joinedAt")),
            location=location or None,
            availability=Availability.from_dict(_pick(data, "availability")),
            profile_type=str(_pick(data, "profile_type", "profileType", default="public")).lower(),
            is_active=bool(_pick(data, "is_active", "isActive", default=True)),
            is_banned=bool(_pick(data, "is_banned", "isBanned", default=False)),
        )
