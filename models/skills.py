"""
models/skills.py
────────────────
Skill records and the case-insensitive SkillIndex used by every scorer.

Offered skills carry a proficiency ``level``; wanted skills carry a
``priority``. Level and priority strings are trimmed and lower-cased when a
record is built, however it is built, so that table lookups see one spelling.
Unrecognised values survive and fall back to the documented defaults only
when a score is computed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Iterable, Iterator, Mapping


class SkillLevel(str, Enum):
    BEGINNER = "beginner"
    INTERMEDIATE = "intermediate"
    ADVANCED = "advanced"
    EXPERT = "expert"


class SkillPriority(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


# ─────────────────────────────────────────────────────────────────────────────
#  Level / priority tables
# ─────────────────────────────────────────────────────────────────────────────

LEVEL_SCORES: dict[str, int] = {
    SkillLevel.BEGINNER.value:     1,
    SkillLevel.INTERMEDIATE.value: 2,
    SkillLevel.ADVANCED.value:     3,
    SkillLevel.EXPERT.value:       4,
}
DEFAULT_LEVEL_SCORE = 1

PRIORITY_MULTIPLIERS: dict[str, float] = {
    SkillPriority.LOW.value:    0.5,
    SkillPriority.MEDIUM.value: 1.0,
    SkillPriority.HIGH.value:   1.5,
}
DEFAULT_PRIORITY_MULTIPLIER = 1.0


def normalise_name(name: Any) -> str:
    """Comparison key for a skill name: trimmed and case-folded."""
    if name is None:
        return ""
    return str(name).strip().lower()


def _clean_token(value: Any, default: str) -> str:
    if value is None:
        return default
    token = str(value).strip().lower()
    return token or default


def level_score(level: str | None) -> int:
    return LEVEL_SCORES.get(_clean_token(level, ""), DEFAULT_LEVEL_SCORE)


def priority_multiplier(priority: str | None) -> float:
    return PRIORITY_MULTIPLIERS.get(_clean_token(priority, ""), DEFAULT_PRIORITY_MULTIPLIER)


def level_compatibility(priority: str | None, level: str | None) -> float:
    """Bonus for pairing a wanted skill's priority with an offered skill's level."""
    return level_score(level) * priority_multiplier(priority)


# ─────────────────────────────────────────────────────────────────────────────
#  Records
# ─────────────────────────────────────────────────────────────────────────────

@dataclass(frozen=True)
class OfferedSkill:
    name: str
    level: str = SkillLevel.INTERMEDIATE.value
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "level", _clean_token(self.level, SkillLevel.INTERMEDIATE.value))

    @property
    def key(self) -> str:
        return normalise_name(self.name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "OfferedSkill":
        return cls(
            name=str(data.get("name") or "").strip(),
            level=data.get("level"),
            description=str(data.get("description") or ""),
        )


@dataclass(frozen=True)
class WantedSkill:
    name: str
    priority: str = SkillPriority.MEDIUM.value
    description: str = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "priority", _clean_token(self.priority, SkillPriority.MEDIUM.value))

    @property
    def key(self) -> str:
        return normalise_name(self.name)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "WantedSkill":
        return cls(
            name=str(data.get("name") or "").strip(),
            priority=data.get("priority"),
            description=str(data.get("description") or ""),
        )


# ─────────────────────────────────────────────────────────────────────────────
#  Index
# ─────────────────────────────────────────────────────────────────────────────

class SkillIndex:
    """
    Case-insensitive lookup over one skill list.

    The first record for a given name wins; records with an empty name are
    kept in iteration order but are never indexed, so they cannot match.
    """

    def __init__(self, skills: Iterable[OfferedSkill | WantedSkill] | None = None) -> None:
        self._skills = tuple(skills or ())
        self._by_key: dict[str, OfferedSkill | WantedSkill] = {}
        for skill in self._skills:
            key = skill.key
            if key and key not in self._by_key:
                self._by_key[key] = skill

    def find(self, name: str) -> OfferedSkill | WantedSkill | None:
        key = normalise_name(name)
        if not key:
            return None
        return self._by_key.get(key)

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.find(name) is not None

    def __iter__(self) -> Iterator[OfferedSkill | WantedSkill]:
        return iter(self._skills)

    def __len__(self) -> int:
        return len(self._skills)

    def names(self) -> list[str]:
        """Distinct indexed names, in first-seen order and original casing."""
        return [skill.name for skill in self._by_key.values()]
