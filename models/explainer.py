"""
models/explainer.py
───────────────────
MatchExplainer — lists which skills each party can teach the other.

This walks the skill lists on its own and awards no points; it feeds the
match-detail view alongside the numeric breakdown.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field

from models.profile import UserProfile
from models.skills import SkillIndex


@dataclass(frozen=True)
class TeachableSkill:
    """A skill one side offers and the other side wants."""
    skill:       str
    level:       str
    priority:    str
    description: str = ""


@dataclass(frozen=True)
class SharedSkill:
    """A skill both sides offer."""
    skill:       str
    your_level:  str
    their_level: str


@dataclass(frozen=True)
class SkillMatchTrace:
    you_can_teach:  list[TeachableSkill] = field(default_factory=list)
    they_can_teach: list[TeachableSkill] = field(default_factory=list)
    mutual_matches: list[SharedSkill] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not (self.you_can_teach or self.they_can_teach or self.mutual_matches)

    def to_dict(self) -> dict[str, list[dict]]:
        return asdict(self)


class MatchExplainer:
    def explain(self, current: UserProfile, candidate: UserProfile) -> SkillMatchTrace:
        they_want = SkillIndex(candidate.skills_wanted)
        you_want = SkillIndex(current.skills_wanted)
        they_offer = SkillIndex(candidate.skills_offered)

        you_can_teach = []
        shared = []
        for offered in current.skills_offered:
            wanted = they_want.find(offered.name)
            if wanted is not None:
                you_can_teach.append(
                    TeachableSkill(offered.name, offered.level, wanted.priority, wanted.description)
                )
            theirs = they_offer.find(offered.name)
            if theirs is not None:
                shared.append(SharedSkill(offered.name, offered.level, theirs.level))

        they_can_teach = []
        for offered in candidate.skills_offered:
            wanted = you_want.find(offered.name)
            if wanted is not None:
                they_can_teach.append(
                    TeachableSkill(offered.name, offered.level, wanted.priority, wanted.description)
                )

        return SkillMatchTrace(you_can_teach, they_can_teach, shared)
