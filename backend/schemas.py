"""
backend/schemas.py
──────────────────
Pydantic v2 request / response models for all FastAPI endpoints.

Sections
────────
  1. Profile models            — OfferedSkillSchema, WantedSkillSchema, UserSchema
  2. Match models              — ScoreBreakdownSchema, MatchItem, MatchListResponse
  3. Detail models             — SkillMatchTraceSchema, MatchDetailResponse
  4. Inline scoring models     — ScoreRequest
  5. Shared / util models      — PaginationMeta, SkillCatalogResponse, HealthResponse
"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from models.compatibility import ScoreBreakdown
from models.explainer import SkillMatchTrace
from models.profile import UserProfile
from models.ranker import MatchResult, Page


# ─────────────────────────────────────────────────────────────────────────────
#  1. Profile models
# ─────────────────────────────────────────────────────────────────────────────

class OfferedSkillSchema(BaseModel):
    name:        str
    level:       str = "intermediate"
    description: str = ""


class WantedSkillSchema(BaseModel):
    name:        str
    priority:    str = "medium"
    description: str = ""


class AvailabilitySchema(BaseModel):
    weekdays: bool = False
    weekends: bool = True
    evenings: bool = True
    mornings: bool = False
    notes:    str = ""


class UserSchema(BaseModel):
    """Public view of a profile, also accepted as input by POST /api/score."""
    id:             str
    name:           str = ""
    location:       Optional[str] = None
    skills_offered: list[OfferedSkillSchema] = Field(default_factory=list)
    skills_wanted:  list[WantedSkillSchema] = Field(default_factory=list)
    average_rating: float = Field(0.0, ge=0.0, le=5.0)
    total_ratings:  int = Field(0, ge=0)
    last_active_at: Optional[datetime] = None
    joined_at:      Optional[datetime] = None
    availability:   AvailabilitySchema = Field(default_factory=AvailabilitySchema)
    profile_type:   str = "public"

    @classmethod
    def from_profile(cls, profile: UserProfile) -> "UserSchema":
        return cls(
            id=profile.id,
            name=profile.name,
            location=profile.location,
            skills_offered=[OfferedSkillSchema(**vars(s)) for s in profile.skills_offered],
            skills_wanted=[WantedSkillSchema(**vars(s)) for s in profile.skills_wanted],
            average_rating=profile.average_rating,
            total_ratings=profile.total_ratings,
            last_active_at=profile.last_active_at,
            joined_at=profile.joined_at,
            availability=AvailabilitySchema(**vars(profile.availability)),
            profile_type=profile.profile_type,
        )

    def to_profile(self) -> UserProfile:
        return UserProfile.from_dict(self.model_dump())


class UserSkillsSchema(BaseModel):
    id:             str
    skills_offered: list[OfferedSkillSchema]
    skills_wanted:  list[WantedSkillSchema]


# ─────────────────────────────────────────────────────────────────────────────
#  2. Match models
# ─────────────────────────────────────────────────────────────────────────────

class ScoreBreakdownSchema(BaseModel):
    """Unweighted factor scores."""
    skill_match:      float = Field(..., ge=0, description="Skill match (max 20)")
    mutual_benefit:   float = Field(..., ge=0, description="Mutual benefit (max 25)")
    reputation_bonus: float = Field(..., ge=0, description="Reputation (max 10)")
    activity_bonus:   float = Field(..., ge=0, description="Activity (max 10)")
    location_bonus:   float = Field(..., ge=0, description="Location (max 10)")

    @classmethod
    def from_breakdown(cls, breakdown: ScoreBreakdown) -> "ScoreBreakdownSchema":
        return cls(**breakdown.to_dict())


class MatchItem(BaseModel):
    user:                UserSchema
    compatibility_score: float = Field(..., ge=0, description="Weighted total (0–18.5)")
    score_breakdown:     ScoreBreakdownSchema
    reasons:             dict[str, list[str]] = Field(default_factory=dict)

    @classmethod
    def from_result(cls, result: MatchResult) -> "MatchItem":
        return cls(
            user=UserSchema.from_profile(result.candidate),
            compatibility_score=result.total_score,
            score_breakdown=ScoreBreakdownSchema.from_breakdown(result.breakdown),
            reasons=result.reasons,
        )


class PaginationMeta(BaseModel):
    current_page: int
    total_pages:  int
    total_users:  int
    has_next:     bool
    has_prev:     bool

    @classmethod
    def from_page(cls, page: Page) -> "PaginationMeta":
        return cls(
            current_page=page.current_page,
            total_pages=page.total_pages,
            total_users=page.total_items,
            has_next=page.has_next,
            has_prev=page.has_prev,
        )


class MatchListResponse(BaseModel):
    """Response envelope for GET /api/users/matches."""
    data:         list[MatchItem]
    pagination:   PaginationMeta
    current_user: UserSkillsSchema


class UserListResponse(BaseModel):
    """Response envelope for GET /api/users/search."""
    data:        list[UserSchema]
    pagination:  PaginationMeta
    search_term: Optional[str] = None


# ─────────────────────────────────────────────────────────────────────────────
#  3. Detail models
# ─────────────────────────────────────────────────────────────────────────────

class TeachableSkillSchema(BaseModel):
    skill:       str
    level:       str
    priority:    str
    description: str = ""


class SharedSkillSchema(BaseModel):
    skill:       str
    your_level:  str
    their_level: str


class SkillMatchTraceSchema(BaseModel):
    you_can_teach:  list[TeachableSkillSchema]
    they_can_teach: list[TeachableSkillSchema]
    mutual_matches: list[SharedSkillSchema]

    @classmethod
    def from_trace(cls, trace: SkillMatchTrace) -> "SkillMatchTraceSchema":
        return cls(**trace.to_dict())


class MatchDetailResponse(BaseModel):
    """Response for GET /api/users/{user_id}/match-details and POST /api/score."""
    user:                UserSchema
    compatibility_score: float
    score_breakdown:     ScoreBreakdownSchema
    reasons:             dict[str, list[str]] = Field(default_factory=dict)
    skill_matches:       SkillMatchTraceSchema
    evaluated_at:        datetime


# ─────────────────────────────────────────────────────────────────────────────
#  4. Inline scoring models
# ─────────────────────────────────────────────────────────────────────────────

class ScoreRequest(BaseModel):
    """Body for POST /api/score."""
    current:      UserSchema
    candidate:    UserSchema
    evaluated_at: Optional[datetime] = Field(
        None, description="Evaluation time for the activity factor (defaults to now)"
    )


# ─────────────────────────────────────────────────────────────────────────────
#  5. Shared / utility models
# ─────────────────────────────────────────────────────────────────────────────

class SkillCatalogResponse(BaseModel):
    data: list[str]


class HealthResponse(BaseModel):
    """Response for GET /health."""
    status:          str
    profiles_loaded: int
    engine_ready:    bool
    max_score:       float
    version:         str = "1.0.0"
