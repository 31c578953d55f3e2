"""
backend/routers/match.py
────────────────────────
FastAPI router for matchmaking endpoints.

Endpoints
─────────
GET  /api/users/matches                 — Ranked matches for the current user
GET  /api/users/search                  — Users offering a skill, by rating
GET  /api/users/skills/offered          — Catalogue of offered skill names
GET  /api/users/{user_id}/match-details — Score, breakdown and skill trace
POST /api/score                         — Score two inline profiles

The current user is identified by the ``X-User-Id`` header; authentication
happens upstream.
"""

from datetime import datetime, timezone
from functools import lru_cache

from fastapi import APIRouter, Depends, Header, HTTPException, Query

from backend.schemas import (
    MatchDetailResponse,
    MatchItem,
    MatchListResponse,
    PaginationMeta,
    ScoreBreakdownSchema,
    ScoreRequest,
    SkillCatalogResponse,
    SkillMatchTraceSchema,
    UserListResponse,
    UserSchema,
    UserSkillsSchema,
)
from config.settings import get_settings
from models.filters import CandidateFilter, SortKey
from models.profile import AvailabilitySlot, UserProfile
from models.ranker import MatchDetail, Ranker, paginate
from utils.data_loader import ProfileStore, get_profile_store
from utils.logger import get_logger

router = APIRouter(prefix="/api", tags=["matchmaking"])

_MAX_PAGE_SIZE = get_settings().max_page_size

logger = get_logger("api")


# ── dependencies ──────────────────────────────────────────────────────────────

@lru_cache(maxsize=1)
def get_ranker() -> Ranker:
    return Ranker()


def _store_dep() -> ProfileStore:
    try:
        return get_profile_store()
    except FileNotFoundError as exc:
        raise HTTPException(status_code=503, detail=str(exc))


def _current_user(
    x_user_id: str | None = Header(None, description="Id of the requesting user"),
    store: ProfileStore = Depends(_store_dep),
) -> UserProfile:
    if not x_user_id or x_user_id not in store:
        raise HTTPException(404, "Current user not found")
    return store.get(x_user_id)


def _page_size(limit: int | None) -> int:
    return limit if limit is not None else get_settings().default_page_size


def _detail_response(detail: MatchDetail, evaluated_at: datetime) -> MatchDetailResponse:
    result = detail.result
    return MatchDetailResponse(
        user=UserSchema.from_profile(result.candidate),
        compatibility_score=result.total_score,
        score_breakdown=ScoreBreakdownSchema.from_breakdown(result.breakdown),
        reasons=result.reasons,
        skill_matches=SkillMatchTraceSchema.from_trace(detail.trace),
        evaluated_at=evaluated_at,
    )


# ── endpoints ─────────────────────────────────────────────────────────────────

@router.get("/users/matches", response_model=MatchListResponse)
def get_matches(
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=_MAX_PAGE_SIZE),
    location: str | None = Query(None, description="Case-insensitive location substring"),
    availability: AvailabilitySlot | None = Query(None),
    current: UserProfile = Depends(_current_user),
    store: ProfileStore = Depends(_store_dep),
    ranker: Ranker = Depends(get_ranker),
):
    filters = CandidateFilter(location=location, availability=availability)
    candidates = store.visible_candidates(current.id, filters)
    results = ranker.rank(current, candidates)
    result_page = paginate(results, page=page, limit=_page_size(limit))
    logger.info(
        f"Matches for {current.id}: {len(candidates)} candidates, "
        f"page {page}/{result_page.total_pages}"
    )
    return MatchListResponse(
        data=[MatchItem.from_result(r) for r in result_page.items],
        pagination=PaginationMeta.from_page(result_page),
        current_user=UserSkillsSchema(
            id=current.id,
            skills_offered=[vars(s) for s in current.skills_offered],
            skills_wanted=[vars(s) for s in current.skills_wanted],
        ),
    )


@router.get("/users/search", response_model=UserListResponse)
def search_users(
    skill: str | None = Query(None, description="Offered skill name (substring)"),
    page: int = Query(1, ge=1),
    limit: int | None = Query(None, ge=1, le=_MAX_PAGE_SIZE),
    current: UserProfile = Depends(_current_user),
    store: ProfileStore = Depends(_store_dep),
):
    if not skill or not skill.strip():
        raise HTTPException(400, "Skill parameter is required")
    users = store.browse(
        current.id,
        CandidateFilter(skill=skill, offered_only=True),
        sort_by=SortKey.AVERAGE_RATING,
    )
    user_page = paginate(users, page=page, limit=_page_size(limit))
    return UserListResponse(
        data=[UserSchema.from_profile(u) for u in user_page.items],
        pagination=PaginationMeta.from_page(user_page),
        search_term=skill,
    )


@router.get("/users/skills/offered", response_model=SkillCatalogResponse)
def list_offered_skills(
    current: UserProfile = Depends(_current_user),
    store: ProfileStore = Depends(_store_dep),
):
    return SkillCatalogResponse(data=store.offered_skill_names())


@router.get("/users/{user_id}/match-details", response_model=MatchDetailResponse)
def get_match_details(
    user_id: str,
    current: UserProfile = Depends(_current_user),
    store: ProfileStore = Depends(_store_dep),
    ranker: Ranker = Depends(get_ranker),
):
    try:
        other = store.get(user_id)
    except KeyError:
        raise HTTPException(404, "User not found")
    if not other.is_public and other.id != current.id:
        raise HTTPException(403, "This profile is private")

    now = datetime.now(timezone.utc)
    return _detail_response(ranker.detail(current, other, evaluated_at=now), now)


@router.post("/score", response_model=MatchDetailResponse)
def score_profiles(body: ScoreRequest, ranker: Ranker = Depends(get_ranker)):
    now = body.evaluated_at or datetime.now(timezone.utc)
    detail = ranker.detail(body.current.to_profile(), body.candidate.to_profile(), evaluated_at=now)
    return _detail_response(detail, now)
