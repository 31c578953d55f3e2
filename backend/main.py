"""
backend/main.py
═══════════════
FastAPI application for SkillSwap Match — compatibility scoring and
ranking of skill-exchange partners.

Endpoints
─────────
  GET  /health                            — Liveness / readiness probe
  GET  /api/users/matches                 — Ranked matches with score breakdown
  GET  /api/users/{user_id}/match-details — Score, breakdown and skill trace
  GET  /api/users/search                  — Users offering a skill
  GET  /api/users/skills/offered          — Offered skill catalogue
  POST /api/score                         — Score two inline profiles

  Run with:
      uvicorn backend.main:app --reload --host 0.0.0.0 --port 8000
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.routers import match
from backend.schemas import HealthResponse
from models.compatibility import DEFAULT_SCORING
from models.errors import InvalidInput
from utils.data_loader import get_profile_store
from utils.logger import get_logger

logger = get_logger("api")

# ─────────────────────────────────────────────────────────────────────────────
#  App initialisation
# ─────────────────────────────────────────────────────────────────────────────

app = FastAPI(
    title="SkillSwap Match — Compatibility API",
    description=(
        "Ranks skill-exchange partners by a weighted, explainable "
        "compatibility score."
    ),
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],      # tighten in production
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(match.router)


@app.exception_handler(InvalidInput)
async def invalid_input_handler(request: Request, exc: InvalidInput) -> JSONResponse:
    logger.warning(f"Invalid input on {request.url.path}: {exc}")
    return JSONResponse(status_code=422, content={"detail": str(exc)})


# ─────────────────────────────────────────────────────────────────────────────
#  Health check
# ─────────────────────────────────────────────────────────────────────────────

@app.get("/health", response_model=HealthResponse, tags=["Meta"])
def health_check() -> HealthResponse:
    """
    Liveness & readiness probe.
    Returns the number of loaded profiles and whether scoring is available.
    """
    try:
        store = get_profile_store()
        return HealthResponse(
            status="ok",
            profiles_loaded=len(store),
            engine_ready=True,
            max_score=DEFAULT_SCORING.max_total_score,
        )
    except Exception as exc:
        logger.error(f"Health check degraded: {exc}")
        return HealthResponse(
            status=f"degraded: {exc}",
            profiles_loaded=0,
            engine_ready=False,
            max_score=DEFAULT_SCORING.max_total_score,
        )
