from __future__ import annotations

from fastapi import FastAPI, HTTPException, Query, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from typing import List, Optional
import time
import uuid

from app.core.config import settings
from app.schemas.leaderboard import (
    DashboardStats,
    JudgeReport,
    LeaderboardEntry,
    Score,
)
from app.services.data_store import DataStoreError, find_scores, get_snapshot, upsert_score
from app.services.ranking_engine import InvalidCategoryError, parse_category, rank_teams
from app.services.report_service import (
    CompetitionNotFoundError,
    build_dashboard_stats,
    build_judge_report,
)
from app.monitoring.health_check import run_readiness_check, ReadinessResponse
from app.monitoring.logger import StructuredLogger


service_logger = StructuredLogger(__name__)


app = FastAPI(title="Scout Competition Leaderboard Service", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next):
    start_time = time.perf_counter()
    request_id = str(uuid.uuid4())
    # Attach request ID to state for logging
    request.state.request_id = request_id

    response: Response = await call_next(request)

    process_time = time.perf_counter() - start_time
    service_logger.log_request(
        method=request.method,
        path=request.url.path,
        status_code=response.status_code,
        duration_ms=process_time * 1000,
        request_id=request_id
    )
    response.headers["X-Process-Time"] = str(process_time)
    response.headers["X-Request-ID"] = request_id
    return response


@app.get("/health", tags=["meta"])
def health() -> dict:
    return {"status": "ok"}


@app.get("/health/live", tags=["meta"])
def health_live() -> dict:
    return {"status": "ok"}


@app.get("/health/ready", response_model=ReadinessResponse, tags=["meta"])
def health_ready() -> ReadinessResponse:
    return run_readiness_check()


@app.get(
    "/api/v1/leaderboard",
    response_model=List[LeaderboardEntry],
    tags=["leaderboard"],
)
def get_leaderboard(
    request: Request,
    category: Optional[str] = Query(default=None, alias="type"),
    include_unpublished: bool = Query(default=False, alias="includeUnpublished"),
) -> List[LeaderboardEntry]:
    """Medal leaderboard for one category, recomputed on every call."""
    request_id = getattr(request.state, "request_id", None)
    try:
        category = parse_category(category)
    except InvalidCategoryError as e:
        raise HTTPException(status_code=400, detail=str(e))

    snapshot = get_snapshot()
    entries = rank_teams(
        snapshot.competitions,
        snapshot.teams,
        snapshot.scores,
        category,
        include_unpublished=include_unpublished,
    )
    service_logger.log_event(
        "leaderboard_computed",
        request_id=request_id,
        category=category,
        include_unpublished=include_unpublished,
        entries=len(entries),
    )
    return entries


@app.get("/api/v1/stats", response_model=DashboardStats, tags=["reports"])
def get_stats() -> DashboardStats:
    return build_dashboard_stats(get_snapshot())


@app.get(
    "/api/v1/reports/judges/{competition_id}",
    response_model=JudgeReport,
    tags=["reports"],
)
def get_judge_report(competition_id: str) -> JudgeReport:
    try:
        return build_judge_report(get_snapshot(), competition_id)
    except CompetitionNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))


@app.get("/api/v1/scores", response_model=List[Score], tags=["scores"])
def list_scores(
    competition_id: Optional[str] = Query(default=None, alias="competitionId"),
    judge_id: Optional[str] = Query(default=None, alias="judgeId"),
) -> List[Score]:
    """Scores entered for one competition, optionally narrowed to one judge."""
    if not competition_id:
        raise HTTPException(status_code=400, detail="competitionId is required")
    return find_scores(get_snapshot(), competition_id, judge_id=judge_id)


@app.post(
    "/api/v1/scores",
    response_model=Score,
    status_code=201,
    tags=["scores"],
)
def submit_score(score: Score, request: Request) -> Score:
    """Store a judge's score, replacing any earlier one for the same entrant."""
    request_id = getattr(request.state, "request_id", None)
    try:
        stored, created = upsert_score(score)
    except DataStoreError as e:
        service_logger.log_error("Score submission rejected", error=e, request_id=request_id)
        raise HTTPException(status_code=400, detail=str(e))

    service_logger.log_event(
        "score_stored",
        request_id=request_id,
        created=created,
        team_id=stored.team_id,
    )
    return stored
