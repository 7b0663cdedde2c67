from __future__ import annotations
from pydantic import BaseModel
from typing import Dict

class DependencyStatus(BaseModel):
    status: str
    details: str | None = None

class ReadinessResponse(BaseModel):
    status: str
    dependencies: Dict[str, DependencyStatus]

def check_store_status() -> DependencyStatus:
    from app.services.data_store import DataStoreError, get_snapshot
    try:
        snapshot = get_snapshot()
    except DataStoreError as e:
        return DependencyStatus(status="error", details=str(e))
    details = (
        f"{len(snapshot.competitions)} competitions, "
        f"{len(snapshot.teams)} teams, {len(snapshot.scores)} scores"
    )
    if not snapshot.competitions or not snapshot.teams:
        return DependencyStatus(status="warning", details=f"Store has no data yet ({details})")
    return DependencyStatus(status="ok", details=details)

def check_ranking_config() -> DependencyStatus:
    from app.core.config import settings
    if settings.FLAGSHIP_COMPETITION_NAME.strip():
        return DependencyStatus(status="ok", details=f"Flagship competition: {settings.FLAGSHIP_COMPETITION_NAME}")
    return DependencyStatus(status="warning", details="No flagship competition configured")

def run_readiness_check() -> ReadinessResponse:
    store_status = check_store_status()
    config_status = check_ranking_config()

    total_status = "ready"
    if store_status.status == "error":
        total_status = "not_ready"

    return ReadinessResponse(
        status=total_status,
        dependencies={
            "store": store_status,
            "ranking_config": config_status,
        }
    )
