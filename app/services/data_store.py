"""
JSON file store for competitions, teams and judge scores.

Responsibilities:
- Load the three collections from the configured JSON files.
- Normalize score rows and collapse duplicates on the upsert key
  (team, competition, judge, member) so each key appears once.
- Keep an in-memory snapshot for request handlers and apply score upserts.
"""

from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, List, Optional, Tuple, Type, TypeVar

import polars as pl
from pydantic import BaseModel, ValidationError

from app.core.config import settings
from app.schemas.leaderboard import Competition, Score, Team


logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

SCORE_KEY_COLUMNS = ["teamId", "competitionId", "judgeId", "memberName"]

_SNAPSHOT: Optional["DataSnapshot"] = None
_WRITE_LOCK = threading.Lock()


class DataStoreError(RuntimeError):
    """Raised for unreadable store files or writes referencing unknown records."""


@dataclass(frozen=True)
class DataSnapshot:
    competitions: List[Competition]
    teams: List[Team]
    scores: List[Score]


def score_key(score: Score) -> Tuple[str, str, str, Optional[str]]:
    return (score.team_id, score.competition_id, score.judge_id, score.member_name)


def _read_records(path: Path) -> List[Any]:
    """Read a JSON array from `path`; a missing file is an empty collection."""
    if not path.exists():
        logger.info("Store file %s not found, treating as empty", path)
        return []
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise DataStoreError(f"{path} is not valid JSON: {exc}") from exc
    if not isinstance(data, list):
        raise DataStoreError(f"{path} must contain a JSON array")
    return data


def _parse_records(model: Type[ModelT], records: List[Any], path: Path) -> List[ModelT]:
    try:
        return [model.model_validate(record) for record in records]
    except ValidationError as exc:
        raise DataStoreError(f"{path} has an invalid {model.__name__} record: {exc}") from exc


def _deduplicate_scores(scores: List[Score]) -> List[Score]:
    """
    Keep the last row for every upsert key, placed where the key first
    appears. This matches `upsert_score`, which replaces a row in place.

    Blank member names were already folded into `None` by the schema, so a
    team-level row and an empty-member row share a key.
    """
    if not scores:
        return []

    df = pl.DataFrame(
        {
            "teamId": pl.Series([s.team_id for s in scores], dtype=pl.Utf8),
            "competitionId": pl.Series([s.competition_id for s in scores], dtype=pl.Utf8),
            "judgeId": pl.Series([s.judge_id for s in scores], dtype=pl.Utf8),
            "memberName": pl.Series([s.member_name for s in scores], dtype=pl.Utf8),
            "row": pl.Series(list(range(len(scores))), dtype=pl.Int64),
        }
    )
    kept = (
        df.group_by(SCORE_KEY_COLUMNS, maintain_order=True)
        .agg(
            pl.col("row").first().alias("position"),
            pl.col("row").last().alias("source"),
        )
        .sort("position")
        .get_column("source")
        .to_list()
    )

    removed = len(scores) - len(kept)
    if removed:
        logger.warning("Dropped %d duplicate score rows", removed)
    return [scores[i] for i in kept]


def load_snapshot() -> DataSnapshot:
    """Read all three collections from disk."""
    competitions = _parse_records(
        Competition, _read_records(settings.COMPETITIONS_PATH), settings.COMPETITIONS_PATH
    )
    teams = _parse_records(Team, _read_records(settings.TEAMS_PATH), settings.TEAMS_PATH)
    scores = _parse_records(Score, _read_records(settings.SCORES_PATH), settings.SCORES_PATH)

    snapshot = DataSnapshot(
        competitions=competitions,
        teams=teams,
        scores=_deduplicate_scores(scores),
    )
    logger.info(
        "Loaded store: %d competitions, %d teams, %d scores",
        len(snapshot.competitions),
        len(snapshot.teams),
        len(snapshot.scores),
    )
    return snapshot


def get_snapshot(force_reload: bool = False) -> DataSnapshot:
    """
    Retrieve the in-memory snapshot, loading it from disk as necessary.

    This is the canonical entrypoint request handlers should use.
    """
    global _SNAPSHOT

    if _SNAPSHOT is None or force_reload:
        _SNAPSHOT = load_snapshot()
    return _SNAPSHOT


def find_scores(
    snapshot: DataSnapshot, competition_id: str, judge_id: Optional[str] = None
) -> List[Score]:
    return [
        s
        for s in snapshot.scores
        if s.competition_id == competition_id and (judge_id is None or s.judge_id == judge_id)
    ]


def _write_scores(scores: List[Score]) -> None:
    path: Path = settings.SCORES_PATH
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [s.model_dump(by_alias=True, exclude_none=True) for s in scores]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False), encoding="utf-8")


def upsert_score(score: Score) -> Tuple[Score, bool]:
    """
    Insert `score` or replace the row sharing its upsert key.

    Returns the stored score and whether a new row was created.
    """
    global _SNAPSHOT

    with _WRITE_LOCK:
        snapshot = get_snapshot()

        if not any(t.id == score.team_id for t in snapshot.teams):
            raise DataStoreError(f"Unknown team id: {score.team_id}")
        if not any(c.id == score.competition_id for c in snapshot.competitions):
            raise DataStoreError(f"Unknown competition id: {score.competition_id}")

        key = score_key(score)
        scores = list(snapshot.scores)
        created = True
        for index, existing in enumerate(scores):
            if score_key(existing) == key:
                scores[index] = score
                created = False
                break
        else:
            scores.append(score)

        _write_scores(scores)
        _SNAPSHOT = replace(snapshot, scores=scores)

    logger.info(
        "%s score team=%s competition=%s judge=%s member=%s",
        "Created" if created else "Updated",
        score.team_id,
        score.competition_id,
        score.judge_id,
        score.member_name,
    )
    return score, created
