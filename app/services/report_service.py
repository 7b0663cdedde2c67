from __future__ import annotations

from typing import Dict, List, Optional, Tuple

import polars as pl

from app.schemas.leaderboard import (
    Competition,
    DashboardStats,
    JudgeReport,
    JudgeReportTeamEntry,
    JudgeScoreCount,
    Score,
    Team,
    TeamsByType,
)
from app.services.data_store import DataSnapshot
from app.services.ranking_engine import round_score


class CompetitionNotFoundError(LookupError):
    pass


def _scores_frame(scores: List[Score]) -> pl.DataFrame:
    return pl.DataFrame(
        {
            "teamId": pl.Series([s.team_id for s in scores], dtype=pl.Utf8),
            "judgeId": pl.Series([s.judge_id for s in scores], dtype=pl.Utf8),
            "totalScore": pl.Series([s.total_score for s in scores], dtype=pl.Float64),
        }
    )


def build_dashboard_stats(snapshot: DataSnapshot) -> DashboardStats:
    """Counts shown on the admin dashboard."""
    teams_df = pl.DataFrame(
        {
            "type": pl.Series([t.type for t in snapshot.teams], dtype=pl.Utf8),
            "members": pl.Series([len(t.members) for t in snapshot.teams], dtype=pl.Int64),
        }
    )

    by_judge = (
        _scores_frame(snapshot.scores)
        .group_by("judgeId")
        .agg(pl.len().alias("count"))
        .sort("judgeId")
    )

    return DashboardStats(
        total_teams=teams_df.height,
        total_participants=int(teams_df.get_column("members").sum() or 0),
        teams_by_type=TeamsByType(
            putra=teams_df.filter(pl.col("type") == "Putra").height,
            putri=teams_df.filter(pl.col("type") == "Putri").height,
        ),
        total_competitions=len(snapshot.competitions),
        scores_by_judge=[
            JudgeScoreCount(judge_id=row["judgeId"], count=row["count"])
            for row in by_judge.iter_rows(named=True)
        ],
    )


def _find_competition(snapshot: DataSnapshot, competition_id: str) -> Competition:
    for competition in snapshot.competitions:
        if competition.id == competition_id:
            return competition
    raise CompetitionNotFoundError(f"Competition not found: {competition_id}")


def build_judge_report(snapshot: DataSnapshot, competition_id: str) -> JudgeReport:
    """
    Per-judge score sheet for one competition, split by category.

    Each cell holds the judge's score for the team, or the judge's best
    member score for individual competitions. `averageScore` is the mean of
    every row the team received, 0 when it has none.
    """
    competition = _find_competition(snapshot, competition_id)
    rows = [s for s in snapshot.scores if s.competition_id == competition_id]
    judges = sorted({s.judge_id for s in rows})

    df = _scores_frame(rows)
    per_judge = df.group_by(["teamId", "judgeId"]).agg(pl.col("totalScore").max())
    averages = df.group_by("teamId").agg(pl.col("totalScore").mean().alias("average"))

    cells: Dict[Tuple[str, str], float] = {
        (row["teamId"], row["judgeId"]): row["totalScore"]
        for row in per_judge.iter_rows(named=True)
    }
    average_by_team: Dict[str, float] = {
        row["teamId"]: row["average"] for row in averages.iter_rows(named=True)
    }

    def entries(teams: List[Team]) -> List[JudgeReportTeamEntry]:
        result = []
        for team in sorted(teams, key=lambda t: (t.school, t.team_name)):
            scores: Dict[str, Optional[float]] = {
                judge_id: cells.get((team.id, judge_id)) for judge_id in judges
            }
            result.append(
                JudgeReportTeamEntry(
                    team_id=team.id,
                    team_name=team.team_name,
                    school=team.school,
                    scores=scores,
                    average_score=round_score(average_by_team.get(team.id, 0.0)),
                )
            )
        return result

    return JudgeReport(
        competition_id=competition.id,
        competition_name=competition.name,
        is_individual=competition.is_individual,
        judges=judges,
        putra=entries([t for t in snapshot.teams if t.type == "Putra"]),
        putri=entries([t for t in snapshot.teams if t.type == "Putri"]),
    )
