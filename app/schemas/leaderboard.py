from __future__ import annotations

from typing import Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


Category = Literal["Putra", "Putri"]
CATEGORIES: tuple[str, ...] = ("Putra", "Putri")


class CamelModel(BaseModel):
    """Base model serializing to the camelCase names used on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Criterion(CamelModel):
    id: str
    name: str


class Competition(CamelModel):
    id: str
    name: str
    is_individual: bool = False
    is_published: bool = False
    criteria: List[Criterion] = Field(default_factory=list)


class Medals(CamelModel):
    gold: int = 0
    silver: int = 0
    bronze: int = 0


class Team(CamelModel):
    id: str
    school: str
    team_name: str
    type: Category
    coach_name: Optional[str] = None
    coach_phone: Optional[str] = None
    members: List[str] = Field(default_factory=list)
    manual_medals: Optional[Medals] = Field(
        default=None,
        description="Administrator-set medal tally replacing the computed one.",
    )


class Score(CamelModel):
    team_id: str
    competition_id: str
    judge_id: str
    total_score: float
    member_name: Optional[str] = Field(
        default=None,
        description="Set for individual entrants; absent for team-level scores.",
    )
    scores_by_criterion: Dict[str, float] = Field(default_factory=dict)
    notes: Optional[str] = None

    @field_validator("member_name")
    @classmethod
    def blank_member_is_team_score(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        v = v.strip()
        return v or None


class LeaderboardEntry(CamelModel):
    rank: int
    team_id: str
    team_name: str
    school: str
    scores_by_competition: Dict[str, Union[float, str]] = Field(default_factory=dict)
    total_score: float = 0.0
    medals: Medals = Field(default_factory=Medals)
    is_manual: bool = False
    # Tie-break key only; not part of the public payload.
    flagship_score: float = Field(default=0.0, exclude=True)


class TeamsByType(BaseModel):
    putra: int
    putri: int


class JudgeScoreCount(CamelModel):
    judge_id: str
    count: int


class DashboardStats(CamelModel):
    total_teams: int
    total_participants: int
    teams_by_type: TeamsByType
    total_competitions: int
    scores_by_judge: List[JudgeScoreCount]


class JudgeReportTeamEntry(CamelModel):
    team_id: str
    team_name: str
    school: str
    scores: Dict[str, Optional[float]]
    average_score: float


class JudgeReport(CamelModel):
    competition_id: str
    competition_name: str
    is_individual: bool
    judges: List[str]
    putra: List[JudgeReportTeamEntry]
    putri: List[JudgeReportTeamEntry]
