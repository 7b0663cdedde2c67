"""
Medal-based leaderboard ranking.

Turns raw per-judge score rows into an ordered, rank-annotated leaderboard
for one category (Putra or Putri):

- team competitions average every judge's row per team and award
  gold/silver/bronze to the top three strictly positive averages;
- the flagship competition ("Tapak Kemah") awards 3/2/1 gold instead;
- individual competitions award medals to the teams fielding the top three
  entrants and show a marker instead of a numeric score;
- teams are ordered by (gold, silver, bronze, flagship score, total score)
  and numbered with skip ranking (1, 1, 3, ...).

Every call recomputes from scratch and never mutates its inputs.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Optional, Sequence, Tuple, Union

from app.core.config import settings
from app.schemas.leaderboard import (
    CATEGORIES,
    Competition,
    LeaderboardEntry,
    Medals,
    Score,
    Team,
)


logger = logging.getLogger(__name__)

# (medal, count) awarded to places 1, 2 and 3.
STANDARD_PODIUM: Tuple[Tuple[str, int], ...] = (("gold", 1), ("silver", 1), ("bronze", 1))
FLAGSHIP_PODIUM: Tuple[Tuple[str, int], ...] = (("gold", 3), ("gold", 2), ("gold", 1))

RankKey = Tuple[int, int, int, float, float]


class InvalidCategoryError(ValueError):
    """Raised when a leaderboard category is not one of `CATEGORIES`."""


def parse_category(value: Optional[str]) -> str:
    if value not in CATEGORIES:
        raise InvalidCategoryError(
            f'Type query parameter must be either "{CATEGORIES[0]}" or "{CATEGORIES[1]}"'
        )
    return value


def round_score(value: float) -> float:
    """Round to 2 decimals, halves away from zero on the exact binary value."""
    if not math.isfinite(value):
        return value
    return float(Decimal(value).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def normalize_competition_name(name: str) -> str:
    return name.lower()


def find_flagship_id(
    competitions: Sequence[Competition], flagship_name: str
) -> Optional[str]:
    """Id of the first competition whose name matches the flagship name."""
    wanted = normalize_competition_name(flagship_name)
    for competition in competitions:
        if normalize_competition_name(competition.name) == wanted:
            return competition.id
    return None


@dataclass
class _TeamTally:
    team: Team
    gold: int = 0
    silver: int = 0
    bronze: int = 0
    flagship_score: float = 0.0
    scores_by_competition: Dict[str, Union[float, str]] = field(default_factory=dict)

    def award(self, medal: str, count: int) -> None:
        setattr(self, medal, getattr(self, medal) + count)

    def total_score(self) -> float:
        numeric = [
            v for v in self.scores_by_competition.values() if not isinstance(v, str)
        ]
        return round_score(sum(numeric))


def _score_individual_competition(
    competition: Competition,
    rows: List[Score],
    tallies: Dict[str, _TeamTally],
    marker: str,
) -> None:
    entrants = [s for s in rows if s.team_id and s.total_score > 0]
    # Stable: equal scores keep their input order.
    entrants.sort(key=lambda s: s.total_score, reverse=True)

    for tally in tallies.values():
        tally.scores_by_competition[competition.id] = marker

    for (medal, count), entrant in zip(STANDARD_PODIUM, entrants):
        tallies[entrant.team_id].award(medal, count)


def _score_team_competition(
    competition: Competition,
    rows: List[Score],
    tallies: Dict[str, _TeamTally],
    is_flagship: bool,
) -> None:
    by_team: Dict[str, List[float]] = {}
    for row in rows:
        by_team.setdefault(row.team_id, []).append(row.total_score)

    standings: List[Tuple[float, _TeamTally]] = []
    for team_id, tally in tallies.items():
        team_scores = by_team.get(team_id, [])
        average = sum(team_scores) / len(team_scores) if team_scores else 0.0
        tally.scores_by_competition[competition.id] = round_score(average)
        if is_flagship:
            tally.flagship_score = average
        standings.append((average, tally))

    standings.sort(key=lambda item: item[0], reverse=True)

    podium = FLAGSHIP_PODIUM if is_flagship else STANDARD_PODIUM
    for (medal, count), (average, tally) in zip(podium, standings):
        if average > 0:
            tally.award(medal, count)


def _rank_key(entry: LeaderboardEntry) -> RankKey:
    return (
        entry.medals.gold,
        entry.medals.silver,
        entry.medals.bronze,
        entry.flagship_score,
        entry.total_score,
    )


def assign_skip_ranks(entries: List[LeaderboardEntry]) -> List[LeaderboardEntry]:
    """
    Number an already sorted list: tied entries share a rank and the next
    distinct entry takes its 1-based position (1, 1, 3 rather than 1, 1, 2).
    """
    for index, entry in enumerate(entries):
        if index > 0 and _rank_key(entries[index - 1]) == _rank_key(entry):
            entry.rank = entries[index - 1].rank
        else:
            entry.rank = index + 1
    return entries


def rank_teams(
    competitions: Sequence[Competition],
    teams: Sequence[Team],
    scores: Sequence[Score],
    category: str,
    include_unpublished: bool = False,
    flagship_name: Optional[str] = None,
) -> List[LeaderboardEntry]:
    """
    Build the ranked leaderboard for one category.

    Scores referencing teams outside the category (or unknown teams) are
    ignored. Returns an empty list when no competition or no team is in scope.
    """
    flagship_name = flagship_name or settings.FLAGSHIP_COMPETITION_NAME
    marker = settings.INDIVIDUAL_SCORE_MARKER

    in_scope_competitions = [
        c for c in competitions if include_unpublished or c.is_published
    ]
    in_scope_teams = [t for t in teams if t.type == category]
    if not in_scope_competitions or not in_scope_teams:
        return []

    tallies: Dict[str, _TeamTally] = {}
    for team in in_scope_teams:
        tallies.setdefault(team.id, _TeamTally(team=team))

    rows_by_competition: Dict[str, List[Score]] = {}
    for row in scores:
        if row.team_id in tallies:
            rows_by_competition.setdefault(row.competition_id, []).append(row)

    flagship_id = find_flagship_id(in_scope_competitions, flagship_name)

    for competition in in_scope_competitions:
        rows = rows_by_competition.get(competition.id, [])
        if competition.is_individual:
            _score_individual_competition(competition, rows, tallies, marker)
        else:
            _score_team_competition(
                competition, rows, tallies, competition.id == flagship_id
            )

    entries: List[LeaderboardEntry] = []
    for tally in tallies.values():
        team = tally.team
        if team.manual_medals is not None:
            medals = team.manual_medals.model_copy()
        else:
            medals = Medals(gold=tally.gold, silver=tally.silver, bronze=tally.bronze)
        entries.append(
            LeaderboardEntry(
                rank=0,
                team_id=team.id,
                team_name=team.team_name,
                school=team.school,
                scores_by_competition=dict(tally.scores_by_competition),
                total_score=tally.total_score(),
                medals=medals,
                is_manual=team.manual_medals is not None,
                flagship_score=tally.flagship_score,
            )
        )

    entries.sort(key=_rank_key, reverse=True)
    assign_skip_ranks(entries)

    logger.debug(
        "Ranked %d %s teams across %d competitions (flagship=%s)",
        len(entries),
        category,
        len(in_scope_competitions),
        flagship_id,
    )
    return entries
