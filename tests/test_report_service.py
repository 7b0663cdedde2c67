import pytest

from app.services.report_service import (
    CompetitionNotFoundError,
    build_dashboard_stats,
    build_judge_report,
)


def test_dashboard_stats_counts(sample_store):
    stats = build_dashboard_stats(sample_store)

    assert stats.total_teams == 4
    assert stats.total_participants == 11
    assert stats.teams_by_type.putra == 3
    assert stats.teams_by_type.putri == 1
    assert stats.total_competitions == 4
    assert [(s.judge_id, s.count) for s in stats.scores_by_judge] == [("j1", 8), ("j2", 3)]


def test_dashboard_stats_on_empty_store(make_store):
    stats = build_dashboard_stats(make_store())

    assert stats.total_teams == 0
    assert stats.total_participants == 0
    assert stats.scores_by_judge == []
    assert stats.model_dump(by_alias=True)["teamsByType"] == {"putra": 0, "putri": 0}


def test_judge_report_for_team_competition(sample_store):
    report = build_judge_report(sample_store, "c-tk")

    assert report.competition_name == "Tapak Kemah"
    assert report.judges == ["j1", "j2"]
    assert [e.team_id for e in report.putra] == ["t1", "t2", "t3"]
    first = report.putra[0]
    assert first.scores == {"j1": 90.0, "j2": 88.0}
    assert first.average_score == 89.0
    assert report.putra[1].scores == {"j1": 80.0, "j2": None}
    assert [(e.team_id, e.average_score) for e in report.putri] == [("t4", 85.0)]


def test_judge_report_for_individual_competition(sample_store):
    report = build_judge_report(sample_store, "c-pid")

    assert report.is_individual is True
    assert report.judges == ["j2"]
    cells = {e.team_id: (e.scores["j2"], e.average_score) for e in report.putra}
    assert cells == {"t1": (88.0, 88.0), "t2": (None, 0.0), "t3": (95.0, 95.0)}


def test_judge_report_without_scores(make_store):
    snapshot = make_store(
        competitions=[{"id": "c", "name": "Semaphore"}],
        teams=[{"id": "t", "school": "S", "teamName": "T", "type": "Putri"}],
    )

    report = build_judge_report(snapshot, "c")

    assert report.judges == []
    assert report.putra == []
    assert report.putri[0].scores == {}
    assert report.putri[0].average_score == 0.0


def test_judge_report_unknown_competition(sample_store):
    with pytest.raises(CompetitionNotFoundError):
        build_judge_report(sample_store, "missing")
