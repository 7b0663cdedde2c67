import json

import pytest

from app.core.config import settings
from app.services import data_store
from tests.sample_data import COMPETITIONS, SCORES, TEAMS


@pytest.fixture
def make_store(tmp_path, monkeypatch):
    """Point the store at temporary JSON files and return a writer for them."""
    monkeypatch.setattr(settings, "COMPETITIONS_PATH", tmp_path / "competitions.json")
    monkeypatch.setattr(settings, "TEAMS_PATH", tmp_path / "teams.json")
    monkeypatch.setattr(settings, "SCORES_PATH", tmp_path / "scores.json")
    monkeypatch.setattr(data_store, "_SNAPSHOT", None)

    def write(competitions=None, teams=None, scores=None):
        for path, records in (
            (settings.COMPETITIONS_PATH, competitions),
            (settings.TEAMS_PATH, teams),
            (settings.SCORES_PATH, scores),
        ):
            if records is not None:
                path.write_text(json.dumps(records), encoding="utf-8")
        return data_store.get_snapshot(force_reload=True)

    return write


@pytest.fixture
def sample_store(make_store):
    return make_store(COMPETITIONS, TEAMS, SCORES)
