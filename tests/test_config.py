from pathlib import Path

import pytest

from app.core.config import Settings

STORE_PATH_VARS = ("COMPETITIONS_PATH", "TEAMS_PATH", "SCORES_PATH")


@pytest.fixture
def clean_env(monkeypatch):
    for name in ("DATA_DIR",) + STORE_PATH_VARS:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


def test_store_paths_default_under_data(clean_env):
    config = Settings()
    assert config.DATA_DIR == Path("data")
    assert config.SCORES_PATH == Path("data") / "scores.json"


def test_store_paths_follow_data_dir(clean_env, tmp_path):
    clean_env.setenv("DATA_DIR", str(tmp_path))

    config = Settings()

    assert config.DATA_DIR == tmp_path
    assert config.COMPETITIONS_PATH == tmp_path / "competitions.json"
    assert config.TEAMS_PATH == tmp_path / "teams.json"
    assert config.SCORES_PATH == tmp_path / "scores.json"


def test_explicit_store_path_wins_over_data_dir(clean_env, tmp_path):
    clean_env.setenv("DATA_DIR", str(tmp_path))
    clean_env.setenv("TEAMS_PATH", str(tmp_path / "elsewhere" / "regu.json"))

    config = Settings()

    assert config.TEAMS_PATH == tmp_path / "elsewhere" / "regu.json"
    assert config.SCORES_PATH == tmp_path / "scores.json"


def test_flagship_and_cors_from_env(clean_env):
    clean_env.setenv("FLAGSHIP_COMPETITION_NAME", "pionering")
    clean_env.setenv("CORS_ORIGINS", "http://a.test, http://b.test,")

    config = Settings()

    assert config.FLAGSHIP_COMPETITION_NAME == "pionering"
    assert config.CORS_ORIGINS == ["http://a.test", "http://b.test"]
