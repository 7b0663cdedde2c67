from dotenv import load_dotenv
load_dotenv()
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List


def _split_csv(value: str) -> List[str]:
    return [item.strip() for item in value.split(",") if item.strip()]


def _data_dir() -> Path:
    return Path(os.getenv("DATA_DIR", "data"))


def _store_path(env_name: str, filename: str) -> Path:
    """Explicit path from `env_name`, else `filename` under DATA_DIR."""
    return Path(os.getenv(env_name, str(_data_dir() / filename)))


@dataclass
class Settings:
    """
    Runtime configuration for the leaderboard service.

    Values are read from environment variables (or a `.env` file) when the
    instance is created.
    """

    # JSON file store; each file defaults to DATA_DIR/<name>.json
    DATA_DIR: Path = field(default_factory=_data_dir)
    COMPETITIONS_PATH: Path = field(
        default_factory=lambda: _store_path("COMPETITIONS_PATH", "competitions.json")
    )
    TEAMS_PATH: Path = field(default_factory=lambda: _store_path("TEAMS_PATH", "teams.json"))
    SCORES_PATH: Path = field(default_factory=lambda: _store_path("SCORES_PATH", "scores.json"))

    # Ranking rules
    FLAGSHIP_COMPETITION_NAME: str = field(
        default_factory=lambda: os.getenv("FLAGSHIP_COMPETITION_NAME", "tapak kemah")
    )
    INDIVIDUAL_SCORE_MARKER: str = field(
        default_factory=lambda: os.getenv("INDIVIDUAL_SCORE_MARKER", "Individu")
    )

    # HTTP
    CORS_ORIGINS: List[str] = field(
        default_factory=lambda: _split_csv(
            os.getenv("CORS_ORIGINS", "http://localhost:5173")
        )
    )


settings = Settings()
