import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv


def load_env() -> None:
    """Load .env from the working directory if present."""
    env_path = Path.cwd() / ".env"
    if env_path.exists():
        load_dotenv(dotenv_path=env_path)


@dataclass
class Settings:
    store_path: Path
    db_path: Optional[Path]
    log_level: str
    log_dir: Path


def get_settings() -> Settings:
    """
    Read settings from the environment.

    JOBMATCH_STORE     JSON store file (default: data/store.json)
    JOBMATCH_DB        SQLite database; when set it replaces the JSON store
    JOBMATCH_LOG_LEVEL Log level (default: INFO)
    JOBMATCH_LOG_DIR   Log directory (default: logs)
    """
    db = os.getenv("JOBMATCH_DB", "").strip()
    return Settings(
        store_path=Path(os.getenv("JOBMATCH_STORE", "data/store.json")),
        db_path=Path(db) if db else None,
        log_level=os.getenv("JOBMATCH_LOG_LEVEL", "INFO").upper(),
        log_dir=Path(os.getenv("JOBMATCH_LOG_DIR", "logs")),
    )
