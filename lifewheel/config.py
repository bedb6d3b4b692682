from __future__ import annotations

import os
from pathlib import Path
from typing import List, Optional


class Settings:
    """Centralized configuration for the life-balance tracker backend."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        self.data_root: Path = Path(
            os.environ.get("LIFEWHEEL_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("LIFEWHEEL_DB_PATH") or (self.data_root / "lifewheel.db")
        ).expanduser()

        # "sqlite" keeps everything local; "rest" talks to a PostgREST-style managed backend.
        self.storage_backend: str = (os.environ.get("LIFEWHEEL_STORAGE") or "sqlite").strip().lower()
        self.rest_url: Optional[str] = os.environ.get("LIFEWHEEL_REST_URL") or None
        self.rest_api_key: Optional[str] = os.environ.get("LIFEWHEEL_REST_KEY") or None
        self.rest_table: str = os.environ.get("LIFEWHEEL_REST_TABLE") or "wheel_entries"
        self.rest_timeout: float = float(os.environ.get("LIFEWHEEL_REST_TIMEOUT") or "10")

        self.default_score: int = int(os.environ.get("LIFEWHEEL_DEFAULT_SCORE") or "5")
        self.log_level: str = (os.environ.get("LIFEWHEEL_LOG_LEVEL") or "INFO").upper()

        cors = os.environ.get("LIFEWHEEL_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
