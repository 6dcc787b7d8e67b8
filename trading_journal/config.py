"""Application configuration via environment variables."""

from pathlib import Path
from pydantic_settings import BaseSettings

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class Settings(BaseSettings):
    database_url: str = "sqlite://"  # in-memory; use sqlite:///journal.db to keep data
    log_level: str = "INFO"
    cors_origins: list[str] = ["http://localhost:5173"]  # Vite dev server

    # JSON journal exported by the browser app, read by the CLI
    journal_path: Path = PROJECT_ROOT / "journal.json"

    model_config = {"env_prefix": "TJ_", "env_file": ".env"}


settings = Settings()
