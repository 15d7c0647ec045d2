"""Environment-driven settings shared by the web app and CLI."""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from models.loader import default_database_url

PROJECT_DIR = Path(__file__).parent
DEFAULT_HOME = PROJECT_DIR / "portal"


@dataclass
class Settings:
    home: Path
    backend: str
    database_url: str
    config_file: Path
    due_soon_days: int
    secret_key: str


def load_settings(environ: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Read settings from the environment.

    MAINT_HOME, MAINT_BACKEND, MAINT_DATABASE_URL, MAINT_CONFIG,
    MAINT_DUE_SOON_DAYS and SECRET_KEY; unset values fall back to defaults
    rooted at MAINT_HOME.
    """
    env = os.environ if environ is None else environ
    home = Path(env.get("MAINT_HOME") or DEFAULT_HOME)

    due_soon = env.get("MAINT_DUE_SOON_DAYS") or "30"
    try:
        due_soon_days = int(due_soon)
    except ValueError:
        raise ValueError(f"MAINT_DUE_SOON_DAYS must be an integer, got {due_soon!r}")

    return Settings(
        home=home,
        backend=env.get("MAINT_BACKEND") or "file",
        database_url=env.get("MAINT_DATABASE_URL") or default_database_url(home),
        config_file=Path(env.get("MAINT_CONFIG") or home / "config" / "recommended.yaml"),
        due_soon_days=due_soon_days,
        secret_key=env.get("SECRET_KEY", "dev-secret-key-change-in-prod"),
    )
