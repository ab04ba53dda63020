from pathlib import Path
import os

BASE_DIR = Path(__file__).resolve().parent
INSTANCE_DIR = BASE_DIR / "instance"
INSTANCE_DIR.mkdir(exist_ok=True)  # ensure instance exists
DB_FILE = INSTANCE_DIR / "app.db"
MIGRATIONS_DIR = BASE_DIR / "migrations"


def _get_database_uri() -> str:
    url = os.environ.get("DATABASE_URL")
    if url:
        return url
    return f"sqlite:///{DB_FILE.as_posix()}"


def _env_flag(name: str, default: bool = False) -> bool:
    raw = os.environ.get(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "on"}


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev-change-me")
    SQLALCHEMY_DATABASE_URI = _get_database_uri()
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    MIGRATIONS_DIR = MIGRATIONS_DIR.as_posix()
    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()
    # refuse to adopt a pet whose status is already "adopted"
    ADOPTION_REJECT_ADOPTED = _env_flag("ADOPTION_REJECT_ADOPTED")
