from dataclasses import dataclass
from pathlib import Path
import os

from dotenv import load_dotenv

# Load environment variables from the repo root .env (if present).
REPO_ROOT = Path(__file__).resolve().parents[1]
load_dotenv(REPO_ROOT / ".env")

ALLOWED_ORIGIN = os.getenv("ALLOWED_ORIGIN", "http://localhost:3000").strip()
TASK_STORE_BACKEND = os.getenv("TASK_STORE_BACKEND", "memory").strip().lower()
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite:///./tasks.db")
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8000"))
RELOAD = os.getenv("RELOAD", "false").strip().lower() in ("1", "true", "yes")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").strip().upper()


@dataclass(frozen=True)
class Settings:
    """Runtime settings for one application instance."""
    allowed_origin: str = ALLOWED_ORIGIN
    task_store_backend: str = TASK_STORE_BACKEND
    database_url: str = DATABASE_URL
    log_level: str = LOG_LEVEL


def load_settings() -> Settings:
    return Settings()
