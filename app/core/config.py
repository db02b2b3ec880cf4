from pathlib import Path

from pydantic import model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def _resolve_path(value: str, fallback: str) -> str:
    raw = (value or "").strip() or fallback
    path = Path(raw)
    if not path.is_absolute():
        path = (PROJECT_ROOT / path).resolve()
    return str(path)


class AppSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=PROJECT_ROOT / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Core
    APP_NAME: str = "Branch Registry API"
    DATABASE_URL: str = "sqlite:///branch_registry.db"
    DB_POOL_SIZE: int = 10
    DB_MAX_OVERFLOW: int = 20
    DB_POOL_TIMEOUT: int = 30
    DB_POOL_RECYCLE: int = 1800

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILE_PATH: str = ""
    LOG_MAX_BYTES: int = 10 * 1024 * 1024
    LOG_BACKUP_COUNT: int = 5
    REQUEST_LOGGING_ENABLED: bool = True

    # Document store
    DOCUMENT_STORE_BACKEND: str = "sql"
    BRANCHES_COLLECTION: str = "branches"
    EMPLOYEES_COLLECTION: str = "employees"

    # Behaviour switches
    BRANCH_DELETE_CASCADE: bool = False
    EMPTY_RELATION_AS_NOT_FOUND: bool = True

    @model_validator(mode="after")
    def normalize_and_validate(self) -> "AppSettings":
        self.LOG_LEVEL = (self.LOG_LEVEL or "INFO").upper()
        self.LOG_DIR = _resolve_path(self.LOG_DIR, "logs")
        self.LOG_FILE_PATH = _resolve_path(self.LOG_FILE_PATH, str(Path(self.LOG_DIR) / "app.log"))
        self.DOCUMENT_STORE_BACKEND = (self.DOCUMENT_STORE_BACKEND or "sql").strip().lower()
        self.BRANCHES_COLLECTION = self.BRANCHES_COLLECTION.strip()
        self.EMPLOYEES_COLLECTION = self.EMPLOYEES_COLLECTION.strip()

        if not self.DATABASE_URL:
            raise RuntimeError("DATABASE_URL is not set.")
        if self.DOCUMENT_STORE_BACKEND not in {"sql", "memory"}:
            raise RuntimeError("DOCUMENT_STORE_BACKEND must be 'sql' or 'memory'.")
        if not self.BRANCHES_COLLECTION or not self.EMPLOYEES_COLLECTION:
            raise RuntimeError("Collection names must not be empty.")
        if self.BRANCHES_COLLECTION == self.EMPLOYEES_COLLECTION:
            raise RuntimeError("BRANCHES_COLLECTION and EMPLOYEES_COLLECTION must differ.")
        return self


settings = AppSettings()
