"""Application configuration using Pydantic Settings."""

from functools import lru_cache
from pathlib import Path

from pydantic import Field, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_DATA_DIR = Path.home() / ".todo"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    app_name: str = Field(default="Todo API")
    app_env: str = Field(default="development")
    debug: bool = Field(default=False)

    # Server
    host: str = Field(default="127.0.0.1")
    port: int = Field(default=3000)

    # Storage
    todo_dir: Path = Field(
        default=DEFAULT_DATA_DIR / "todos",
        description="Directory holding one <YYYY-MM-DD>.json file per date",
    )
    legacy_todo_file: Path | None = Field(
        default=DEFAULT_DATA_DIR / "todos.json",
        description="Single-file store migrated into todo_dir on first load",
    )
    git_repo_dir: Path | None = Field(
        default=None,
        description="Git working tree used by the CLI sync commands (defaults to todo_dir's parent)",
    )
    static_dir: Path | None = Field(
        default=None,
        description="Optional directory of pre-built web UI files served at /",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_json: bool = Field(default=False)

    # Rate Limiting
    rate_limit_enabled: bool = Field(
        default=True,
        description="Enable/disable rate limiting (disable for tests)",
    )
    rate_limit_read: str = Field(default="120/minute")
    rate_limit_write: str = Field(default="60/minute")

    # CORS
    cors_origins: str = Field(
        default="http://localhost:3000,http://127.0.0.1:3000",
        description="Comma-separated list of allowed origins",
    )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def git_dir(self) -> Path:
        """Working tree the CLI runs git in."""
        return self.git_repo_dir or self.todo_dir.parent

    @computed_field  # type: ignore[prop-decorator]
    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.app_env == "production"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins_list(self) -> list[str]:
        """Parse CORS origins into a list."""
        return [origin.strip() for origin in self.cors_origins.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
