from __future__ import annotations

from pathlib import Path

from pydantic import AnyUrl, Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

PROJECT_ROOT = Path(__file__).resolve().parents[2]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    GEMINI_API_KEY: SecretStr
    APP_PASSWORD: SecretStr
    SESSION_SECRET: SecretStr | None = None
    SUPABASE_URL: AnyUrl | None = None
    SUPABASE_SERVICE_ROLE_KEY: SecretStr | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    INSTRUCTIONS_PATH: Path = Path("data/Prompt/recipe_extraction_instructions.md")
    PUBLIC_DIR: Path = Path("public")
    SESSION_MAX_AGE_SECONDS: int = Field(default=24 * 60 * 60, gt=0)
    SESSION_COOKIE_SECURE: bool = False
    FETCH_TIMEOUT_SECONDS: float = Field(default=15.0, gt=0)
    APP_ENV: str = "local"
    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:3000", "http://localhost:5173"],
    )

    @property
    def store_configured(self) -> bool:
        return self.SUPABASE_URL is not None and self.SUPABASE_SERVICE_ROLE_KEY is not None

    @property
    def session_secret(self) -> str:
        # Falls back to the provider key when no dedicated secret is set.
        secret = self.SESSION_SECRET or self.GEMINI_API_KEY
        return secret.get_secret_value()

    def resolve_path(self, path: Path) -> Path:
        return path if path.is_absolute() else PROJECT_ROOT / path


settings = Settings()
