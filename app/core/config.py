from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    gemini_api_key: Optional[str] = Field(default=None, alias="GEMINI_API_KEY")
    gemini_model: str = Field(default="gemini-2.5-flash-preview-05-20", alias="GEMINI_MODEL")
    gemini_base_url: str = Field(
        default="https://generativelanguage.googleapis.com/v1beta",
        alias="GEMINI_BASE_URL",
    )

    gemini_max_attempts: int = Field(default=3, alias="GEMINI_MAX_ATTEMPTS")
    gemini_initial_backoff_ms: int = Field(default=1000, alias="GEMINI_INITIAL_BACKOFF_MS")

    allowed_origins: str = Field(default="*", alias="ALLOWED_ORIGINS")

    http_timeout: float = Field(default=30.0, alias="HTTP_TIMEOUT")

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

settings = Settings()
