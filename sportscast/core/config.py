from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import List, Optional

from sportscast.core.errors import ConfigurationError


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")

    # App
    app_name: str = Field(default="Sportscast Weather")
    log_level: str = Field(default="INFO")

    # Server
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3001)
    cors_origins: List[str] = Field(default_factory=lambda: ["*"])

    # OpenAI (server-side only)
    openai_api_key: Optional[str] = None
    openai_model: str = Field(default="gpt-3.5-turbo")
    openai_temperature: float = Field(default=0.0, ge=0.0, le=2.0)
    openai_timeout_seconds: float = Field(default=30.0, gt=0)
    openai_base_url: Optional[str] = None
    # ask the provider for a JSON object instead of free text
    openai_json_mode: bool = Field(default=False)

    def require_api_key(self) -> str:
        key = (self.openai_api_key or "").strip()
        if not key:
            raise ConfigurationError("OPENAI_API_KEY is not defined.")
        return key


def get_settings() -> Settings:
    return Settings()
