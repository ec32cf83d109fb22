from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Loads all environment variables into a single, accessible object."""
    model_config = SettingsConfigDict(env_file='.env', env_file_encoding='utf-8', extra='ignore')

    GEMINI_API_KEY: str = ""
    GEMINI_BASE_URL: str = "https://generativelanguage.googleapis.com"
    GEMINI_MODEL: str = "gemini-2.5-flash"
    GEMINI_VISION_MODEL: str = "gemini-2.0-flash"
    GEMINI_TIMEOUT: float = 60.0

    PROMPT_VARIANT: str = "compact"
    PRE_EXTRACT_CLAIMS: bool = False
    REJECT_REDIRECTOR_SOURCES: bool = True
    MAX_GROUNDING_SOURCES: int = 5

    APP_JWT_SECRET: str = ""
    FREE_DAILY_LIMIT: int = 5
    UPGRADE_URL: str = "https://fact-checker-website.vercel.app/upgrade"

    CORS_ALLOW: str = "*"

    def model_endpoint(self, model: str) -> str:
        return f"{self.GEMINI_BASE_URL}/v1beta/models/{model}:generateContent"

    @property
    def GEMINI_ENDPOINT(self) -> str:
        return self.model_endpoint(self.GEMINI_MODEL)

    @property
    def GEMINI_VISION_ENDPOINT(self) -> str:
        return self.model_endpoint(self.GEMINI_VISION_MODEL)

    @property
    def cors_origins(self) -> List[str]:
        return [origin.strip() for origin in self.CORS_ALLOW.split(",") if origin.strip()]


@lru_cache
def get_settings() -> Settings:
    """Build the process-wide settings once."""
    return Settings()
