# lumina/core/config.py
import logging
from pathlib import Path
from typing import Optional

from pydantic_settings import BaseSettings

DEFAULT_DECK_PATH = str(Path(__file__).resolve().parent.parent / "data" / "tarot_deck.json")


class Settings(BaseSettings):
    # Interpretation service
    GEMINI_API_KEY: Optional[str] = None
    GEMINI_MODEL: str = "gemini-2.0-flash-lite"
    INTERPRETATION_MAX_WORDS: int = 250
    INTERPRETATION_MAX_OUTPUT_TOKENS: int = 800
    INTERPRETATION_TEMPERATURE: float = 0.8

    DECK_PATH: str = DEFAULT_DECK_PATH

    CORS_ORIGINS: str = "http://localhost,http://localhost:5173,http://127.0.0.1:5173"
    ALLOWED_HOSTS: str = "localhost,127.0.0.1"

    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Reading client
    INTERPRET_URL: str = "http://localhost:8000/api/tarot/interpret"
    INTERPRET_TIMEOUT_SECONDS: float = 30.0
    SHUFFLE_DELAY_SECONDS: float = 2.0
    ACCESS_CODE_SUM: int = 18

    class Config:
        env_file = ".env"
        extra = "allow"

    @property
    def cors_origins(self) -> list[str]:
        return [origin.strip() for origin in self.CORS_ORIGINS.split(",") if origin.strip()]

    @property
    def allowed_hosts(self) -> list[str]:
        return [host.strip() for host in self.ALLOWED_HOSTS.split(",") if host.strip()]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"


settings = Settings()


def get_settings() -> Settings:
    """Dependency to provide the application settings."""
    return settings


def configure_logging(debug: bool = settings.DEBUG):
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
