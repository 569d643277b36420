"""Application settings and configuration management using Pydantic Settings"""

import logging
from typing import List
from pydantic_settings import BaseSettings

logger = logging.getLogger(__name__)


class Settings(BaseSettings):
    """Application configuration loaded from environment variables"""

    # Security Settings
    ALLOWED_ORIGINS: str = "http://localhost:3000"  # Comma-separated list

    @property
    def allowed_origins_list(self) -> List[str]:
        """Parse ALLOWED_ORIGINS string into list"""
        return [origin.strip() for origin in self.ALLOWED_ORIGINS.split(",") if origin.strip()]

    # Recommendation Configuration
    DEFAULT_TOP_N: int = 3

    # Rate Limits (slowapi format)
    RATE_LIMIT_ENABLED: bool = True
    RECOMMEND_RATE_LIMIT: str = "60/minute"
    FEEDBACK_RATE_LIMIT: str = "30/minute"

    # Logging Configuration
    LOG_LEVEL: str = "INFO"

    # Environment Settings
    ENVIRONMENT: str = "development"
    DEBUG: bool = False

    # Application Info
    APP_TITLE: str = "Glow Engine API"
    APP_DESCRIPTION: str = "Adaptive photo-enhancement recommendation and personalization engine"
    APP_VERSION: str = "1.4.0"

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


# Singleton instance
settings = Settings()
