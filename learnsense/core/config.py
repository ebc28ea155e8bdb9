"""
Configuration management using Pydantic settings.
"""
from typing import List, Union
import os
from pydantic import AnyHttpUrl, validator
from pydantic_settings import BaseSettings
from dotenv import load_dotenv
load_dotenv()



class Settings(BaseSettings):
    """Application settings."""

    # API Configuration
    API_V1_PREFIX: str = "/api/v1"
    PROJECT_NAME: str = "LearnSense Adaptive Learning"
    DEBUG: bool = True
    ENV: str = os.getenv("ENV", "development")

    # Database Configuration
    DATABASE_URL: str = os.getenv("DATABASE_URL", "sqlite:///./learnsense.db")

    # JWT Configuration (tokens are issued by the auth service)
    SECRET_KEY: str = os.getenv("SECRET_KEY", "change-me")
    ALGORITHM: str = os.getenv("ALGORITHM", "HS256")

    # Recommendation engine
    ACTIVITY_HISTORY_LIMIT: int = int(os.getenv("ACTIVITY_HISTORY_LIMIT", 100))
    QUIZ_HISTORY_LIMIT: int = int(os.getenv("QUIZ_HISTORY_LIMIT", 100))
    PREDICTION_HISTORY_LIMIT: int = int(os.getenv("PREDICTION_HISTORY_LIMIT", 30))
    LEARNING_PATH_WINDOW: int = int(os.getenv("LEARNING_PATH_WINDOW", 10))
    ENGAGEMENT_WINDOW_DAYS: int = int(os.getenv("ENGAGEMENT_WINDOW_DAYS", 7))
    STORE_TIMEOUT_SECONDS: float = float(os.getenv("STORE_TIMEOUT_SECONDS", 10))
    RECOMMENDATION_CACHE_TTL_SECONDS: int = int(os.getenv("RECOMMENDATION_CACHE_TTL_SECONDS", 300))

    # CORS Configuration
    BACKEND_CORS_ORIGINS: Union[List[AnyHttpUrl], str] = "*"

    @validator("BACKEND_CORS_ORIGINS", pre=True)
    def assemble_cors_origins(cls, v):
        if v == "*" or v == ["*"]:
            return "*"
        if isinstance(v, str):
            return [i.strip() for i in v.split(",")]
        return v

    class Config:
        """Pydantic config."""

        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
