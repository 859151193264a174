from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Database
    DATABASE_URL: str = "sqlite:///./skilldiscovery.db"

    # Application
    APP_ENV: str = "development"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    CORS_ORIGINS: List[str] = [
        "http://0.0.0.0:8000",
        "http://localhost:8000",
        "http://127.0.0.1:8000",
    ]

    # Search paging
    SEARCH_DEFAULT_PAGE_SIZE: int = 12
    SEARCH_MAX_PAGE_SIZE: int = 100

    # Aggregates
    TRENDING_DEFAULT_LIMIT: int = 10
    TRENDING_MAX_LIMIT: int = 50
    CATEGORY_SAMPLE_SIZE: int = 5
    SKILL_DETAIL_HOLDER_LIMIT: int = 20

    # Autocomplete
    SUGGESTION_MIN_CHARS: int = 2
    SUGGESTION_LIMIT: int = 10
    POPULAR_SEARCH_LIMIT: int = 10

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


settings = Settings()
