"""
Engine configuration.
Values loaded from environment variables, with defaults suitable for embedding.
"""
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Engine settings loaded from environment."""

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FORMAT: str = "json"  # json or console

    # Chart generation
    # Number of most recent sessions kept per chart series
    CHART_HISTORY_LIMIT: int = 10
    # Number of most recent sessions averaged for technique charts
    TECHNIQUE_HISTORY_LIMIT: int = 5

    # Defaults applied when raw swim records omit fields
    DEFAULT_VENUE: str = "Academy Pool"
    DEFAULT_IMPROVEMENT_PERIOD: str = "this season"

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
