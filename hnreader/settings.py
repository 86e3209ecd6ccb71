import os

from dotenv import load_dotenv
from pydantic import BaseModel, Field

load_dotenv()


class Settings(BaseModel):
    # Hacker News API
    base_url: str = Field(
        default="https://hacker-news.firebaseio.com/v0", alias="HN_BASE_URL"
    )

    # Request behaviour
    request_timeout: float = Field(default=10.0, gt=0, alias="HN_REQUEST_TIMEOUT")
    max_retries: int = Field(default=3, ge=1, alias="HN_MAX_RETRIES")
    retry_base_delay: float = Field(default=1.0, ge=0, alias="HN_RETRY_BASE_DELAY")
    retry_max_delay: float = Field(default=5.0, ge=0, alias="HN_RETRY_MAX_DELAY")

    # Cache
    cache_ttl_seconds: int = Field(default=300, gt=0, alias="HN_CACHE_TTL")

    # Logging
    log_level: str = Field(default="INFO", alias="HN_LOG_LEVEL")


def load_settings() -> Settings:
    """Build settings from the current process environment."""
    return Settings.model_validate(dict(os.environ))
