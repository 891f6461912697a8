from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

class Settings(BaseSettings):
    # Vendor API
    OPENAI_API_KEY: str = ""
    OPENAI_BASE_URL: str = "https://api.openai.com/v1"
    OPENAI_LOGS_URL: str = "https://platform.openai.com/logs"
    DEFAULT_MODEL: str = "gpt-5-mini"

    # Timeouts (seconds)
    SUBMIT_TIMEOUT_SECONDS: float = 300.0  # generation may take minutes
    FETCH_TIMEOUT_SECONDS: float = 30.0

    # Polling
    POLL_INTERVAL_SECONDS: float = 2.0
    POLL_DEADLINE_SECONDS: float = 300.0  # <= 0 polls forever

    # Logging
    LOG_LEVEL: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True, extra="ignore")

@lru_cache()
def get_settings() -> Settings:
    return Settings()
