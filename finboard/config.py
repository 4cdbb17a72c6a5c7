"""Dashboard configuration from environment variables."""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Settings loaded from environment or a local .env file."""

    app_name: str = "Finance Dashboard"
    debug: bool = False
    log_level: str = "INFO"

    # Hosted data store (PostgREST endpoint)
    datastore_url: str = "http://localhost:54321"
    datastore_key: str = ""
    request_timeout: float = 10.0  # seconds

    # Display
    currency_symbol: str = "$"
    default_time_range: str = "all"  # all | 1year | monthly

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        env_prefix = "FINBOARD_"


settings = Settings()
