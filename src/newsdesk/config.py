from pydantic_settings import BaseSettings, SettingsConfigDict


PLACEHOLDER_API_KEY = "your_api_key_here"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    news_api_key: str | None = None
    news_api_base_url: str = "https://newsapi.org/v2"

    news_cache_ttl_seconds: float = 600.0
    news_request_timeout: float = 10.0
    news_sample_data_path: str | None = None

    default_country: str = "us"
    default_category: str = "general"
    page_size: int = 20
    load_more_page_size: int = 10

    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    @property
    def has_api_key(self) -> bool:
        return bool(self.news_api_key) and self.news_api_key != PLACEHOLDER_API_KEY


settings = Settings()
