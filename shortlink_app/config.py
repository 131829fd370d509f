from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings loaded from environment variables.

    Loading priority (highest to lowest):
    1. Environment variables
    2. .env file
    3. Default values below
    """

    # Environment
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # Application
    app_name: str = "Link Shortener"
    app_version: str = "1.0.0"

    # Server
    host: str = "127.0.0.1"
    port: int = 8000

    # Database
    database_url: str = "sqlite:///./link_shortener.db"

    # Link shortener specific
    base_url: str = "http://127.0.0.1:8000"
    short_id_length: int = 8
    alias_max_length: int = 20
    max_retries: int = 3  # Retries when a generated short id collides
    recent_clicks_limit: int = 5  # IPs reported by analytics and listing

    # Short id generation strategy
    short_id_strategy: str = "nanoid"  # Options: "nanoid", "base62"

    # Read client IP from X-Forwarded-For (only behind a trusted proxy)
    trust_forwarded_for: bool = False

    # Pydantic v2 configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


# Create settings instance
settings = Settings()
