from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    app_name: str = "Interview Assistant"
    port: int = 8000
    debug: bool = False
    log_level: str = "INFO"
    database_name: str = "interview_assistant"
    cors_origins: list[str] = ["*"]

    max_upload_bytes: int = 10 * 1024 * 1024

    atlas_connection_string: str = "mongodb://localhost:27017"
    anthropic_api_key: str | None = None
    anthropic_model: str = "claude-sonnet-4-5-20250929"
    ai_timeout_seconds: float = 30.0


settings = Settings()
