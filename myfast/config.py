from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    sqlite_path: str = "data/myfast.db"
    log_path: str = "logs/myfast.log"
    log_level: str = "INFO"
    history_page_size: int = 50
    trend_days: int = 30


settings = Settings()
