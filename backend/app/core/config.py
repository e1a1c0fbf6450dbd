from functools import lru_cache

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    app_name: str = "Rental Bookings API"
    environment: str = "local"
    database_url: str = "sqlite:///./bookings.db"
    secret_key: str = "dev-secret-key-change-me-in-production"
    access_token_lifetime_minutes: int = 60
    log_level: str = "INFO"
    sql_echo: bool = False

    model_config = SettingsConfigDict(case_sensitive=False)


@lru_cache()
def get_settings() -> Settings:
    load_dotenv(".env")
    return Settings()


settings = get_settings()
