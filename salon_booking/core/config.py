from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    BUSINESS_NAME: str = "Practice Salon"
    BUSINESS_TIMEZONE: str = "Asia/Tokyo"
    ENV: str = "dev"
    LOG_LEVEL: str = "INFO"

    BUSINESS_OPEN_TIME: str = "09:00"
    BUSINESS_CLOSE_TIME: str = "18:00"
    SLOT_MINUTES: int = 30
    MAX_RANGE_DAYS: int = 90
    NOTES_MAX_LENGTH: int = 500

    DEFAULT_HOURLY_RATE: int = 2000
    ASSISTANT_HOURLY_RATES: dict[str, int] = {}

    STORE_PROVIDER: str | None = None
    DATA_DIR: str = "./data/bookings"

    SYNC_INTERVAL_SECONDS: float = 30.0
    SYNC_API_BASE_URL: str = "http://127.0.0.1:8000"


settings = Settings()
