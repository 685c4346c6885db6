from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    DATABASE_URL: str

    REDIS_URL: str

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 1440  # 24 hours

    RATE_LIMIT: int = 100
    RATE_LIMIT_WINDOW: int = 600  # 10 minutes

    IDEMPOTENCY_TTL: int = 300  # 5 minutes
    QUOTATION_CACHE_TTL: int = 3600  # 1 hour
    CACHE_TIMEOUT: float = 0.5  # seconds per cache call

    GLOBAL_PARAMETERS_ID: int = 1

    API_TITLE: str = "Event Quotation Service"
    API_DESCRIPTION: str = "Quotation pricing, persistence and profitability reporting for ticketed events"
    API_VERSION: str = "1.0.0"

    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)


settings = Settings()
