from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Remote ledger: empty URL selects the in-process ledger (offline/dev)
    LEDGER_URL: str = ""
    LEDGER_TIMEOUT_SECONDS: float = 10.0

    # Money and calendar
    CURRENCY_LABEL: str = "PKR"
    TIMEZONE: str = "UTC"

    # Business rules
    LOW_STOCK_THRESHOLD: int = 5

    # Query cache: None means keys only go stale through invalidation
    CACHE_STALE_AFTER_SECONDS: float | None = None

    # Settings record shown before a session exists
    DEFAULT_OWNER_NAME: str = "Owner"
    DEFAULT_BUSINESS_NAME: str = "My Business"

    # App
    APP_NAME: str = "Business Manager"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"


settings = Settings()
