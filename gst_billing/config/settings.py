from decimal import Decimal

from pydantic import Field, AliasChoices
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Read env from container + optionally from a local .env file
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore",
        case_sensitive=False,
    )

    # App
    ENVIRONMENT: str = Field(default="dev", validation_alias=AliasChoices("ENVIRONMENT", "environment"))
    APP_NAME: str = Field(default="gst_billing", validation_alias=AliasChoices("APP_NAME", "app_name"))
    LOG_LEVEL: str = Field(default="INFO", validation_alias=AliasChoices("LOG_LEVEL", "log_level"))
    DEBUG: bool = Field(default=False, validation_alias=AliasChoices("DEBUG", "debug"))

    # HTTP
    API_PREFIX: str = Field(default="/api/v1", validation_alias=AliasChoices("API_PREFIX", "api_prefix"))

    # Tax engine
    # Rate applied to preview lines that arrive without one (invoice_items.gst_rate default)
    DEFAULT_GST_RATE: Decimal = Field(
        default=Decimal("18"),
        validation_alias=AliasChoices("DEFAULT_GST_RATE", "default_gst_rate"),
    )
    WARN_ON_NON_STANDARD_RATE: bool = Field(
        default=True,
        validation_alias=AliasChoices("WARN_ON_NON_STANDARD_RATE", "warn_on_non_standard_rate"),
    )


settings = Settings()
