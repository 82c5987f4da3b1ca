from __future__ import annotations

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="ignore",
        case_sensitive=False,
    )

    log_level: str = Field("INFO", alias="LOG_LEVEL")

    default_currency: str = Field("USD", alias="DEFAULT_CURRENCY")
    report_max_rows: int = Field(50, alias="REPORT_MAX_ROWS", gt=0)


settings = Settings()
