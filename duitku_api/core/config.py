from __future__ import annotations

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from duitku_api.constants.duitku import DEFAULT_TIMEOUT_SECONDS, Environment


class Settings(BaseSettings):
    app_env: str = "production"
    log_level: str = "INFO"
    enable_docs: bool = True

    duitku_merchant_code: str = Field(..., min_length=1)
    duitku_api_key: str = Field(..., min_length=1)
    duitku_sandbox: bool = True
    duitku_timeout_seconds: float = Field(DEFAULT_TIMEOUT_SECONDS, gt=0)
    duitku_log_requests: bool = False
    duitku_base_url: str | None = None

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("duitku_merchant_code", "duitku_api_key")
    @classmethod
    def strip_credentials(cls, value: str) -> str:
        stripped = value.strip()
        if not stripped:
            raise ValueError("must not be blank")
        return stripped

    @field_validator("duitku_base_url")
    @classmethod
    def normalize_base_url(cls, value: str | None) -> str | None:
        if value is None or not value.strip():
            return None
        return value.strip().rstrip("/")

    @property
    def duitku_environment(self) -> Environment:
        return Environment.SANDBOX if self.duitku_sandbox else Environment.PRODUCTION

    @property
    def docs_url(self) -> str | None:
        return "/docs" if self.enable_docs else None

    @property
    def redoc_url(self) -> str | None:
        return "/redoc" if self.enable_docs else None

    @property
    def openapi_url(self) -> str | None:
        return "/openapi.json" if self.enable_docs else None


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def reset_settings_cache() -> None:
    get_settings.cache_clear()
