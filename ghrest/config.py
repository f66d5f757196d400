from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class ClientSettings(BaseSettings):
    base_url: str = "https://api.github.com"
    token: str = ""
    user_agent: str = "ghrest/0.1"
    api_version: str = "2022-11-28"
    timeout: float = Field(30.0, gt=0)
    retry_max: int = Field(10, ge=0)
    retry_wait_min: float = Field(5.0, ge=0)
    retry_wait_max: float = Field(60.0, ge=0)
    rate_limit_retry: bool = False
    log_format: Literal["text", "json"] = "text"
    log_level: str = "INFO"

    model_config = SettingsConfigDict(
        env_prefix="GHREST_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        frozen=True,
    )

    @property
    def max_attempts(self) -> int:
        return max(self.retry_max, 1)
