from pathlib import Path
from typing import Literal

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TG_OPENAPI_",
        env_file=".env",
        extra="ignore",
    )

    # Source document
    doc_url: str = "https://core.telegram.org/bots/api"
    timeout: float = 30.0
    verify_ssl: bool = True

    # Proxies, falling back to the conventional variables
    https_proxy: str | None = Field(
        default=None, validation_alias=AliasChoices("TG_OPENAPI_HTTPS_PROXY", "HTTPS_PROXY")
    )
    http_proxy: str | None = Field(
        default=None, validation_alias=AliasChoices("TG_OPENAPI_HTTP_PROXY", "HTTP_PROXY")
    )

    # Output
    output: Path = Path("telegram-bot-api.json")
    output_format: Literal["json", "yaml"] = "json"

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

    @property
    def proxy(self) -> str | None:
        return self.https_proxy or self.http_proxy
