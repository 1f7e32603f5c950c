from __future__ import annotations

from pydantic import ConfigDict
from pydantic_settings import BaseSettings

from request_log.domain.value_objects.enums import TOKEN_PRESETS, StandardToken, TokenPreset


class Settings(BaseSettings):
    ACCESS_LOG_ENABLED: bool = True
    ACCESS_LOG_FORMAT: str = ":method :path - :status-code in :duration"
    ACCESS_LOG_TOKENS: TokenPreset = TokenPreset.ALL
    ACCESS_LOG_LOGGER: str = "request_log.access"
    ACCESS_LOG_LEVEL: str = "INFO"

    LOG_LEVEL: str = "info"
    HOST: str = "0.0.0.0"
    PORT: int = 8000

    @property
    def standard_tokens(self) -> tuple[StandardToken, ...]:
        return TOKEN_PRESETS[self.ACCESS_LOG_TOKENS]

    model_config = ConfigDict(
        env_file=".env",
        extra="ignore",
    )


settings = Settings()
