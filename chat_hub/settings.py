from typing import Literal

from pydantic import SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from chat_hub.constants import DEFAULT_ADMIN_BEARER_TOKEN


class Settings(BaseSettings):
    model_config = SettingsConfigDict(case_sensitive=True)

    ENVIRONMENT: str = "development"

    # Logging settings
    LOG_LEVEL: str = "INFO"
    LOG_FILE_PATH: str = "chat_hub_errors.log"
    LOG_EXCLUDED_PATHS: list[str] = ["/metrics", "/health"]

    # Admin endpoint bearer token
    ADMIN_BEARER_TOKEN: SecretStr = SecretStr(DEFAULT_ADMIN_BEARER_TOKEN)

    # Outbound delivery queue (0 means unbounded)
    WS_QUEUE_MAX_SIZE: int = 1000
    WS_QUEUE_OVERFLOW_POLICY: Literal["drop_oldest", "disconnect"] = (
        "drop_oldest"
    )

    # Admin disconnect also tears down the live session when enabled
    ADMIN_DISCONNECT_CLOSES_SESSION: bool = False

    # Server settings
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8000


app_settings = Settings()
