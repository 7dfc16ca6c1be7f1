"""Registry service configuration, loaded from MEDSIM_* environment variables."""

from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class RegistrySettings(BaseSettings):
    """Settings for the HTTP adapter and logging."""

    model_config = SettingsConfigDict(
        env_prefix="MEDSIM_",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        env_file=".env",
        env_file_encoding="utf-8",
    )

    certification_authority: Optional[str] = Field(default=None, min_length=1)
    log_level: str = "INFO"
    caller_header: str = "X-Caller-Identity"


def load_settings() -> RegistrySettings:
    return RegistrySettings()
