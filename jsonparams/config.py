from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8")

    log_level: str = Field(default="INFO", alias="LOG_LEVEL")
    log_format: str = Field(default="json", alias="LOG_FORMAT")
    params_log_level: str = Field(default="", alias="PARAMS_LOG_LEVEL")
    show_exceptions: bool = Field(default=True, alias="SHOW_EXCEPTIONS")
    max_body_bytes: int = Field(default=1024 * 1024, alias="MAX_BODY_BYTES")
    extra_json_mime_types: str = Field(default="", alias="EXTRA_JSON_MIME_TYPES")

    @property
    def json_mime_types(self) -> list[str]:
        return [item.strip().lower() for item in self.extra_json_mime_types.split(",") if item.strip()]


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
