from __future__ import annotations

import codecs
import logging
from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MIMEFIELDS_", env_file=".env", extra="ignore")

    VERSION: str = "0.1.0"

    # RFC 2045 section 5.2: a missing media type means text/plain.
    DEFAULT_MEDIA_TYPE: str = "text/plain"
    DEFAULT_DISPOSITION_TYPE: str = "attachment"

    # Used when an RFC 2231 or RFC 2047 segment declares a charset Python does not know.
    FALLBACK_CHARSET: str = "latin-1"

    LOG_LEVEL: str = "WARNING"

    @field_validator("DEFAULT_MEDIA_TYPE")
    @classmethod
    def _validate_default_media_type(cls, v: str) -> str:
        v = v.strip().lower()
        if "/" not in v:
            raise ValueError("DEFAULT_MEDIA_TYPE must look like type/subtype")
        return v

    @field_validator("DEFAULT_DISPOSITION_TYPE")
    @classmethod
    def _validate_default_disposition_type(cls, v: str) -> str:
        v = v.strip().lower()
        if not v:
            raise ValueError("DEFAULT_DISPOSITION_TYPE must not be empty")
        return v

    @field_validator("FALLBACK_CHARSET")
    @classmethod
    def _validate_fallback_charset(cls, v: str) -> str:
        try:
            codecs.lookup(v)
        except LookupError as exc:
            raise ValueError(f"FALLBACK_CHARSET is not a known codec: {v}") from exc
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def _validate_log_level(cls, v: str) -> str:
        v = v.strip().upper()
        if not isinstance(logging.getLevelName(v), int):
            raise ValueError(f"LOG_LEVEL is not a logging level name: {v}")
        return v


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
