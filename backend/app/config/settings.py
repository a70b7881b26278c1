from __future__ import annotations

import functools
import json
from typing import Annotated, Any, Dict, List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # App / env
    app_env: str = Field("dev", alias="APP_ENV")
    log_level: str = Field("INFO", alias="LOG_LEVEL")
    request_id_header: str = Field("x-request-id", alias="REQUEST_ID_HEADER")
    # NoDecode: CSV values reach parse_cors as raw strings.
    cors_origins: Annotated[List[str], NoDecode] = Field(default_factory=list, alias="CORS_ORIGINS")

    # Completion service
    model_name: str = Field("gemini-2.5-pro-exp-03-25", alias="MODEL_NAME")
    model_base_url: str = Field("https://generativelanguage.googleapis.com/v1beta", alias="MODEL_BASE_URL")
    # 0 disables the read timeout; the request then waits for the service indefinitely.
    model_timeout_seconds: int = Field(0, alias="MODEL_TIMEOUT_SECONDS")
    model_connect_timeout_seconds: int = Field(10, alias="MODEL_CONNECT_TIMEOUT_SECONDS")

    # Credential store
    credential_store_path: str = Field("~/.prooftree/credentials.json", alias="CREDENTIAL_STORE_PATH")
    credential_key: str = Field("gemini_api_key", alias="CREDENTIAL_KEY")

    @field_validator("cors_origins", mode="before")
    @classmethod
    def parse_cors(cls, v: Any) -> List[str]:
        if v is None:
            return []
        if isinstance(v, list):
            return [str(item).strip() for item in v if str(item).strip()]
        if isinstance(v, str):
            text = v.strip()
            if not text:
                return []
            if text == "*":
                return ["*"]
            try:
                parsed = json.loads(text)
                if isinstance(parsed, list):
                    return [str(item).strip() for item in parsed if str(item).strip()]
            except ValueError:
                pass
            return [item.strip() for item in text.split(",") if item.strip()]
        return []

    @field_validator("model_timeout_seconds", "model_connect_timeout_seconds")
    @classmethod
    def clamp_non_negative(cls, v: int) -> int:
        return max(0, v)

    @field_validator("app_env")
    @classmethod
    def normalize_env(cls, v: str) -> str:
        return (v or "dev").lower()

    @field_validator("model_base_url")
    @classmethod
    def strip_trailing_slash(cls, v: str) -> str:
        return v.rstrip("/")

    def read_timeout(self) -> float | None:
        if self.model_timeout_seconds <= 0:
            return None
        return float(self.model_timeout_seconds)


@functools.lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()


def settings_public_summary(settings: Settings | None = None) -> Dict[str, Any]:
    s = settings or get_settings()
    return {
        "env": s.app_env,
        "model_name": s.model_name,
        "model_base_url": s.model_base_url,
        "model_timeout_seconds": s.model_timeout_seconds,
        "model_connect_timeout_seconds": s.model_connect_timeout_seconds,
        "credential_key": s.credential_key,
    }


__all__ = ["Settings", "get_settings", "settings_public_summary"]
