"""Completion provider factory driven by application settings."""

from __future__ import annotations

from typing import Optional

from backend.app.config.settings import Settings, get_settings

from .base import CompletionProvider
from .gemini_provider import GeminiProvider


def create_provider(settings: Optional[Settings] = None) -> CompletionProvider:
    s = settings or get_settings()
    return GeminiProvider(
        model=s.model_name,
        base_url=s.model_base_url,
        timeout_seconds=s.read_timeout(),
        connect_timeout_seconds=float(s.model_connect_timeout_seconds),
    )


__all__ = ["create_provider"]
