from __future__ import annotations

import re
from typing import Any, Dict

_SECRET_KEYS = {
    "authorization",
    "api_key",
    "credential",
    "x-goog-api-key",
    "token",
    "secret",
    "formula",
    "formula_input",
    "prompt",
    "raw",
}
_GOOGLE_KEY_PATTERN = re.compile(r"AIza[0-9A-Za-z_\-]{20,}")
_QUERY_KEY_PATTERN = re.compile(r"([?&]key=)[^&\s]+", re.IGNORECASE)


def redact_secrets(s: str) -> str:
    if not s:
        return s
    redacted = _GOOGLE_KEY_PATTERN.sub("[redacted]", s)
    redacted = _QUERY_KEY_PATTERN.sub(r"\1[redacted]", redacted)
    redacted = re.sub(r"(Authorization:\s*Bearer\s+)[^\s]+", r"\1[redacted]", redacted, flags=re.IGNORECASE)
    return redacted


def safe_error_detail(exc: BaseException | str) -> str:
    text = str(exc)
    text = redact_secrets(text)
    return text[:200]


def safe_dict(d: Dict[str, Any]) -> Dict[str, Any]:
    if not isinstance(d, dict):
        return {}
    cleaned: Dict[str, Any] = {}
    for k, v in d.items():
        if str(k).lower() in _SECRET_KEYS:
            continue
        cleaned[k] = v
    return cleaned


__all__ = ["redact_secrets", "safe_error_detail", "safe_dict"]
