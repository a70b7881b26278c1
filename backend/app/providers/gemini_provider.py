"""Gemini ``generateContent`` provider over plain HTTP."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional

import httpx

from backend.app.config.redaction import safe_error_detail
from backend.app.proof.contract import CompletionRequest
from backend.app.proof.errors import AuthError, EmptyResponseError, TransportError

from .base import CompletionProvider

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-2.5-pro-exp-03-25"

_AUTH_MARKERS = ("API_KEY_INVALID", "API key not valid", "PERMISSION_DENIED")


def build_payload(request: CompletionRequest) -> Dict[str, Any]:
    return {
        "systemInstruction": {"parts": [{"text": request.system_instruction}]},
        "contents": [{"role": "user", "parts": [{"text": request.prompt}]}],
    }


def extract_text(data: Any) -> str:
    """Join the text parts of the first candidate, skipping thought parts."""
    if not isinstance(data, dict):
        return ""
    candidates = data.get("candidates") or []
    if not candidates or not isinstance(candidates[0], dict):
        return ""
    content = candidates[0].get("content") or {}
    parts = content.get("parts") or []
    texts = [
        part["text"]
        for part in parts
        if isinstance(part, dict) and isinstance(part.get("text"), str) and not part.get("thought")
    ]
    return "".join(texts)


def _error_message(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text
    if isinstance(body, dict) and isinstance(body.get("error"), dict):
        return str(body["error"].get("message") or body["error"])
    return resp.text


def _is_auth_failure(resp: httpx.Response) -> bool:
    if resp.status_code in (401, 403):
        return True
    if resp.status_code == 400:
        return any(marker in resp.text for marker in _AUTH_MARKERS)
    return False


class GeminiProvider(CompletionProvider):
    """Single-attempt Gemini client; no retries, failures surface immediately."""

    name = "gemini"

    def __init__(
        self,
        model: str = DEFAULT_MODEL,
        base_url: str = DEFAULT_BASE_URL,
        timeout_seconds: Optional[float] = None,
        connect_timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.connect_timeout_seconds = connect_timeout_seconds
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/models/{self.model}:generateContent"

    async def complete(self, credential: str, request: CompletionRequest) -> str:
        headers = {
            "x-goog-api-key": credential,
            "Content-Type": "application/json",
        }
        timeout = httpx.Timeout(self.timeout_seconds, connect=self.connect_timeout_seconds)

        try:
            async with httpx.AsyncClient(transport=self._transport, timeout=timeout) as client:
                resp = await client.post(self.endpoint, headers=headers, json=build_payload(request))
        except httpx.TimeoutException as exc:
            raise TransportError("Gemini request timed out") from exc
        except httpx.HTTPError as exc:
            raise TransportError(f"Gemini HTTP error: {safe_error_detail(exc)}") from exc

        if _is_auth_failure(resp):
            logger.info("[PROVIDER] credential rejected", extra={"status": resp.status_code, "model": self.model})
            raise AuthError(safe_error_detail(_error_message(resp)), status_code=resp.status_code)
        if resp.is_error:
            raise TransportError(
                f"Gemini returned HTTP {resp.status_code}: {safe_error_detail(_error_message(resp))}",
                status_code=resp.status_code,
            )

        try:
            data = resp.json()
        except ValueError as exc:
            raise TransportError("Gemini returned invalid JSON", status_code=resp.status_code) from exc

        text = extract_text(data)
        if not text or not text.strip():
            finish_reason = None
            if isinstance(data, dict) and data.get("candidates"):
                finish_reason = (data["candidates"][0] or {}).get("finishReason")
            logger.info("[PROVIDER] empty completion", extra={"finish_reason": finish_reason, "model": self.model})
            raise EmptyResponseError()
        return text


__all__ = ["GeminiProvider", "build_payload", "extract_text", "DEFAULT_BASE_URL", "DEFAULT_MODEL"]
