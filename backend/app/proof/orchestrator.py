"""Orchestrator: Request Builder -> Completion Provider -> Response Parser.

Any stage failure short-circuits the rest and surfaces as one
``ProofServiceError``; a partial result is never returned.
"""

from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

from backend.app.config.redaction import safe_error_detail
from backend.app.observability.logging import structured_log
from backend.app.proof.contract import ParsedResult
from backend.app.proof.errors import MissingCredentialError, ProofServiceError, TransportError
from backend.app.proof.prompt_builder import build_completion_request
from backend.app.proof.response_parser import parse_response

if TYPE_CHECKING:
    from backend.app.credentials.store import CredentialStore
    from backend.app.providers.base import CompletionProvider

logger = logging.getLogger(__name__)


def read_stored_credential(store: CredentialStore) -> str:
    try:
        return store.get()
    except Exception as exc:  # noqa: BLE001
        raise MissingCredentialError(
            f"Stored Gemini API key could not be read: {safe_error_detail(exc)}"
        ) from exc


class ProofOrchestrator:
    def __init__(
        self,
        provider: CompletionProvider,
        *,
        credential_store: Optional[CredentialStore] = None,
    ) -> None:
        self.provider = provider
        self.credential_store = credential_store

    def _resolve_credential(self, credential: Optional[str]) -> str:
        if credential is not None:
            return credential
        if self.credential_store is None:
            return ""
        return read_stored_credential(self.credential_store)

    async def submit(self, credential: Optional[str], formula_input: Optional[str]) -> ParsedResult:
        """Generate a proof for ``formula_input``.

        ``credential=None`` reads the injected store at submission time.
        Raises a ``ProofServiceError`` subclass on any failure.
        """
        start = time.monotonic()
        try:
            resolved = self._resolve_credential(credential)
            request = build_completion_request(resolved, formula_input)
            raw = await self.provider.complete(resolved, request)
        except ProofServiceError as exc:
            self._log_outcome(start, failure=exc)
            raise
        except Exception as exc:  # noqa: BLE001
            wrapped = TransportError(safe_error_detail(exc))
            self._log_outcome(start, failure=wrapped)
            raise wrapped from exc

        result = parse_response(raw)
        self._log_outcome(start, raw_chars=len(raw), result=result)
        return result

    def _log_outcome(
        self,
        start: float,
        *,
        failure: Optional[ProofServiceError] = None,
        raw_chars: int = 0,
        result: Optional[ParsedResult] = None,
    ) -> None:
        duration_ms = int((time.monotonic() - start) * 1000)
        event = {
            "event": "proof.submit",
            "provider": getattr(self.provider, "name", "unknown"),
            "outcome": "failed" if failure else "succeeded",
            "duration_ms": duration_ms,
        }
        if failure is not None:
            event["failure_type"] = failure.failure_type.value
            logger.info("[PROOF] failed: %s", safe_error_detail(failure.message))
        if result is not None:
            event["raw_chars"] = raw_chars
            event["reasoning_chars"] = len(result.reasoning_trace)
            event["proof_chars"] = len(result.proof_markup)
        structured_log(event)


__all__ = ["ProofOrchestrator", "read_stored_credential"]
