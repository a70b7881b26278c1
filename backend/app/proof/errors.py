"""Error taxonomy for proof generation.

Every stage failure is a ``ProofServiceError`` so callers handle one type and
read a human-readable ``message`` plus a ``FailureInfo`` for the UI state.
"""

from __future__ import annotations

from typing import Optional

from backend.app.reliability.failures import FailureInfo, FailureType, status_for

REMOTE_FAILURE_PREFIX = "Failed to generate LaTeX: "


class ProofServiceError(Exception):
    """Base class for all proof generation failures."""

    failure_type: FailureType = FailureType.TRANSPORT_ERROR

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code

    @property
    def info(self) -> FailureInfo:
        return FailureInfo(
            failure_type=self.failure_type,
            reason=self.message,
            status_code=status_for(self.failure_type),
        )


class MissingCredentialError(ProofServiceError):
    failure_type = FailureType.MISSING_CREDENTIAL

    def __init__(self, message: str = "Please enter your Gemini API key.") -> None:
        super().__init__(message)


class MissingInputError(ProofServiceError):
    failure_type = FailureType.MISSING_INPUT

    def __init__(self, message: str = "Please enter premises and conclusion.") -> None:
        super().__init__(message)


class _RemoteServiceError(ProofServiceError):
    def __init__(self, detail: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(f"{REMOTE_FAILURE_PREFIX}{detail or 'Unknown API error'}", status_code=status_code)
        self.detail = detail


class AuthError(_RemoteServiceError):
    """The completion service rejected the credential."""

    failure_type = FailureType.AUTH_ERROR


class TransportError(_RemoteServiceError):
    """Network failure, timeout, or a non-2xx response."""

    failure_type = FailureType.TRANSPORT_ERROR


class EmptyResponseError(_RemoteServiceError):
    failure_type = FailureType.EMPTY_RESPONSE

    def __init__(self, detail: str = "Empty response received from API.", *, status_code: Optional[int] = None) -> None:
        super().__init__(detail, status_code=status_code)


__all__ = [
    "ProofServiceError",
    "MissingCredentialError",
    "MissingInputError",
    "AuthError",
    "TransportError",
    "EmptyResponseError",
    "REMOTE_FAILURE_PREFIX",
]
