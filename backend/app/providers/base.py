"""Completion provider abstraction."""

from __future__ import annotations

from abc import ABC, abstractmethod

from backend.app.proof.contract import CompletionRequest


class CompletionProvider(ABC):
    """Abstract base class for completion providers."""

    name: str = "provider"

    @abstractmethod
    async def complete(self, credential: str, request: CompletionRequest) -> str:
        """
        Execute one completion round-trip.

        Args:
            credential: Opaque API credential, sent per call
            request: System instruction and prompt

        Returns:
            Raw completion text (never empty)

        Raises:
            AuthError: Credential rejected by the service
            TransportError: Network failure, timeout or non-2xx response
            EmptyResponseError: No text could be extracted
        """


__all__ = ["CompletionProvider"]
