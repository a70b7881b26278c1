"""UI-facing session that owns the observable request state.

Overlapping submissions are not cancelled. Each submission takes a ticket and
only the most recently issued ticket may publish its outcome.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from backend.app.credentials.store import CredentialStore, MemoryCredentialStore
from backend.app.proof.errors import ProofServiceError
from backend.app.proof.orchestrator import ProofOrchestrator, read_stored_credential
from backend.app.ux.state import RequestState, begin, resolve

logger = logging.getLogger(__name__)

StateListener = Callable[[RequestState], None]


class ProofSession:
    def __init__(
        self,
        orchestrator: ProofOrchestrator,
        credential_store: Optional[CredentialStore] = None,
        on_change: Optional[StateListener] = None,
    ) -> None:
        self.orchestrator = orchestrator
        self.credential_store = credential_store or orchestrator.credential_store or MemoryCredentialStore()
        self._on_change = on_change
        self._state = RequestState.idle()
        self._latest_ticket = 0

    @property
    def state(self) -> RequestState:
        return self._state

    def credential(self) -> str:
        return self.credential_store.get()

    def set_credential(self, value: str) -> None:
        if value:
            self.credential_store.set(value)
        else:
            self.credential_store.remove()

    def clear_credential(self) -> None:
        self.credential_store.remove()

    def _publish(self, state: RequestState) -> None:
        self._state = state
        if self._on_change is not None:
            self._on_change(state)

    async def submit(self, formula_input: Optional[str]) -> RequestState:
        """Run one submission and return its own outcome state.

        The returned state is this call's outcome; ``self.state`` only takes it
        if no newer submission started in the meantime.
        """
        self._latest_ticket += 1
        ticket = self._latest_ticket
        in_flight = begin(self._state)
        self._publish(in_flight)

        try:
            credential = read_stored_credential(self.credential_store)
            result = await self.orchestrator.submit(credential, formula_input)
        except ProofServiceError as exc:
            outcome = resolve(in_flight, exc.info)
        else:
            outcome = resolve(in_flight, result)

        if ticket == self._latest_ticket:
            self._publish(outcome)
        else:
            logger.info(
                "[UX] stale submission outcome discarded",
                extra={"ticket": ticket, "latest": self._latest_ticket, "status": outcome.status.value},
            )
        return outcome


__all__ = ["ProofSession", "StateListener"]
