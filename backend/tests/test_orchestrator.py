import asyncio
import logging

import pytest

from backend.app.credentials import MemoryCredentialStore
from backend.app.proof import ParsedResult, ProofOrchestrator, SEPARATOR_TOKEN
from backend.app.proof.errors import (
    AuthError,
    EmptyResponseError,
    MissingCredentialError,
    MissingInputError,
    ProofServiceError,
    TransportError,
)
from backend.tests._fake_provider import FakeProvider

PROOF = "\\begin{prooftree}\\Axiom$p$\\end{prooftree}"
RAW = f"Step 1...\n{SEPARATOR_TOKEN}\n```latex\n{PROOF}\n```"


def test_submit_returns_parsed_result():
    provider = FakeProvider([RAW])
    result = asyncio.run(ProofOrchestrator(provider).submit("key", "p ⊢ p"))
    assert result == ParsedResult(reasoning_trace="Step 1...", proof_markup=PROOF)
    credential, request = provider.calls[0]
    assert credential == "key"
    assert request.prompt == "Formula: p ⊢ p"


def test_missing_credential_short_circuits_before_network():
    provider = FakeProvider([RAW])
    with pytest.raises(MissingCredentialError):
        asyncio.run(ProofOrchestrator(provider).submit("", "p ⊢ p"))
    assert provider.calls == []


def test_missing_input_short_circuits_before_network():
    provider = FakeProvider([RAW])
    with pytest.raises(MissingInputError):
        asyncio.run(ProofOrchestrator(provider).submit("key", ""))
    assert provider.calls == []


def test_none_credential_reads_injected_store():
    provider = FakeProvider([PROOF])
    store = MemoryCredentialStore("stored-key")
    orchestrator = ProofOrchestrator(provider, credential_store=store)
    result = asyncio.run(orchestrator.submit(None, "p"))
    assert result.proof_markup == PROOF
    assert provider.calls[0][0] == "stored-key"


def test_store_read_at_submission_time():
    provider = FakeProvider([PROOF, PROOF])
    store = MemoryCredentialStore()
    orchestrator = ProofOrchestrator(provider, credential_store=store)
    with pytest.raises(MissingCredentialError):
        asyncio.run(orchestrator.submit(None, "p"))
    store.set("later")
    asyncio.run(orchestrator.submit(None, "p"))
    assert provider.calls[0][0] == "later"


def test_explicit_empty_credential_does_not_fall_back_to_store():
    provider = FakeProvider([PROOF])
    orchestrator = ProofOrchestrator(provider, credential_store=MemoryCredentialStore("stored"))
    with pytest.raises(MissingCredentialError):
        asyncio.run(orchestrator.submit("", "p"))


def test_orchestrator_does_not_write_store():
    store = MemoryCredentialStore()
    orchestrator = ProofOrchestrator(FakeProvider([PROOF]), credential_store=store)
    asyncio.run(orchestrator.submit("typed-key", "p"))
    assert store.get() == ""


@pytest.mark.parametrize("error", [AuthError("denied"), TransportError("down"), EmptyResponseError()])
def test_provider_errors_propagate_unchanged(error):
    with pytest.raises(type(error)) as exc_info:
        asyncio.run(ProofOrchestrator(FakeProvider([error])).submit("key", "p"))
    assert exc_info.value is error


def test_unexpected_provider_exception_wrapped_as_transport_error():
    with pytest.raises(TransportError) as exc_info:
        asyncio.run(ProofOrchestrator(FakeProvider([RuntimeError("socket closed")])).submit("key", "p"))
    assert exc_info.value.message == "Failed to generate LaTeX: socket closed"
    assert isinstance(exc_info.value.__cause__, RuntimeError)


def test_all_failures_share_one_error_shape():
    for error in (AuthError("a"), TransportError("t"), EmptyResponseError()):
        with pytest.raises(ProofServiceError) as exc_info:
            asyncio.run(ProofOrchestrator(FakeProvider([error])).submit("key", "p"))
        info = exc_info.value.info
        assert info.reason.startswith("Failed to generate LaTeX: ")
        assert not info.is_input_error


def test_fence_only_response_is_not_an_error():
    result = asyncio.run(ProofOrchestrator(FakeProvider(["```\n```"])).submit("key", "p"))
    assert result.proof_markup == ""
    assert result.reasoning_trace == ""


class _BrokenStore:
    def get(self) -> str:
        raise IsADirectoryError("credentials.json is a directory")

    def set(self, value: str) -> None:
        raise IsADirectoryError("credentials.json is a directory")

    def remove(self) -> None:
        raise IsADirectoryError("credentials.json is a directory")


def test_unreadable_store_becomes_missing_credential():
    provider = FakeProvider([PROOF])
    orchestrator = ProofOrchestrator(provider, credential_store=_BrokenStore())
    with pytest.raises(MissingCredentialError) as exc_info:
        asyncio.run(orchestrator.submit(None, "p"))
    assert "could not be read" in exc_info.value.message
    assert isinstance(exc_info.value.__cause__, IsADirectoryError)
    assert provider.calls == []


def test_summary_logged_for_input_errors(caplog):
    with caplog.at_level(logging.INFO, logger="backend.app.observability.logging"):
        with pytest.raises(MissingCredentialError):
            asyncio.run(ProofOrchestrator(FakeProvider([])).submit("", "p"))
    summaries = [rec.getMessage() for rec in caplog.records if "proof.submit" in rec.getMessage()]
    assert len(summaries) == 1
    assert "MISSING_CREDENTIAL" in summaries[0]
