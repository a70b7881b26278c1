from backend.app.proof.contract import (
    PROOF_BEGIN_MARKER,
    PROOF_END_MARKER,
    SEPARATOR_TOKEN,
    CompletionRequest,
    ParsedResult,
)
from backend.app.proof.errors import (
    AuthError,
    EmptyResponseError,
    MissingCredentialError,
    MissingInputError,
    ProofServiceError,
    TransportError,
)
from backend.app.proof.prompt_builder import SYSTEM_INSTRUCTION, build_completion_request
from backend.app.proof.response_parser import parse_response, sanitize_proof_markup
from backend.app.proof.orchestrator import ProofOrchestrator

__all__ = [
    "SEPARATOR_TOKEN",
    "PROOF_BEGIN_MARKER",
    "PROOF_END_MARKER",
    "CompletionRequest",
    "ParsedResult",
    "ProofServiceError",
    "MissingCredentialError",
    "MissingInputError",
    "AuthError",
    "TransportError",
    "EmptyResponseError",
    "SYSTEM_INSTRUCTION",
    "build_completion_request",
    "parse_response",
    "sanitize_proof_markup",
    "ProofOrchestrator",
]
