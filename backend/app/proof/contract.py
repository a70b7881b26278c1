from __future__ import annotations

from dataclasses import dataclass

SEPARATOR_TOKEN = "---THINKING_STEPS_END---"
PROOF_BEGIN_MARKER = "\\begin{prooftree}"
PROOF_END_MARKER = "\\end{prooftree}"


@dataclass(frozen=True)
class CompletionRequest:
    """One outbound call: the fixed system instruction plus the formatted prompt."""

    system_instruction: str
    prompt: str


@dataclass(frozen=True)
class ParsedResult:
    reasoning_trace: str
    proof_markup: str

    @property
    def has_reasoning(self) -> bool:
        return bool(self.reasoning_trace)

    @property
    def has_proof(self) -> bool:
        return bool(self.proof_markup)

    @property
    def display_markup(self) -> str:
        # Display-math wrapping for the MathJax renderer; empty means nothing to render.
        if not self.proof_markup:
            return ""
        return f"$${self.proof_markup}$$"


__all__ = [
    "SEPARATOR_TOKEN",
    "PROOF_BEGIN_MARKER",
    "PROOF_END_MARKER",
    "CompletionRequest",
    "ParsedResult",
]
