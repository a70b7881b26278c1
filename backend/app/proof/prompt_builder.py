"""Builds the completion request for a natural-deduction proof.

The system instruction is frozen: model behaviour has been tuned against this
exact wording, so edits here change what the parser receives.
"""

from __future__ import annotations

from typing import Optional

from backend.app.proof.contract import (
    PROOF_BEGIN_MARKER,
    PROOF_END_MARKER,
    SEPARATOR_TOKEN,
    CompletionRequest,
)
from backend.app.proof.errors import MissingCredentialError, MissingInputError

PROMPT_PREFIX = "Formula: "

FORBIDDEN_COMMANDS = ("\\hypo", "\\infer")

SYSTEM_INSTRUCTION = (
    "You are a specialized agent designed to receive premises and a conclusion and your job is to prove it "
    "using natural deduction. "
    "First, write out your thinking steps: explain step by step which natural deduction rules you apply and why. "
    f"When your thinking steps are complete, output the exact line {SEPARATOR_TOKEN} on its own. "
    "After that line you will ONLY output the tree shaped representation of the proof written in LaTeX representation. "
    "Do not include any explanatory text, greetings, context, or markdown formatting such as backticks (`) before or "
    "after the LaTeX code. Just output the raw LaTeX string required to render the formula. "
    f"Start the latex directly in the {PROOF_BEGIN_MARKER} and end it in {PROOF_END_MARKER}. do not add anything else. "
    f"Do not use {FORBIDDEN_COMMANDS[0]} or {FORBIDDEN_COMMANDS[1]} only use things like \\Axiom, \\AxiomC, "
    "\\UnaryInfC, \\BinaryInfC, \\TrinaryInfC, \\LeftLabel and \\RightLabel"
)


def build_prompt(formula_input: str) -> str:
    return f"{PROMPT_PREFIX}{formula_input}"


def build_completion_request(credential: Optional[str], formula_input: Optional[str]) -> CompletionRequest:
    """Validate both inputs and return a fresh request.

    The credential is opaque: only absence is checked. A formula made of
    whitespace alone counts as missing.
    """
    if not credential:
        raise MissingCredentialError()
    if not formula_input or not formula_input.strip():
        raise MissingInputError()
    return CompletionRequest(system_instruction=SYSTEM_INSTRUCTION, prompt=build_prompt(formula_input))


__all__ = [
    "SYSTEM_INSTRUCTION",
    "PROMPT_PREFIX",
    "FORBIDDEN_COMMANDS",
    "build_prompt",
    "build_completion_request",
]
