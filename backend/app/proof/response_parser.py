"""Response parser: splits one completion into reasoning trace and proof markup.

The model is asked to emit ``---THINKING_STEPS_END---`` between its thinking
steps and the LaTeX tree. It does not always comply, so a missing separator is
a valid variant: the whole text becomes proof markup and the trace is empty.
Only the first separator splits; later ones stay in the proof markup verbatim.
"""

from __future__ import annotations

import logging
import re

from backend.app.proof.contract import SEPARATOR_TOKEN, ParsedResult

logger = logging.getLogger(__name__)

# Fences are only removed at the very start/end of the text.
_LEADING_FENCE = re.compile(r"\A```(?:(?:latex|tex)(?![A-Za-z0-9]))?[ \t]*(?:\r?\n)?", re.IGNORECASE)
_TRAILING_FENCE = re.compile(r"(?:\r?\n)?```\Z")


def _strip_fences_once(text: str) -> str:
    text = text.strip()
    text = _LEADING_FENCE.sub("", text, count=1)
    text = _TRAILING_FENCE.sub("", text, count=1)
    return text.strip()


def sanitize_proof_markup(text: str) -> str:
    """Remove incidental code-fence wrapping from candidate proof markup.

    Repeats until nothing changes, so ``sanitize(sanitize(x)) == sanitize(x)``.
    Text consisting solely of fence markers sanitizes to ``""``.
    """
    if not text:
        return ""
    current = text
    while True:
        cleaned = _strip_fences_once(current)
        if cleaned == current:
            return cleaned
        current = cleaned


def split_response(raw: str) -> tuple[str, str, bool]:
    """Return ``(reasoning_trace, candidate_markup, separator_found)``."""
    before, found, after = raw.partition(SEPARATOR_TOKEN)
    if not found:
        return "", raw.strip(), False
    return before.strip(), after.strip(), True


def parse_response(raw: str) -> ParsedResult:
    reasoning_trace, candidate, separator_found = split_response(raw or "")
    if not separator_found:
        logger.warning(
            "[PARSE] separator missing; treating full response as proof markup",
            extra={"raw_chars": len(raw or "")},
        )
    proof_markup = sanitize_proof_markup(candidate)
    if not proof_markup:
        logger.info("[PARSE] proof markup empty after sanitizing")
    return ParsedResult(reasoning_trace=reasoning_trace, proof_markup=proof_markup)


__all__ = ["sanitize_proof_markup", "split_response", "parse_response"]
