from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, StrictStr, model_validator

MAX_FORMULA_CHARS = 4000
MAX_CREDENTIAL_CHARS = 512


class ProofRequest(BaseModel):
    # Emptiness is reported by the request builder, not by schema validation.
    formula: StrictStr = Field("", max_length=MAX_FORMULA_CHARS)
    credential: Optional[StrictStr] = Field(default=None, max_length=MAX_CREDENTIAL_CHARS)
    remember: bool = True

    model_config = ConfigDict(extra="forbid")

    @model_validator(mode="before")
    @classmethod
    def _strip_credential(cls, values: dict) -> dict:
        if isinstance(values, dict) and isinstance(values.get("credential"), str):
            values = {**values, "credential": values["credential"].strip() or None}
        return values


class ProofResponse(BaseModel):
    state: StrictStr
    reasoning_trace: StrictStr = ""
    proof_markup: StrictStr = ""
    display_markup: StrictStr = ""


class ProofFailureResponse(BaseModel):
    state: StrictStr
    failure_type: StrictStr
    message: StrictStr


class CredentialUpdate(BaseModel):
    credential: StrictStr = Field(..., max_length=MAX_CREDENTIAL_CHARS)

    model_config = ConfigDict(extra="forbid")


class CredentialStatus(BaseModel):
    present: bool


__all__ = [
    "ProofRequest",
    "ProofResponse",
    "ProofFailureResponse",
    "CredentialUpdate",
    "CredentialStatus",
    "MAX_FORMULA_CHARS",
]
