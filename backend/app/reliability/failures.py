from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict


class FailureType(str, Enum):
    MISSING_CREDENTIAL = "MISSING_CREDENTIAL"
    MISSING_INPUT = "MISSING_INPUT"
    AUTH_ERROR = "AUTH_ERROR"
    TRANSPORT_ERROR = "TRANSPORT_ERROR"
    EMPTY_RESPONSE = "EMPTY_RESPONSE"


# Input errors are recoverable locally; everything else came from the remote service.
_LOCAL_FAILURES = {FailureType.MISSING_CREDENTIAL, FailureType.MISSING_INPUT}

_STATUS_BY_FAILURE = {
    FailureType.MISSING_CREDENTIAL: 422,
    FailureType.MISSING_INPUT: 422,
    FailureType.AUTH_ERROR: 401,
    FailureType.TRANSPORT_ERROR: 502,
    FailureType.EMPTY_RESPONSE: 502,
}

MAX_FAILURE_REASON_CHARS = 500


@dataclass(frozen=True)
class FailureInfo:
    failure_type: FailureType
    reason: str
    status_code: int = 502

    @property
    def is_input_error(self) -> bool:
        return self.failure_type in _LOCAL_FAILURES


def status_for(failure_type: FailureType) -> int:
    return _STATUS_BY_FAILURE.get(failure_type, 502)


def to_public_error(info: FailureInfo) -> Dict[str, Any]:
    return {
        "failure_type": info.failure_type.value,
        "message": info.reason[:MAX_FAILURE_REASON_CHARS],
    }


__all__ = ["FailureType", "FailureInfo", "status_for", "to_public_error", "MAX_FAILURE_REASON_CHARS"]
