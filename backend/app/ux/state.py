from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from backend.app.proof.contract import ParsedResult
from backend.app.reliability.failures import FailureInfo, to_public_error


class RequestStatus(str, Enum):
    IDLE = "idle"
    IN_FLIGHT = "in_flight"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class InvalidTransitionError(Exception):
    """Raised when a state change skips the in-flight step."""


@dataclass(frozen=True)
class RequestState:
    status: RequestStatus
    result: Optional[ParsedResult] = None
    error: Optional[FailureInfo] = None

    @classmethod
    def idle(cls) -> "RequestState":
        return cls(RequestStatus.IDLE)

    @classmethod
    def in_flight(cls) -> "RequestState":
        return cls(RequestStatus.IN_FLIGHT)

    @classmethod
    def succeeded(cls, result: ParsedResult) -> "RequestState":
        return cls(RequestStatus.SUCCEEDED, result=result)

    @classmethod
    def failed(cls, error: FailureInfo) -> "RequestState":
        return cls(RequestStatus.FAILED, error=error)

    @property
    def is_busy(self) -> bool:
        return self.status == RequestStatus.IN_FLIGHT

    def to_payload(self) -> Dict[str, Any]:
        payload: Dict[str, Any] = {"state": self.status.value}
        if self.result is not None:
            payload.update(
                {
                    "reasoning_trace": self.result.reasoning_trace,
                    "proof_markup": self.result.proof_markup,
                    "display_markup": self.result.display_markup,
                }
            )
        if self.error is not None:
            payload.update(to_public_error(self.error))
        return payload


def begin(current: RequestState) -> RequestState:
    # Any state may be resubmitted; prior results are discarded.
    return RequestState.in_flight()


def resolve(current: RequestState, outcome: ParsedResult | FailureInfo) -> RequestState:
    if current.status != RequestStatus.IN_FLIGHT:
        raise InvalidTransitionError(f"cannot resolve from {current.status.value}")
    if isinstance(outcome, ParsedResult):
        return RequestState.succeeded(outcome)
    return RequestState.failed(outcome)


def build_ux_headers(state: RequestState) -> dict[str, str]:
    hdrs = {"X-UX-State": state.status.value}
    if state.error is not None:
        hdrs["X-Failure-Type"] = state.error.failure_type.value
    return hdrs


__all__ = [
    "RequestStatus",
    "RequestState",
    "InvalidTransitionError",
    "begin",
    "resolve",
    "build_ux_headers",
]
