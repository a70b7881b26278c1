from backend.app.ux.state import (
    InvalidTransitionError,
    RequestState,
    RequestStatus,
    begin,
    build_ux_headers,
    resolve,
)
from backend.app.ux.session import ProofSession, StateListener

__all__ = [
    "RequestStatus",
    "RequestState",
    "InvalidTransitionError",
    "begin",
    "resolve",
    "build_ux_headers",
    "ProofSession",
    "StateListener",
]
