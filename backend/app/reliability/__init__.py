from backend.app.reliability.failures import FailureInfo, FailureType, status_for, to_public_error

__all__ = [
    "FailureInfo",
    "FailureType",
    "status_for",
    "to_public_error",
]
