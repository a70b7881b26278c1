from __future__ import annotations

import uuid
from typing import Optional

from fastapi import Request

from backend.app.config.settings import get_settings


def get_request_id(request: Optional[Request]) -> str:
    if request is None:
        return str(uuid.uuid4())
    state_rid = request.scope.get("state", {}).get("request_id")
    if isinstance(state_rid, str) and state_rid:
        return state_rid
    rid = request.headers.get(get_settings().request_id_header)
    if rid and rid.strip():
        return rid.strip()
    return str(uuid.uuid4())


__all__ = ["get_request_id"]
