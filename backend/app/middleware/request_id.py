"""
Request ID middleware.

Reuses a safe incoming X-Request-ID or mints a uuid4, echoes it on the
response, and logs one line per request. Bodies (formulas, credentials) are
never logged.
"""

import logging
import re
import time
import uuid
from typing import Optional

logger = logging.getLogger(__name__)

_HEADER = b"x-request-id"
_SAFE_REQUEST_ID_PATTERN = re.compile(r"^[a-fA-F0-9\-]{1,64}$")


def _incoming_request_id(scope) -> Optional[str]:
    for name, value in scope.get("headers", []):
        if name.lower() != _HEADER:
            continue
        candidate = value.decode("utf-8", errors="replace").strip()
        if candidate and _SAFE_REQUEST_ID_PATTERN.match(candidate):
            return candidate
    return None


class RequestIdMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_time = time.monotonic()
        request_id = _incoming_request_id(scope) or str(uuid.uuid4())
        scope.setdefault("state", {})["request_id"] = request_id
        status_code: Optional[int] = None

        async def send_wrapper(message):
            nonlocal status_code
            if message["type"] == "http.response.start":
                status_code = message.get("status", 0)
                headers = list(message.get("headers", []))
                if not any(h[0].lower() == _HEADER for h in headers):
                    headers.append((_HEADER, request_id.encode("utf-8")))
                message = {**message, "headers": headers}
            await send(message)

        try:
            await self.app(scope, receive, send_wrapper)
        finally:
            logger.info(
                "[HTTP] request",
                extra={
                    "method": scope.get("method", "?"),
                    "path": scope.get("path", "?"),
                    "status": status_code,
                    "duration_ms": int((time.monotonic() - start_time) * 1000),
                    "request_id": request_id,
                },
            )
