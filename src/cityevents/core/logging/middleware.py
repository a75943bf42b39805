"""
Request ID middleware for FastAPI / Starlette.

Uses the incoming `X-Request-ID` header when present (truncated, printable
characters only), otherwise generates a UUID4. The id is stored in the logging
contextvar for the duration of the request and echoed on the response.
"""

import uuid
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from .filters import set_request_id, reset_request_id

REQUEST_ID_HEADER = "X-Request-ID"
MAX_REQUEST_ID_LENGTH = 64


def _sanitize(raw: str | None) -> str | None:
    if not raw:
        return None
    # drop control characters (log injection via newlines) and cap the length
    cleaned = "".join(ch for ch in raw if ch.isprintable())[:MAX_REQUEST_ID_LENGTH]
    return cleaned or None


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(self, request: Request, call_next):
        rid = _sanitize(request.headers.get(REQUEST_ID_HEADER)) or str(uuid.uuid4())

        token = set_request_id(rid)
        try:
            response = await call_next(request)
            response.headers[REQUEST_ID_HEADER] = rid
            return response
        finally:
            reset_request_id(token)
