from __future__ import annotations

import logging
import re
import time
from typing import Callable
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

log = logging.getLogger("transmeta.api")

_SAFE_REQUEST_ID = re.compile(r"[A-Za-z0-9._-]+")


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Tag every request with a request id and emit one "api_request" record.

    A client-supplied X-Request-ID is echoed back only when it is short and
    made of [A-Za-z0-9._-]; otherwise a fresh id is generated. Request
    bodies and upload filenames are never logged.
    """

    def __init__(self, app, *, header_name: str = "X-Request-ID", max_len: int = 128):
        super().__init__(app)
        self._header_name = header_name
        self._max_len = max_len

    def _request_id(self, request: Request) -> str:
        supplied = request.headers.get(self._header_name, "")
        if supplied and len(supplied) <= self._max_len and _SAFE_REQUEST_ID.fullmatch(supplied):
            return supplied
        return uuid4().hex

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = self._request_id(request)
        request.state.request_id = rid
        started = time.perf_counter()
        status_code = 500
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            response.headers[self._header_name] = rid
            return response
        finally:
            log.info(
                "api_request",
                extra={
                    "request_id": rid,
                    "method": request.method,
                    "path": request.url.path,
                    "status_code": status_code,
                    "content_length": request.headers.get("content-length"),
                    "duration_ms": round((time.perf_counter() - started) * 1000, 1),
                },
            )
