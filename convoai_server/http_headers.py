"""
Response header middleware: no-cache, CORS and timestamp.

Each method of HttpHeaders is an ASGI "http" middleware function suitable for
``app.middleware("http")``. The allowed origins are fixed when the instance is
created, from the CORS_ALLOW_ORIGIN setting ("*" or a comma-separated list).
"""

import logging
from datetime import datetime, timezone

from fastapi import Request
from fastapi.responses import JSONResponse, Response

from convoai_server.config.constants import LOGGER_NAME

logger = logging.getLogger(LOGGER_NAME)

ALLOWED_METHODS = "GET, POST, OPTIONS"
ALLOWED_HEADERS = "Origin, Content-Type, Authorization, Accept"


class HttpHeaders:
    def __init__(self, allow_origin: str):
        self.allow_origin = allow_origin
        self._origins = {o.strip() for o in allow_origin.split(",") if o.strip()}

    def is_origin_allowed(self, origin: str) -> bool:
        if not origin:
            return False
        if "*" in self._origins:
            return True
        return origin in self._origins

    async def no_cache(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["Cache-Control"] = "private, no-cache, no-store, must-revalidate"
        response.headers["Expires"] = "-1"
        response.headers["Pragma"] = "no-cache"
        return response

    async def cors(self, request: Request, call_next):
        origin = request.headers.get("origin", "")

        # Non-browser callers send no Origin header
        if not origin:
            if request.method == "OPTIONS":
                return Response(status_code=204)
            return await call_next(request)

        if not self.is_origin_allowed(origin):
            logger.warning(f"Rejected request from disallowed origin {origin}")
            return JSONResponse(status_code=403, content={"error": "Origin not allowed"})

        if request.method == "OPTIONS":
            response = Response(status_code=204)
        else:
            response = await call_next(request)

        response.headers["Access-Control-Allow-Origin"] = origin
        response.headers["Access-Control-Allow-Methods"] = ALLOWED_METHODS
        response.headers["Access-Control-Allow-Headers"] = ALLOWED_HEADERS
        response.headers["Access-Control-Allow-Credentials"] = "true"
        return response

    async def timestamp(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Timestamp"] = (
            datetime.now(timezone.utc).replace(microsecond=0).isoformat().replace("+00:00", "Z")
        )
        return response
