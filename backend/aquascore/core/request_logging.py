from __future__ import annotations

import json
import logging
from time import perf_counter
from uuid import uuid4

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import JSONResponse, Response

from aquascore.services.scan_stats import scan_stats_tracker

logger = logging.getLogger("aquascore.request")


def _log_payload(request: Request, request_id: str, status_code: int, started: float, event: str) -> dict[str, object]:
    return {
        "event": event,
        "request_id": request_id,
        "method": request.method,
        "path": request.url.path,
        "status_code": status_code,
        "duration_ms": round((perf_counter() - started) * 1000, 2),
    }


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next) -> Response:  # type: ignore[override]
        request_id = request.headers.get("X-Request-ID") or str(uuid4())
        request.state.request_id = request_id
        started = perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            scan_stats_tracker.record_request(status_code=500)
            logger.exception(json.dumps(_log_payload(request, request_id, 500, started, "request_error")))
            response = JSONResponse(
                status_code=500,
                content={"detail": "Internal server error", "request_id": request_id},
            )
        else:
            status_code = response.status_code
            scan_stats_tracker.record_request(status_code=status_code)
            payload = json.dumps(_log_payload(request, request_id, status_code, started, "request_completed"))
            if status_code >= 500:
                logger.error(payload)
            elif status_code >= 400:
                logger.warning(payload)
            else:
                logger.info(payload)

        response.headers["X-Request-ID"] = request_id
        return response
