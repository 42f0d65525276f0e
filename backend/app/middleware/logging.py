"""
Notas Backend - Access Log Middleware
======================================

What:  Outermost middleware. Tags the request with a short ID and writes one
       access line per request, including what the access policy decided.
How:   The ID comes from the client's X-Request-ID header or a fresh UUID4
       prefix; it is kept in `request_id_var` for other log lines and echoed
       in the response header. After the handler runs, the line reports
       either the rejection reason or the note count seen by the gate.

Example lines:
    GET /ler 200 3.1ms [1a2b3c4d] notas=3
    GET /adicionar_nota 403 2.0ms [5e6f7a8b] rejected=note_limit
    POST /adicionar_nota 403 0.4ms [9c0d1e2f] rejected=outside_hours

Form bodies (note titles and contents) are never logged.
"""

import logging
import time
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger("notas.access")

# Coroutine-local storage for the current request ID
request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def policy_outcome(request: Request) -> str:
    """Summarizes the access policy result stored on the request state."""
    rejection = getattr(request.state, "rejection", None)
    if rejection:
        return f"rejected={rejection}"
    policy = getattr(request.state, "policy", None)
    if policy is not None:
        return f"notas={policy.quant_notas}"
    return "gate=not-reached"


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Assigns the request ID and logs status, duration and policy outcome."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request.headers.get("X-Request-ID") or uuid.uuid4().hex[:8]
        request_id_var.set(rid)
        started = time.perf_counter()

        response = await call_next(request)

        elapsed_ms = (time.perf_counter() - started) * 1000
        response.headers["X-Request-ID"] = rid

        # 403 is a normal policy answer here, so only 5xx is raised above INFO
        level = logging.ERROR if response.status_code >= 500 else logging.INFO
        outcome = policy_outcome(request)
        logger.log(
            level,
            "%s %s %d %.1fms [%s] %s",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
            rid,
            outcome,
            extra={"request_id": rid, "policy_outcome": outcome},
        )
        return response
