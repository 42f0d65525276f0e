"""
Notas Backend - Access Policy Middleware
=========================================

What:  Gate applied to every request before any route handler runs.
How:   1. Read the local hour; outside opening hours, answer 403 at once.
       2. Read count and full note list from the store in one session.
       3. Attach a PolicyContext to `request.state.policy` for the handlers.
Who:   Registered in main.py, innermost of the middleware chain so that
       rejections still get a request ID and an access log line.

Failure mode:
    Any failure while reading the store or building the context answers
    500 "Erro ao contar as notas".
    The clock is checked first, so a closed window never touches the store.
"""

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response

from app.database import async_session_factory
from app.exceptions import DatabaseError
from app.middleware.logging import request_id_var
from app.services.access_policy import OUTSIDE_HOURS_MESSAGE, access_policy
from app.services.note_service import note_service

logger = logging.getLogger(__name__)

GATE_FAILURE_MESSAGE = "Erro ao contar as notas"


class AccessPolicyMiddleware(BaseHTTPMiddleware):
    """
    Enforces the opening hours and precomputes the note cap flag.

    The context is rebuilt from the store on every request; nothing is kept
    on the middleware instance between requests.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = request_id_var.get("")
        hour = access_policy.current_hour()

        if not access_policy.is_allowed_time(hour):
            logger.info(
                "[%s] Rejected %s %s outside opening hours (hour=%d)",
                rid,
                request.method,
                request.url.path,
                hour,
            )
            request.state.rejection = "outside_hours"
            return PlainTextResponse(OUTSIDE_HOURS_MESSAGE, status_code=403)

        # Any failure while building the snapshot gets the same 500 answer
        try:
            async with async_session_factory() as session:
                count = await note_service.count(session)
                notes = await note_service.list_all(session)
            policy = access_policy.build_context(hour, notes, count)
        except Exception as e:
            context = e.context if isinstance(e, DatabaseError) else {"error_type": type(e).__name__}
            logger.error(
                "[%s] Erro ao contar as notas: %s | Context: %s", rid, e, context, exc_info=True
            )
            return PlainTextResponse(GATE_FAILURE_MESSAGE, status_code=500)

        request.state.policy = policy
        return await call_next(request)
