"""
Notas Backend - Access Policy
==============================

What:  The two business rules of the application.
       1. Note cap: once `note_limit` notes exist, the add form is refused.
       2. Opening hours: outside [opening_hour, closing_hour) of local time,
          every request is refused.
How:   Pure functions of (count, hour). The wall clock is read through an
       injectable `clock` callable so tests can pin the hour.
Who:   AccessPolicyMiddleware (time gate on every request) and the add-form
       route (cap check).

Known quirk:
    The rejection text advertises "9h - 18h" while the enforced window is
    16h-18h. Both are kept as they are in production; the message is not
    derived from the configured hours.
"""

import logging
from datetime import datetime
from typing import Callable, List, Optional

from app.config import settings
from app.schemas.note import NoteView, PolicyContext

logger = logging.getLogger(__name__)

OUTSIDE_HOURS_MESSAGE = "Acesso não permitido fora do horário de funcionamento (9h - 18h)"
NOTE_LIMIT_MESSAGE = "Não é possível adicionar mais de 5 notas"


class AccessPolicy:
    """
    Stateless evaluator for the note cap and the opening hours.

    Nothing is cached between requests: callers pass a freshly read count
    every time, so a decision can never be stale across requests.
    """

    def __init__(
        self,
        note_limit: int = settings.note_limit,
        opening_hour: int = settings.opening_hour,
        closing_hour: int = settings.closing_hour,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.note_limit = note_limit
        self.opening_hour = opening_hour
        self.closing_hour = closing_hour
        self.clock = clock or datetime.now

    def current_hour(self) -> int:
        """Local wall-clock hour, 0-23."""
        return self.clock().hour

    def is_allowed_time(self, hour: int) -> bool:
        return self.opening_hour <= hour < self.closing_hour

    def cannot_add_notes(self, count: int) -> bool:
        return count >= self.note_limit

    def build_context(self, hour: int, notes: List[NoteView], count: int) -> PolicyContext:
        """Combines a store snapshot and the hour into the per-request context."""
        return PolicyContext(
            quant_notas=count,
            notas=notes,
            cannot_add_notes=self.cannot_add_notes(count),
            is_allowed_time=self.is_allowed_time(hour),
        )


# ── Singleton Instance ────────────────────────────────────────────────────
access_policy = AccessPolicy()
