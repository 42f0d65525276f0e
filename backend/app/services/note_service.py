"""
Notas Backend - Note Service (Store Operations)
================================================

What:  The four operations on the `Notas` table: count, list-all, create and
       delete-all.
Why:   Keeps SQLAlchemy out of the middleware and route handlers, and turns
       every driver failure into a DatabaseError carrying the fixed message
       for that operation.
Who:   AccessPolicyMiddleware (count, list_all) and route handlers
       (create, delete_all).

Transactions:
    The two writes commit before returning, so a failed commit is reported
    by the request that caused it, and the redirect that follows already
    sees the change. Reads never commit. Create does not re-check the note cap; the count-then-create sequence is
    not atomic, so concurrent submissions can exceed the cap.
"""

import logging
from typing import List, Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from app.exceptions import DatabaseError
from app.models.note import Note
from app.schemas.note import NoteView

logger = logging.getLogger(__name__)


class NoteService:
    """
    Business logic layer for note persistence.

    Error Handling Strategy:
        Any SQLAlchemyError is logged and re-raised as DatabaseError with a
        user-facing message. There is no retry and no distinction between
        transient and permanent failures.
    """

    async def count(self, db: AsyncSession) -> int:
        """Total number of stored notes."""
        try:
            result = await db.execute(select(func.count(Note.id)))
            return result.scalar() or 0
        except SQLAlchemyError as e:
            logger.error("Database error counting notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Erro ao contar as notas",
                context={"error_type": type(e).__name__},
            ) from e

    async def list_all(self, db: AsyncSession) -> List[NoteView]:
        """Every note, oldest first."""
        try:
            result = await db.execute(select(Note).order_by(Note.id))
            return [NoteView.model_validate(note) for note in result.scalars().all()]
        except SQLAlchemyError as e:
            logger.error("Database error listing notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Erro ao carregar as notas",
                context={"error_type": type(e).__name__},
            ) from e

    async def create(
        self,
        db: AsyncSession,
        titulo: Optional[str],
        conteudo: Optional[str],
    ) -> Note:
        """
        Insert one note.

        Both fields are passed through as received. A missing field becomes
        NULL and is rejected by the NOT NULL constraint on flush, which
        surfaces as DatabaseError like any other store failure.

        Raises:
            DatabaseError: insert failed (constraint violation, I/O error, ...)
        """
        note = Note(titulo=titulo, conteudo=conteudo)
        try:
            db.add(note)
            await db.flush()
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error creating note: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Erro ao adicionar nota",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Note %s created", note.id)
        return note

    async def delete_all(self, db: AsyncSession) -> int:
        """
        Delete every note. Irreversible; a no-op on an empty table.

        Returns:
            Number of rows removed
        """
        try:
            result = await db.execute(delete(Note))
            await db.commit()
        except SQLAlchemyError as e:
            logger.error("Database error deleting notes: %s", str(e), exc_info=True)
            raise DatabaseError(
                message="Erro ao apagar as notas",
                context={"error_type": type(e).__name__},
            ) from e

        logger.info("Todas as notas foram apagadas. (%d removed)", result.rowcount)
        return result.rowcount


# ── Singleton Instance ────────────────────────────────────────────────────
# NoteService is stateless; the session is passed to every call
note_service = NoteService()
