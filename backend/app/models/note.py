"""
Notas Backend - Note SQLAlchemy Model
======================================

What:  ORM model representing the `Notas` table in SQLite.
Why:   Maps Python objects to database rows for type-safe database operations.
Who:   Used by NoteService for count / list / create / delete-all.

Table Design:
    - id: INTEGER PRIMARY KEY AUTOINCREMENT, so ids are never reused after
      a delete-all
    - titulo / conteudo: NOT NULL; this constraint is the only validation a
      submitted note goes through
    - createdAt / updatedAt: filled by the store on insert; notes are never
      updated, so both always hold the creation time
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.database import Base


class Note(Base):
    """
    A title + body record, the only persisted entity.

    Lifecycle:
        1. Created by POST /adicionar_nota
        2. Never updated
        3. Destroyed only in bulk by GET /apagar_notas
    """

    __tablename__ = "Notas"
    __table_args__ = {"sqlite_autoincrement": True}

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    titulo: Mapped[str] = mapped_column(String(255), nullable=False)

    conteudo: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        "createdAt",
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
    )
    updated_at: Mapped[datetime] = mapped_column(
        "updatedAt",
        DateTime,
        nullable=False,
        server_default=func.current_timestamp(),
    )

    def __repr__(self) -> str:
        """Developer-friendly string representation for debugging."""
        return f"<Note(id={self.id}, titulo='{self.titulo}')>"
