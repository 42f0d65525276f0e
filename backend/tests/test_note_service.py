"""
Notas Backend - Note Service Unit Tests
========================================

What:  Tests for NoteService store operations (count, list, create, delete-all).
How:   Mock sessions for the error paths, a real SQLite session for the rest.

What we test:
    ✅ Count and list on an empty and a filled table
    ✅ Create assigns increasing ids; missing fields fail as DatabaseError
    ✅ Delete-all empties the table and is idempotent
    ✅ SQLAlchemy errors become DatabaseError with the operation's message
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from app.exceptions import DatabaseError
from app.services.note_service import NoteService


class TestNoteServiceWithMocks:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_count_returns_scalar(self, mock_db_session):
        result = MagicMock()
        result.scalar.return_value = 3
        mock_db_session.execute.return_value = result

        assert await self.service.count(mock_db_session) == 3

    @pytest.mark.asyncio
    async def test_count_none_is_zero(self, mock_db_session):
        result = MagicMock()
        result.scalar.return_value = None
        mock_db_session.execute.return_value = result

        assert await self.service.count(mock_db_session) == 0

    @pytest.mark.asyncio
    async def test_list_all_converts_rows(self, mock_db_session):
        rows = [
            SimpleNamespace(id=1, titulo="Compras", conteudo="Pão"),
            SimpleNamespace(id=2, titulo="Trabalho", conteudo="Relatório"),
        ]
        result = MagicMock()
        result.scalars.return_value.all.return_value = rows
        mock_db_session.execute.return_value = result

        notes = await self.service.list_all(mock_db_session)

        assert [(n.id, n.titulo, n.conteudo) for n in notes] == [
            (1, "Compras", "Pão"),
            (2, "Trabalho", "Relatório"),
        ]

    @pytest.mark.asyncio
    async def test_count_failure_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(DatabaseError, match="Erro ao contar as notas") as exc_info:
            await self.service.count(mock_db_session)
        assert exc_info.value.context == {"error_type": "OperationalError"}

    @pytest.mark.asyncio
    async def test_list_failure_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("SELECT", {}, Exception("no such table"))
        )

        with pytest.raises(DatabaseError, match="Erro ao carregar as notas"):
            await self.service.list_all(mock_db_session)

    @pytest.mark.asyncio
    async def test_create_failure_wrapped(self, mock_db_session):
        mock_db_session.flush = AsyncMock(
            side_effect=IntegrityError("INSERT", {}, Exception("NOT NULL constraint failed"))
        )

        with pytest.raises(DatabaseError, match="Erro ao adicionar nota"):
            await self.service.create(mock_db_session, titulo=None, conteudo="x")
        mock_db_session.add.assert_called_once()

    @pytest.mark.asyncio
    async def test_create_commits_before_returning(self, mock_db_session):
        await self.service.create(mock_db_session, titulo="a", conteudo="b")

        mock_db_session.flush.assert_awaited_once()
        mock_db_session.commit.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_create_commit_failure_wrapped(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("disk I/O error"))
        )

        with pytest.raises(DatabaseError, match="Erro ao adicionar nota"):
            await self.service.create(mock_db_session, titulo="a", conteudo="b")

    @pytest.mark.asyncio
    async def test_delete_commit_failure_wrapped(self, mock_db_session):
        mock_db_session.commit = AsyncMock(
            side_effect=OperationalError("COMMIT", {}, Exception("database is locked"))
        )

        with pytest.raises(DatabaseError, match="Erro ao apagar as notas"):
            await self.service.delete_all(mock_db_session)

    @pytest.mark.asyncio
    async def test_delete_failure_wrapped(self, mock_db_session):
        mock_db_session.execute = AsyncMock(
            side_effect=OperationalError("DELETE", {}, Exception("database is locked"))
        )

        with pytest.raises(DatabaseError, match="Erro ao apagar as notas"):
            await self.service.delete_all(mock_db_session)


class TestNoteServiceWithSQLite:

    def setup_method(self):
        self.service = NoteService()

    @pytest.mark.asyncio
    async def test_empty_table(self, db_session):
        assert await self.service.count(db_session) == 0
        assert await self.service.list_all(db_session) == []

    @pytest.mark.asyncio
    async def test_create_then_list(self, db_session):
        first = await self.service.create(db_session, titulo="Um", conteudo="Primeira")
        second = await self.service.create(db_session, titulo="Dois", conteudo="Segunda")
        await db_session.commit()

        assert second.id > first.id
        assert await self.service.count(db_session) == 2
        notes = await self.service.list_all(db_session)
        assert [n.titulo for n in notes] == ["Um", "Dois"]

    @pytest.mark.asyncio
    async def test_create_accepts_empty_strings(self, db_session):
        """Only NULL is refused by the store, not empty text."""
        await self.service.create(db_session, titulo="", conteudo="")
        await db_session.commit()

        assert await self.service.count(db_session) == 1

    @pytest.mark.asyncio
    async def test_create_missing_body_fails(self, db_session):
        with pytest.raises(DatabaseError, match="Erro ao adicionar nota"):
            await self.service.create(db_session, titulo="Sem conteúdo", conteudo=None)
        await db_session.rollback()

        assert await self.service.count(db_session) == 0

    @pytest.mark.asyncio
    async def test_delete_all_is_idempotent(self, db_session):
        for i in range(3):
            await self.service.create(db_session, titulo=f"t{i}", conteudo=f"c{i}")
        await db_session.commit()

        assert await self.service.delete_all(db_session) == 3
        await db_session.commit()
        assert await self.service.count(db_session) == 0

        assert await self.service.delete_all(db_session) == 0
        await db_session.commit()
        assert await self.service.count(db_session) == 0

    @pytest.mark.asyncio
    async def test_ids_not_reused_after_delete_all(self, db_session):
        note = await self.service.create(db_session, titulo="a", conteudo="b")
        await db_session.commit()
        await self.service.delete_all(db_session)
        await db_session.commit()

        again = await self.service.create(db_session, titulo="c", conteudo="d")
        await db_session.commit()

        assert again.id > note.id
