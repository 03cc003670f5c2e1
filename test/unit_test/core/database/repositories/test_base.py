"""Unit tests for the shared SQLModel repository.

Tests repository operations with mocked database session to ensure
CRUD behaviour works correctly without real database dependencies.
"""

from __future__ import annotations

from unittest.mock import AsyncMock, MagicMock

import pytest

from cdi_platform.core.database.entities import Profile
from cdi_platform.core.database.repositories.base import QueryBuilder
from cdi_platform.core.database.repositories.profiles import ProfileRepository
from test.factories import make_profile, make_tool


class TestSqlModelRepository:
    """Tests for SqlModelRepository operations."""

    @pytest.fixture
    def mock_session(self):
        """Mock async database session."""
        session = AsyncMock()
        session.add = MagicMock()
        session.add_all = MagicMock()
        session.commit = AsyncMock()
        session.refresh = AsyncMock()
        session.delete = AsyncMock()
        # Make execute return the mock result directly, not a coroutine
        mock_result = AsyncMock()
        mock_result.scalar_one_or_none = MagicMock()
        mock_result.scalars = MagicMock()
        mock_result.scalars.return_value.all = MagicMock(return_value=[])
        session.execute = AsyncMock(return_value=mock_result)
        return session

    @pytest.fixture
    def repository(self, mock_session):
        return ProfileRepository(mock_session)

    async def test_create_success(self, repository, mock_session):
        profile = make_profile()

        result = await repository.create(profile)

        mock_session.add.assert_called_once_with(profile)
        mock_session.commit.assert_called_once()
        mock_session.refresh.assert_called_once_with(profile)
        assert result is profile

    async def test_get_by_id_found(self, repository, mock_session):
        profile = make_profile()
        mock_session.execute.return_value.scalar_one_or_none.return_value = profile

        result = await repository.get_by_id(profile.id)

        mock_session.execute.assert_called_once()
        assert result is profile

    async def test_get_by_id_not_found(self, repository, mock_session):
        mock_session.execute.return_value.scalar_one_or_none.return_value = None
        assert await repository.get_by_id("missing") is None

    async def test_get_many_skips_query_for_empty_ids(self, repository, mock_session):
        assert await repository.get_many([None, ""]) == {}
        mock_session.execute.assert_not_called()

    async def test_get_many_keys_by_id(self, repository, mock_session):
        first, second = make_profile(), make_profile(full_name="John Roe")
        mock_session.execute.return_value.scalars.return_value.all.return_value = [first, second]

        result = await repository.get_many([first.id, second.id, first.id])

        assert result == {first.id: first, second.id: second}

    async def test_update_commits_and_refreshes(self, repository, mock_session):
        profile = make_profile()
        await repository.update(profile)
        mock_session.add.assert_called_once_with(profile)
        mock_session.commit.assert_called_once()
        mock_session.refresh.assert_called_once_with(profile)

    async def test_save_all_commits_once(self, repository, mock_session):
        profile, tool = make_profile(), make_tool()

        await repository.save_all([profile, tool])

        mock_session.add_all.assert_called_once_with([profile, tool])
        mock_session.commit.assert_called_once()
        assert mock_session.refresh.call_count == 2

    async def test_delete_existing(self, repository, mock_session):
        profile = make_profile()
        mock_session.execute.return_value.scalar_one_or_none.return_value = profile

        assert await repository.delete(profile.id) is True
        mock_session.delete.assert_called_once_with(profile)
        mock_session.commit.assert_called_once()

    async def test_delete_missing(self, repository, mock_session):
        mock_session.execute.return_value.scalar_one_or_none.return_value = None

        assert await repository.delete("missing") is False
        mock_session.delete.assert_not_called()

    async def test_list_returns_rows(self, repository, mock_session):
        rows = [make_profile()]
        mock_session.execute.return_value.scalars.return_value.all.return_value = rows

        assert await repository.list(limit=10, offset=0, filters={"email": "jane@example.com"}) == rows


class TestQueryBuilder:
    def test_filters_skip_none_and_unknown_fields(self):
        from sqlmodel import select

        stmt = QueryBuilder.apply_filters(
            select(Profile), Profile, {"email": "a@b.c", "business_name": None, "nope": 1}
        )
        sql = str(stmt)
        assert "profiles.email" in sql
        assert "business_name =" not in sql
        assert "nope" not in sql

    def test_pagination(self):
        from sqlmodel import select

        sql = str(QueryBuilder.apply_pagination(select(Profile), 5, 10))
        assert "LIMIT" in sql
        assert "OFFSET" in sql
