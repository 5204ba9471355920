"""Tests for the asyncpg post repository using a mocked pool."""

from contextlib import asynccontextmanager
from datetime import datetime, timezone
from unittest.mock import AsyncMock, MagicMock
from uuid import UUID

import asyncpg
import pytest

from pagewise.db import PostgresPostRepository, create_repository, post_paginator
from pagewise.db.posts import build_list_query
from pagewise.errors.problem_details import (
    ConflictError, InternalServerError, InvalidCursorError, NotFoundError
)
from pagewise.models.posts import PostCreate, PostUpdate
from pagewise.pagination import Direction, PaginationRequest


POST_ID = "0b6f0a7e-0c57-4f38-9a1f-4c3f7f0f2b11"
CREATED = datetime(2024, 1, 15, 10, 30, tzinfo=timezone.utc)


def make_row(post_id=POST_ID, title="Hello"):
    return {
        "id": post_id,
        "title": title,
        "content": "",
        "published": False,
        "created_at": CREATED,
        "updated_at": CREATED
    }


@pytest.fixture
def conn():
    connection = MagicMock()
    connection.fetch = AsyncMock(return_value=[])
    connection.fetchrow = AsyncMock(return_value=None)
    connection.fetchval = AsyncMock(return_value=0)
    connection.execute = AsyncMock(return_value="DELETE 0")
    return connection


@pytest.fixture
def repository(conn):
    pool = MagicMock()

    @asynccontextmanager
    async def acquire():
        yield conn

    pool.acquire = acquire
    return PostgresPostRepository(get_pool=AsyncMock(return_value=pool))


class TestBuildListQuery:
    """Test keyset query construction."""

    def test_first_page_forward(self):
        query, params = build_list_query(None, Direction.FORWARD)

        assert params == []
        assert "WHERE" not in query
        assert "ORDER BY id ASC" in query
        assert "LIMIT $1" in query

    def test_forward_after_cursor(self):
        cursor_id = UUID(POST_ID)
        query, params = build_list_query(cursor_id, Direction.FORWARD)

        assert params == [cursor_id]
        assert "WHERE id > $1::uuid" in query
        assert "ORDER BY id ASC" in query
        assert "LIMIT $2" in query

    def test_backward_before_cursor(self):
        query, params = build_list_query(UUID(POST_ID), Direction.BACKWARD)

        assert "WHERE id < $1::uuid" in query
        assert "ORDER BY id DESC" in query


class TestPostgresPostRepository:
    """Test repository methods against a mocked connection."""

    @pytest.mark.asyncio
    async def test_create(self, repository, conn):
        conn.fetchrow.return_value = make_row()

        post = await repository.create(PostCreate(title="Hello"))

        assert post.id == POST_ID
        args = conn.fetchrow.call_args.args
        assert "INSERT INTO posts" in args[0]
        assert args[1:] == ("Hello", "", False)

    @pytest.mark.asyncio
    async def test_create_unique_violation(self, repository, conn):
        conn.fetchrow.side_effect = asyncpg.UniqueViolationError("duplicate key")

        with pytest.raises(ConflictError):
            await repository.create(PostCreate(title="Hello"))

    @pytest.mark.asyncio
    async def test_create_database_error(self, repository, conn):
        conn.fetchrow.side_effect = asyncpg.PostgresError("boom")

        with pytest.raises(InternalServerError):
            await repository.create(PostCreate(title="Hello"))

    @pytest.mark.asyncio
    async def test_get(self, repository, conn):
        conn.fetchrow.return_value = make_row()

        post = await repository.get(POST_ID)

        assert post.title == "Hello"
        assert conn.fetchrow.call_args.args[1] == UUID(POST_ID)

    @pytest.mark.asyncio
    async def test_get_missing(self, repository, conn):
        with pytest.raises(NotFoundError):
            await repository.get(POST_ID)

    @pytest.mark.asyncio
    async def test_get_invalid_uuid_skips_database(self, repository, conn):
        with pytest.raises(NotFoundError):
            await repository.get("not-a-uuid")
        conn.fetchrow.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_builds_partial_set(self, repository, conn):
        conn.fetchrow.return_value = make_row(title="Renamed")

        post = await repository.update(POST_ID, PostUpdate(title="Renamed"))

        query, *params = conn.fetchrow.call_args.args
        assert "updated_at = now()" in query
        assert "title = $2" in query
        assert "content" not in query.split("RETURNING")[0]
        assert params == [UUID(POST_ID), "Renamed"]
        assert post.title == "Renamed"

    @pytest.mark.asyncio
    async def test_update_missing(self, repository, conn):
        with pytest.raises(NotFoundError):
            await repository.update(POST_ID, PostUpdate(published=True))

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status, expected", [("DELETE 1", True), ("DELETE 0", False)])
    async def test_delete(self, repository, conn, status, expected):
        conn.execute.return_value = status
        assert await repository.delete(POST_ID) is expected

    @pytest.mark.asyncio
    async def test_delete_invalid_uuid(self, repository, conn):
        assert await repository.delete("nope") is False
        conn.execute.assert_not_called()

    @pytest.mark.asyncio
    async def test_count(self, repository, conn):
        conn.fetchval.return_value = 3
        assert await repository.count() == 3

    @pytest.mark.asyncio
    async def test_list_page_fetches_limit_plus_one(self, repository, conn):
        ids = [f"00000000-0000-0000-0000-00000000000{i}" for i in range(1, 4)]
        conn.fetch.return_value = [make_row(post_id=i) for i in ids]

        page = await repository.list_page(PaginationRequest(limit=2))

        assert conn.fetch.call_args.args[-1] == 3
        assert [p.id for p in page.data] == ids[:2]
        assert page.has_next_page is True
        assert post_paginator.decode(page.next_cursor).value == ids[1]

    @pytest.mark.asyncio
    async def test_list_page_with_backward_cursor(self, repository, conn):
        conn.fetch.return_value = [make_row()]
        cursor = post_paginator.encode("ffffffff-0000-0000-0000-000000000000", Direction.BACKWARD)

        page = await repository.list_page(PaginationRequest(limit=2, cursor=cursor))

        query, cursor_id, limit = conn.fetch.call_args.args
        assert "id < $1::uuid" in query
        assert cursor_id == UUID("ffffffff-0000-0000-0000-000000000000")
        assert limit == 3
        assert page.has_next_page is True
        assert page.has_prev_page is False

    @pytest.mark.asyncio
    async def test_list_page_cursor_not_a_uuid(self, repository, conn):
        cursor = post_paginator.encode("post-001", Direction.FORWARD)

        with pytest.raises(InvalidCursorError):
            await repository.list_page(PaginationRequest(limit=2, cursor=cursor))
        conn.fetch.assert_not_called()

    @pytest.mark.asyncio
    async def test_list_page_database_error(self, repository, conn):
        conn.fetch.side_effect = asyncpg.PostgresError("boom")

        with pytest.raises(InternalServerError):
            await repository.list_page(PaginationRequest(limit=2))


def test_create_repository_postgres():
    assert isinstance(create_repository("postgres"), PostgresPostRepository)
