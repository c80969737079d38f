"""Unit tests for the SQLite connection pool."""

from pathlib import Path

import asyncio

import aiosqlite
import pytest

from outletstock.config.settings import StorageSettings

from outletstock.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_transaction,
    set_pool,
)


@pytest.fixture
async def pool(temp_db_path: Path):
    pool = ConnectionPool(temp_db_path, pool_size=2)
    set_pool(pool)
    yield pool
    await close_pool()


class TestConnectionPool:
    def test_defaults(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path)

        assert pool.pool_size == 5
        assert pool.busy_timeout == 30000
        assert pool.initialized is False

    async def test_initialize_opens_connections(self, pool: ConnectionPool):
        await pool.initialize()
        await pool.initialize()

        assert pool.initialized is True
        assert len(pool._connections) == 2

    async def test_acquire_initializes_lazily(self, pool: ConnectionPool):
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA journal_mode")
            row = await cursor.fetchone()

        assert row[0] == "wal"
        assert pool.initialized is True

    def test_from_settings(self, tmp_path: Path):
        storage = StorageSettings(data_dir=tmp_path, db_name="s.db", pool_size=3, busy_timeout=500)

        pool = ConnectionPool.from_settings(storage)

        assert pool.db_path == tmp_path / "s.db"
        assert pool.pool_size == 3
        assert pool.busy_timeout == 500

    async def test_connections_apply_busy_timeout(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=1, busy_timeout=1234)
        async with pool.acquire() as conn:
            cursor = await conn.execute("PRAGMA busy_timeout")
            row = await cursor.fetchone()
        await pool.close()

        assert row[0] == 1234

    async def test_close_resets(self, pool: ConnectionPool):
        await pool.initialize()

        await pool.close()

        assert pool.initialized is False
        assert pool._connections == []


class TestGlobalHelpers:
    async def test_transaction_commits(self, pool: ConnectionPool):
        async with get_transaction() as conn:
            await conn.execute("CREATE TABLE t (x INTEGER)")
            await conn.execute("INSERT INTO t VALUES (1)")

        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 1

    async def test_transaction_rolls_back_on_error(self, pool: ConnectionPool):
        async with get_transaction() as conn:
            await conn.execute("CREATE TABLE t (x INTEGER UNIQUE)")

        with pytest.raises(aiosqlite.IntegrityError):
            async with get_transaction() as conn:
                await conn.execute("INSERT INTO t VALUES (1)")
                await conn.execute("INSERT INTO t VALUES (1)")

        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 0

    async def test_reads_outside_transaction_autocommit(self, pool: ConnectionPool):
        async with get_connection() as conn:
            await conn.execute("SELECT 1")
            assert conn.in_transaction is False

        async with get_transaction() as conn:
            assert conn.in_transaction is True

    async def test_writers_run_one_at_a_time(self, pool: ConnectionPool):
        async with get_transaction() as conn:
            await conn.execute("CREATE TABLE t (x INTEGER)")

        first_open = asyncio.Event()
        release_first = asyncio.Event()
        order: list[str] = []

        async def first():
            async with get_transaction() as conn:
                order.append("first-start")
                first_open.set()
                await release_first.wait()
                await conn.execute("INSERT INTO t VALUES (1)")
                order.append("first-end")

        async def second():
            await first_open.wait()
            async with get_transaction() as conn:
                order.append("second-start")
                await conn.execute("INSERT INTO t VALUES (2)")

        task_first = asyncio.create_task(first())
        task_second = asyncio.create_task(second())
        await first_open.wait()
        await asyncio.sleep(0.05)
        assert order == ["first-start"]

        release_first.set()
        await asyncio.gather(task_first, task_second)

        assert order == ["first-start", "first-end", "second-start"]
        async with get_connection() as conn:
            cursor = await conn.execute("SELECT COUNT(*) FROM t")
            assert (await cursor.fetchone())[0] == 2
