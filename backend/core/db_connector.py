"""
Database connector — lazily established async SQLAlchemy engine shared by
schema loading and query execution.
Supports SQLite (aiosqlite), PostgreSQL (asyncpg) and SQL Server (aioodbc).
"""
import asyncio
import logging
from typing import Any, Callable, Optional

from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncEngine, create_async_engine

from core.errors import QueryExecutionError
from models.chat import QueryResult
from models.connection import ConnectionRequest

logger = logging.getLogger(__name__)


class Database:
    """One engine per process; created on first use, rebuilt if establishment failed."""

    def __init__(self, req: ConnectionRequest, query_timeout: Optional[float] = 30.0):
        self.req = req
        self.query_timeout = query_timeout
        self._engine: Optional[AsyncEngine] = None
        self._lock = asyncio.Lock()

    async def get_engine(self) -> AsyncEngine:
        """Build and test the engine. Raises ValueError if the store is unreachable."""
        if self._engine is not None:
            return self._engine
        async with self._lock:
            if self._engine is None:
                self._engine = await _create_engine(self.req)
        return self._engine

    async def run_sync(self, fn: Callable[[Any], Any]) -> Any:
        """Run a sync function (e.g. an Inspector call) against a pooled connection."""
        engine = await self.get_engine()
        async with engine.connect() as conn:
            return await conn.run_sync(fn)

    async def run_query(self, sql: str) -> QueryResult:
        """
        Execute the statement exactly as given and return its rows as dicts.
        No coercion, no row cap beyond what the statement asks for.
        """
        try:
            engine = await self.get_engine()
        except ValueError as e:
            raise QueryExecutionError(str(e)) from e

        try:
            return await asyncio.wait_for(_fetch_rows(engine, sql), timeout=self.query_timeout)
        except asyncio.TimeoutError as e:
            logger.warning("Query timed out after %ss", self.query_timeout)
            raise QueryExecutionError(f"Query timed out after {self.query_timeout}s") from e
        except SQLAlchemyError as e:
            logger.warning("Query failed: %s", e)
            raise QueryExecutionError(f"SQL error: {getattr(e, 'orig', None) or e}") from e

    async def ping(self) -> tuple[bool, Optional[str]]:
        """Returns (True, None) if the store answers SELECT 1, (False, error) otherwise."""
        try:
            engine = await self.get_engine()
            async with engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True, None
        except (ValueError, SQLAlchemyError) as e:
            return False, str(e)

    async def dispose(self) -> None:
        if self._engine is not None:
            await self._engine.dispose()
            self._engine = None


async def _create_engine(req: ConnectionRequest) -> AsyncEngine:
    try:
        # Raises ImportError when the dialect's async driver isn't installed
        engine = create_async_engine(req.get_sqlalchemy_url(), pool_pre_ping=True)
    except Exception as e:
        raise ValueError(f"Could not create database engine: {e}") from e

    # Validate the connection immediately
    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
    except Exception as e:
        await engine.dispose()
        raise ValueError(f"Could not connect to database: {e}") from e
    logger.info("Connected to %s database", req.db_type)
    return engine


async def _fetch_rows(engine: AsyncEngine, sql: str) -> QueryResult:
    async with engine.connect() as conn:
        result = await conn.exec_driver_sql(sql)
        if not result.returns_rows:
            return []
        return [dict(row._mapping) for row in result.fetchall()]
