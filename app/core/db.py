# app/core/db.py

import ssl
from typing import AsyncGenerator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker, declarative_base
from sqlalchemy.pool import NullPool

from app.core.config import (
    DATABASE_URL,
    DB_TYPE,
    DB_POOL_SIZE,
    DB_MAX_OVERFLOW,
    DB_POOL_TIMEOUT,
    DB_SSL_VERIFY,
    DB_ECHO_POOL,
    APP_ENV,
)

Base = declarative_base()

# Seconds a SQLite writer waits for a competing transaction before failing
SQLITE_BUSY_TIMEOUT = 15


def _postgres_options() -> tuple[dict, dict]:
    ssl_ctx = ssl.create_default_context()
    if not DB_SSL_VERIFY:
        ssl_ctx.check_hostname = False
        ssl_ctx.verify_mode = ssl.CERT_NONE

    connect_args = {
        "ssl": ssl_ctx,
        # asyncpg prepared statements break behind transaction poolers
        "statement_cache_size": 0,
        "prepared_statement_cache_size": 0,
    }
    pool_args = {
        "pool_size": DB_POOL_SIZE,
        "max_overflow": DB_MAX_OVERFLOW,
        "pool_timeout": DB_POOL_TIMEOUT,
        "pool_pre_ping": True,
    }
    return connect_args, pool_args


def _sqlite_options() -> tuple[dict, dict]:
    connect_args = {"check_same_thread": False, "timeout": SQLITE_BUSY_TIMEOUT}
    # aiosqlite connections are bound to the loop that opened them
    pool_args = {"poolclass": NullPool}
    return connect_args, pool_args


connect_args, pool_args = (
    _postgres_options() if DB_TYPE == "postgres" else _sqlite_options()
)

engine = create_async_engine(
    DATABASE_URL,
    echo=False,
    echo_pool=DB_ECHO_POOL,
    connect_args=connect_args,
    **pool_args,
)

# expire_on_commit stays off: services build responses from ORM objects after commit
AsyncSessionLocal = sessionmaker(
    bind=engine,
    class_=AsyncSession,
    autoflush=False,
    autocommit=False,
    expire_on_commit=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """Request-scoped session. Services decide when to commit or roll back."""
    async with AsyncSessionLocal() as session:
        yield session


if DB_TYPE == "sqlite":
    # Stock rows reference products and locations; SQLite ignores FKs by default
    @event.listens_for(engine.sync_engine, "connect")
    def enable_sqlite_foreign_keys(dbapi_connection, _):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


import app.models  # noqa


async def init_models():
    """Create missing tables. Development databases only."""
    if APP_ENV != "development":
        raise RuntimeError("init_models() is forbidden outside development")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
