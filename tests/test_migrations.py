import os
import asyncio

import pytest
from alembic import command
from alembic.config import Config
from sqlalchemy import inspect, text
from sqlalchemy.ext.asyncio import create_async_engine


@pytest.mark.asyncio
async def test_migrations_apply_cleanly() -> None:
    database_url = os.environ.get("DATABASE_URL")
    if not database_url or not database_url.startswith("postgresql"):
        pytest.skip("DATABASE_URL not set to a PostgreSQL database")

    engine = create_async_engine(database_url, pool_pre_ping=True)
    try:
        async with engine.begin() as connection:
            await connection.execute(text("DROP SCHEMA IF EXISTS public CASCADE"))
            await connection.execute(text("CREATE SCHEMA public"))

        alembic_cfg = Config("alembic.ini")
        await asyncio.to_thread(command.upgrade, alembic_cfg, "head")

        expected_tables = {
            "alembic_version",
            "accounts",
            "platform_config",
            "blocks",
            "receipts",
            "content",
            "subscriptions",
            "ratings",
            "playlists",
            "playlist_items",
            "purchases",
        }

        async with engine.connect() as connection:
            tables = await connection.run_sync(lambda sync_connection: set(inspect(sync_connection).get_table_names()))

        assert expected_tables.issubset(tables)

        await asyncio.to_thread(command.downgrade, alembic_cfg, "base")
        async with engine.connect() as connection:
            remaining = await connection.run_sync(lambda sync_connection: set(inspect(sync_connection).get_table_names()))
        assert remaining <= {"alembic_version"}
    finally:
        await engine.dispose()
