from sqlalchemy.ext.asyncio import AsyncEngine

from streaming_platform.platform.db.base import Base
import streaming_platform.platform.db.models  # noqa: F401


async def create_all(engine: AsyncEngine) -> None:
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)
