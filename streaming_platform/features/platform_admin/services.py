import logging

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.platform.config import settings
from streaming_platform.platform.db.models import PlatformConfig
from streaming_platform.platform.errors import ContractError, ErrorCode
from streaming_platform.platform.services.chain import CallContext

logger = logging.getLogger(__name__)

_CONFIG_ID = 1
MAX_PLATFORM_FEE = 100


async def ensure_config(session: AsyncSession, *, deployer: str) -> PlatformConfig:
    """Create the singleton config on first use; the deployer owns it unless configured."""
    config = await session.get(PlatformConfig, _CONFIG_ID)
    if config is None:
        owner = settings.platform_owner or deployer
        config = PlatformConfig(
            id=_CONFIG_ID,
            platform_fee=settings.default_platform_fee,
            platform_owner=owner,
        )
        session.add(config)
        await session.flush()
        logger.info("Initialised platform config owner=%s fee=%d", owner, config.platform_fee)
    return config


async def get_config(session: AsyncSession, *, for_update: bool = False) -> PlatformConfig:
    query = select(PlatformConfig).where(PlatformConfig.id == _CONFIG_ID)
    if for_update:
        query = query.with_for_update()
    result = await session.execute(query)
    config = result.scalar_one_or_none()
    if config is not None:
        return config

    if settings.platform_owner:
        return await ensure_config(session, deployer=settings.platform_owner)
    raise HTTPException(status_code=503, detail="Platform not initialised")


async def set_platform_fee(session: AsyncSession, ctx: CallContext, *, fee: int) -> bool:
    config = await get_config(session, for_update=True)
    if ctx.sender != config.platform_owner:
        raise ContractError(ErrorCode.NOT_AUTHORIZED)
    if fee > MAX_PLATFORM_FEE:
        raise ContractError(ErrorCode.INVALID_FEE)

    config.platform_fee = fee
    return True


async def set_platform_owner(session: AsyncSession, ctx: CallContext, *, new_owner: str) -> bool:
    config = await get_config(session, for_update=True)
    if ctx.sender != config.platform_owner:
        raise ContractError(ErrorCode.NOT_AUTHORIZED)

    logger.info("Platform ownership transferred from=%s to=%s height=%d", config.platform_owner, new_owner, ctx.height)
    config.platform_owner = new_owner
    return True
