from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.platform_admin.schemas import (
    CallResultResponse,
    PlatformResponse,
    SetFeeRequest,
    SetOwnerRequest,
)
from streaming_platform.features.platform_admin.services import get_config
from streaming_platform.platform.db.models import Account
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.security import get_current_account
from streaming_platform.platform.services import contract
from streaming_platform.platform.services.clarity import Ok, render

router = APIRouter(prefix="/platform")


@router.get("", response_model=PlatformResponse)
async def get_platform(session: AsyncSession = Depends(get_session)) -> PlatformResponse:
    config = await get_config(session)
    return PlatformResponse(platform_fee=config.platform_fee, platform_owner=config.platform_owner)


@router.post("/fee", response_model=CallResultResponse)
async def set_fee(
    body: SetFeeRequest,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> CallResultResponse:
    call = contract.prepare_native("set-platform-fee", fee=body.fee)
    height, value = await contract.mine_single(session, sender=account.address, call=call)
    return CallResultResponse(height=height, result=render(Ok(value)))


@router.post("/owner", response_model=CallResultResponse)
async def set_owner(
    body: SetOwnerRequest,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> CallResultResponse:
    call = contract.prepare_native("set-platform-owner", new_owner=body.new_owner)
    height, value = await contract.mine_single(session, sender=account.address, call=call)
    return CallResultResponse(height=height, result=render(Ok(value)))
