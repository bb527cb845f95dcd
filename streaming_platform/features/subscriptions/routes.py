from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.subscriptions.schemas import (
    SubscribeRequest,
    SubscribeResponse,
    SubscriptionStatusResponse,
)
from streaming_platform.features.subscriptions.services import SubscriptionStatus, get_subscription_status
from streaming_platform.platform.db.models import Account
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.security import get_current_account
from streaming_platform.platform.services import contract
from streaming_platform.platform.services.chain import CallContext, tip_height

router = APIRouter(prefix="/subscriptions")


def status_response(status: SubscriptionStatus) -> SubscriptionStatusResponse:
    return SubscriptionStatusResponse(
        subscriber=status.subscriber,
        creator=status.creator,
        is_active=status.is_active,
        subscription_type=status.subscription_type,
        duration=status.duration,
        started_at_height=status.started_at,
        expires_at_height=status.expires_at,
    )


@router.post("", response_model=SubscribeResponse)
async def subscribe(
    body: SubscribeRequest,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> SubscribeResponse:
    call = contract.prepare_native(
        "subscribe-to-creator",
        creator=body.creator,
        duration=body.duration,
        subscription_type=body.subscription_type,
    )
    height, _ = await contract.mine_single(session, sender=account.address, call=call)

    status = await get_subscription_status(
        session,
        CallContext(sender=account.address, height=height),
        subscriber=account.address,
        creator=body.creator,
    )
    return SubscribeResponse(**status_response(status).model_dump(), height=height)


@router.get("/{subscriber}/{creator}", response_model=SubscriptionStatusResponse)
async def get_status(
    subscriber: str,
    creator: str,
    session: AsyncSession = Depends(get_session),
) -> SubscriptionStatusResponse:
    ctx = CallContext(sender=subscriber, height=await tip_height(session))
    status = await get_subscription_status(session, ctx, subscriber=subscriber, creator=creator)
    return status_response(status)
