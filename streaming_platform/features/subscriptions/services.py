from dataclasses import dataclass

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.platform.db.models import MAX_BIGINT, Subscription
from streaming_platform.platform.errors import ContractError, ErrorCode
from streaming_platform.platform.services.chain import CallContext, tip_height


@dataclass(frozen=True)
class SubscriptionStatus:
    subscriber: str
    creator: str
    is_active: bool
    subscription_type: str
    duration: int
    started_at: int
    expires_at: int


def _is_live(row: Subscription, height: int) -> bool:
    return bool(row.is_active) and height < int(row.expires_at_height)


async def has_active_subscription(session: AsyncSession, *, subscriber: str, creator: str, height: int) -> bool:
    row = await session.get(Subscription, (subscriber, creator))
    return row is not None and _is_live(row, height)


async def subscribe_to_creator(
    session: AsyncSession,
    ctx: CallContext,
    *,
    creator: str,
    duration: int,
    subscription_type: str,
) -> bool:
    if duration <= 0 or ctx.height + duration > MAX_BIGINT:
        raise ContractError(ErrorCode.INVALID_DURATION)
    if creator == ctx.sender:
        raise ContractError(ErrorCode.SELF_SUBSCRIPTION)

    row = await session.get(Subscription, (ctx.sender, creator))
    if row is not None and _is_live(row, ctx.height):
        raise ContractError(ErrorCode.ALREADY_SUBSCRIBED)

    if row is None:
        row = Subscription(subscriber=ctx.sender, creator=creator)
        session.add(row)

    row.duration = duration
    row.subscription_type = subscription_type
    row.is_active = True
    row.started_at_height = ctx.height
    row.expires_at_height = ctx.height + duration
    await session.flush()
    return True


async def get_subscription_status(
    session: AsyncSession,
    ctx: CallContext,
    *,
    subscriber: str,
    creator: str,
) -> SubscriptionStatus:
    row = await session.get(Subscription, (subscriber, creator))
    if row is None:
        return SubscriptionStatus(
            subscriber=subscriber,
            creator=creator,
            is_active=False,
            subscription_type="",
            duration=0,
            started_at=0,
            expires_at=0,
        )

    return SubscriptionStatus(
        subscriber=subscriber,
        creator=creator,
        is_active=_is_live(row, ctx.height),
        subscription_type=row.subscription_type,
        duration=int(row.duration),
        started_at=int(row.started_at_height),
        expires_at=int(row.expires_at_height),
    )


async def list_subscriptions(session: AsyncSession, *, subscriber: str) -> list[SubscriptionStatus]:
    height = await tip_height(session)
    result = await session.execute(
        select(Subscription).where(Subscription.subscriber == subscriber).order_by(Subscription.started_at_height.desc())
    )
    return [
        SubscriptionStatus(
            subscriber=row.subscriber,
            creator=row.creator,
            is_active=_is_live(row, height),
            subscription_type=row.subscription_type,
            duration=int(row.duration),
            started_at=int(row.started_at_height),
            expires_at=int(row.expires_at_height),
        )
        for row in result.scalars().all()
    ]
