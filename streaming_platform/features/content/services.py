from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.platform_admin.services import get_config
from streaming_platform.features.subscriptions.services import has_active_subscription
from streaming_platform.platform.db.models import Content, Purchase
from streaming_platform.platform.errors import ContractError, ErrorCode
from streaming_platform.platform.services.chain import CallContext


@dataclass(frozen=True)
class PurchaseSplit:
    price: int
    platform_cut: int
    creator_cut: int


@dataclass(frozen=True)
class CreatorEarnings:
    total_sales: int
    total_earned: int


def split_price(price: int, platform_fee: int) -> PurchaseSplit:
    platform_cut = (price * platform_fee) // 100
    return PurchaseSplit(price=price, platform_cut=platform_cut, creator_cut=price - platform_cut)


def average_rating(row: Content) -> int:
    """Average rating scaled by 100 (two fixed decimals), 0 when unrated."""
    if not row.rating_count:
        return 0
    return (int(row.rating_total) * 100) // int(row.rating_count)


async def fetch_content(session: AsyncSession, content_id: int) -> Content:
    row = await session.get(Content, content_id)
    if row is None:
        raise ContractError(ErrorCode.CONTENT_NOT_FOUND)
    return row


async def publish_content(
    session: AsyncSession,
    ctx: CallContext,
    *,
    content_id: int,
    title: str,
    description: str,
    price: int,
    is_nft: bool,
    category: str,
    is_premium: bool,
) -> bool:
    if await session.get(Content, content_id) is not None:
        raise ContractError(ErrorCode.CONTENT_EXISTS)

    session.add(
        Content(
            id=content_id,
            creator=ctx.sender,
            title=title,
            description=description,
            price=price,
            is_nft=is_nft,
            category=category,
            is_premium=is_premium,
            rating_total=0,
            rating_count=0,
            published_at_height=ctx.height,
        )
    )
    await session.flush()
    return True


async def get_content(session: AsyncSession, ctx: CallContext, *, content_id: int) -> Content:
    return await fetch_content(session, content_id)


async def list_content(
    session: AsyncSession,
    *,
    category: str | None = None,
    creator: str | None = None,
    limit: int = 100,
) -> list[Content]:
    query = select(Content)
    if category is not None:
        query = query.where(Content.category == category)
    if creator is not None:
        query = query.where(Content.creator == creator)
    result = await session.execute(query.order_by(Content.published_at_height.desc(), Content.id.desc()).limit(limit))
    return list(result.scalars().all())


async def purchase_content(session: AsyncSession, ctx: CallContext, *, content_id: int) -> int:
    row = await fetch_content(session, content_id)

    existing = await session.get(Purchase, (content_id, ctx.sender))
    if existing is not None:
        raise ContractError(ErrorCode.ALREADY_PURCHASED)

    if row.is_premium and row.creator != ctx.sender:
        if not await has_active_subscription(session, subscriber=ctx.sender, creator=row.creator, height=ctx.height):
            raise ContractError(ErrorCode.NOT_SUBSCRIBED)

    config = await get_config(session)
    split = split_price(int(row.price), int(config.platform_fee))

    session.add(
        Purchase(
            content_id=content_id,
            buyer=ctx.sender,
            price_paid=split.price,
            platform_cut=split.platform_cut,
            creator_cut=split.creator_cut,
            purchased_at_height=ctx.height,
        )
    )
    await session.flush()
    return split.price


async def get_creator_earnings(session: AsyncSession, ctx: CallContext, *, creator: str) -> CreatorEarnings:
    result = await session.execute(
        select(
            func.count(Purchase.buyer),
            func.coalesce(func.sum(Purchase.creator_cut), 0),
        )
        .join(Content, Content.id == Purchase.content_id)
        .where(Content.creator == creator)
    )
    sales, earned = result.one()
    return CreatorEarnings(total_sales=int(sales or 0), total_earned=int(earned or 0))


async def list_purchases(session: AsyncSession, *, buyer: str) -> list[Purchase]:
    result = await session.execute(
        select(Purchase).where(Purchase.buyer == buyer).order_by(Purchase.purchased_at_height.desc())
    )
    return list(result.scalars().all())
