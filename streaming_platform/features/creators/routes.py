from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.content.schemas import ContentListItem
from streaming_platform.features.content.services import average_rating, get_creator_earnings, list_content
from streaming_platform.features.creators.schemas import CreatorContentEarningsItem, CreatorDashboardResponse
from streaming_platform.features.platform_admin.services import get_config
from streaming_platform.platform.db.models import Content, Purchase, Subscription
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.services.chain import CallContext, tip_height

router = APIRouter(prefix="/creators")


@router.get("/{creator}/dashboard", response_model=CreatorDashboardResponse)
async def dashboard(creator: str, session: AsyncSession = Depends(get_session)) -> CreatorDashboardResponse:
    height = await tip_height(session)
    earnings = await get_creator_earnings(session, CallContext(sender=creator, height=height), creator=creator)
    config = await get_config(session)

    by_content_result = await session.execute(
        select(
            Content.id,
            Content.title,
            func.count(Purchase.buyer),
            func.coalesce(func.sum(Purchase.price_paid), 0),
            func.coalesce(func.sum(Purchase.creator_cut), 0),
        )
        .outerjoin(Purchase, Purchase.content_id == Content.id)
        .where(Content.creator == creator)
        .group_by(Content.id, Content.title)
        .order_by(Content.id)
    )

    items: list[CreatorContentEarningsItem] = []
    for content_id, title, sales, gross, creator_share in by_content_result.all():
        items.append(
            CreatorContentEarningsItem(
                content_id=int(content_id),
                title=str(title),
                sales=int(sales or 0),
                amount_gross=int(gross or 0),
                amount_creator=int(creator_share or 0),
            )
        )

    subscribers_result = await session.execute(
        select(func.count(Subscription.subscriber)).where(
            Subscription.creator == creator,
            Subscription.is_active.is_(True),
            Subscription.expires_at_height > height,
        )
    )

    return CreatorDashboardResponse(
        creator=creator,
        total_sales=earnings.total_sales,
        total_amount_gross=sum(item.amount_gross for item in items),
        total_amount_creator=earnings.total_earned,
        content_count=len(items),
        subscriber_count=int(subscribers_result.scalar_one() or 0),
        platform_fee_percent=int(config.platform_fee),
        earnings_by_content=items,
    )


@router.get("/{creator}/content", response_model=list[ContentListItem])
async def creator_content(creator: str, session: AsyncSession = Depends(get_session)) -> list[ContentListItem]:
    rows = await list_content(session, creator=creator)
    return [
        ContentListItem(
            id=row.id,
            creator=row.creator,
            title=row.title,
            price=row.price,
            category=row.category,
            is_premium=row.is_premium,
            average_rating=average_rating(row) / 100,
        )
        for row in rows
    ]
