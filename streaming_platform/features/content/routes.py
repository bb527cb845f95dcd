from fastapi import APIRouter, Depends, Path, Query
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.content.schemas import (
    ContentCreateRequest,
    ContentListItem,
    ContentResponse,
    PurchaseResponse,
)
from streaming_platform.features.content.services import average_rating, fetch_content, list_content
from streaming_platform.platform.db.models import MAX_BIGINT, Account, Content, Purchase
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.security import get_current_account
from streaming_platform.platform.services import contract

router = APIRouter(prefix="/content")


def content_response(row: Content) -> ContentResponse:
    return ContentResponse(
        id=row.id,
        creator=row.creator,
        title=row.title,
        description=row.description,
        price=row.price,
        is_nft=row.is_nft,
        category=row.category,
        is_premium=row.is_premium,
        rating_count=row.rating_count,
        average_rating=average_rating(row) / 100,
        published_at_height=row.published_at_height,
    )


def purchase_response(row: Purchase) -> PurchaseResponse:
    return PurchaseResponse(
        content_id=row.content_id,
        buyer=row.buyer,
        price_paid=row.price_paid,
        platform_cut=row.platform_cut,
        creator_cut=row.creator_cut,
        purchased_at_height=row.purchased_at_height,
    )


@router.post("", response_model=ContentResponse)
async def publish(
    body: ContentCreateRequest,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> ContentResponse:
    call = contract.prepare_native(
        "publish-content",
        content_id=body.id,
        title=body.title,
        description=body.description,
        price=body.price,
        is_nft=body.is_nft,
        category=body.category,
        is_premium=body.is_premium,
    )
    await contract.mine_single(session, sender=account.address, call=call)
    return content_response(await fetch_content(session, body.id))


@router.get("", response_model=list[ContentListItem])
async def browse(
    category: str | None = Query(default=None),
    creator: str | None = Query(default=None),
    limit: int = Query(default=100, ge=1, le=500),
    session: AsyncSession = Depends(get_session),
) -> list[ContentListItem]:
    rows = await list_content(session, category=category, creator=creator, limit=limit)
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


@router.get("/{content_id}", response_model=ContentResponse)
async def get_content(
    content_id: int = Path(ge=0, le=MAX_BIGINT),
    session: AsyncSession = Depends(get_session),
) -> ContentResponse:
    return content_response(await fetch_content(session, content_id))


@router.post("/{content_id}/purchase", response_model=PurchaseResponse)
async def purchase(
    content_id: int = Path(ge=0, le=MAX_BIGINT),
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> PurchaseResponse:
    call = contract.prepare_native("purchase-content", content_id=content_id)
    await contract.mine_single(session, sender=account.address, call=call)

    row = await session.get(Purchase, (content_id, account.address))
    return purchase_response(row)
