from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.content.services import average_rating, fetch_content
from streaming_platform.features.ratings.schemas import RateRequest, RatingResponse
from streaming_platform.features.ratings.services import get_content_rating
from streaming_platform.platform.db.models import MAX_BIGINT, Account
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.security import get_current_account
from streaming_platform.platform.services import contract
from streaming_platform.platform.services.chain import CallContext, tip_height

router = APIRouter(prefix="/ratings")


async def _rating_response(session: AsyncSession, ctx: CallContext, content_id: int, rater: str) -> RatingResponse:
    content = await fetch_content(session, content_id)
    rating = await get_content_rating(session, ctx, content_id=content_id, rater=rater)
    return RatingResponse(
        content_id=content_id,
        rater=rater,
        rating=rating,
        rating_count=content.rating_count,
        average_rating=average_rating(content) / 100,
    )


@router.post("", response_model=RatingResponse)
async def rate(
    body: RateRequest,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> RatingResponse:
    call = contract.prepare_native("rate-content", content_id=body.content_id, rating=body.rating)
    height, _ = await contract.mine_single(session, sender=account.address, call=call)
    return await _rating_response(session, CallContext(sender=account.address, height=height), body.content_id, account.address)


@router.get("/{content_id}/{rater}", response_model=RatingResponse)
async def get_rating(
    rater: str,
    content_id: int = Path(ge=0, le=MAX_BIGINT),
    session: AsyncSession = Depends(get_session),
) -> RatingResponse:
    ctx = CallContext(sender=rater, height=await tip_height(session))
    return await _rating_response(session, ctx, content_id, rater)
