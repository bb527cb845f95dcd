from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.content.services import fetch_content
from streaming_platform.platform.db.models import Rating
from streaming_platform.platform.errors import ContractError, ErrorCode
from streaming_platform.platform.services.chain import CallContext

MIN_RATING = 1
MAX_RATING = 5


async def rate_content(session: AsyncSession, ctx: CallContext, *, content_id: int, rating: int) -> bool:
    if not MIN_RATING <= rating <= MAX_RATING:
        raise ContractError(ErrorCode.INVALID_RATING)

    content = await fetch_content(session, content_id)

    if await session.get(Rating, (content_id, ctx.sender)) is not None:
        raise ContractError(ErrorCode.ALREADY_RATED)

    session.add(Rating(content_id=content_id, rater=ctx.sender, rating=rating, rated_at_height=ctx.height))
    content.rating_total = int(content.rating_total) + rating
    content.rating_count = int(content.rating_count) + 1
    await session.flush()
    return True


async def get_content_rating(session: AsyncSession, ctx: CallContext, *, content_id: int, rater: str) -> int | None:
    row = await session.get(Rating, (content_id, rater))
    return None if row is None else int(row.rating)
