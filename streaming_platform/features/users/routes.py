from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.auth.routes import build_me_response
from streaming_platform.features.auth.schemas import MeResponse
from streaming_platform.features.content.routes import purchase_response
from streaming_platform.features.content.schemas import PurchaseResponse
from streaming_platform.features.content.services import list_content, list_purchases
from streaming_platform.features.playlists.routes import playlist_response
from streaming_platform.features.playlists.schemas import PlaylistResponse
from streaming_platform.features.playlists.services import list_playlists
from streaming_platform.features.subscriptions.routes import status_response
from streaming_platform.features.subscriptions.schemas import SubscriptionStatusResponse
from streaming_platform.features.subscriptions.services import list_subscriptions
from streaming_platform.features.users.schemas import UserLibraryResponse
from streaming_platform.platform.db.models import Account
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.security import get_current_account

router = APIRouter(prefix="/users")


@router.get("/me", response_model=MeResponse)
async def me(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> MeResponse:
    return await build_me_response(session, account)


@router.get("/me/library", response_model=UserLibraryResponse)
async def my_library(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> UserLibraryResponse:
    subscriptions = await list_subscriptions(session, subscriber=account.address)
    return UserLibraryResponse(
        address=account.address,
        published_count=len(await list_content(session, creator=account.address, limit=10_000)),
        purchase_count=len(await list_purchases(session, buyer=account.address)),
        active_subscription_count=sum(1 for status in subscriptions if status.is_active),
        playlist_count=len(await list_playlists(session, owner=account.address)),
    )


@router.get("/me/subscriptions", response_model=list[SubscriptionStatusResponse])
async def my_subscriptions(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> list[SubscriptionStatusResponse]:
    return [status_response(status) for status in await list_subscriptions(session, subscriber=account.address)]


@router.get("/me/playlists", response_model=list[PlaylistResponse])
async def my_playlists(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> list[PlaylistResponse]:
    return [playlist_response(view) for view in await list_playlists(session, owner=account.address)]


@router.get("/me/purchases", response_model=list[PurchaseResponse])
async def my_purchases(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> list[PurchaseResponse]:
    return [purchase_response(row) for row in await list_purchases(session, buyer=account.address)]
