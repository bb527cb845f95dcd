from fastapi import APIRouter, Depends, Path
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.playlists.schemas import PlaylistAddRequest, PlaylistCreateRequest, PlaylistResponse
from streaming_platform.features.playlists.services import PlaylistView, get_playlist
from streaming_platform.platform.db.models import MAX_BIGINT, Account
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.security import get_current_account, get_optional_account
from streaming_platform.platform.services import contract
from streaming_platform.platform.services.chain import CallContext, tip_height

router = APIRouter(prefix="/playlists")


def playlist_response(view: PlaylistView) -> PlaylistResponse:
    return PlaylistResponse(
        owner=view.owner,
        playlist_id=view.playlist_id,
        name=view.name,
        is_public=view.is_public,
        items=view.items,
    )


@router.post("", response_model=PlaylistResponse)
async def create(
    body: PlaylistCreateRequest,
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> PlaylistResponse:
    call = contract.prepare_native(
        "create-playlist",
        playlist_id=body.playlist_id,
        name=body.name,
        is_public=body.is_public,
    )
    height, _ = await contract.mine_single(session, sender=account.address, call=call)

    ctx = CallContext(sender=account.address, height=height)
    return playlist_response(await get_playlist(session, ctx, owner=account.address, playlist_id=body.playlist_id))


@router.post("/{playlist_id}/items", response_model=PlaylistResponse)
async def add_item(
    body: PlaylistAddRequest,
    playlist_id: int = Path(ge=0, le=MAX_BIGINT),
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> PlaylistResponse:
    call = contract.prepare_native("add-to-playlist", playlist_id=playlist_id, content_id=body.content_id)
    height, _ = await contract.mine_single(session, sender=account.address, call=call)

    ctx = CallContext(sender=account.address, height=height)
    return playlist_response(await get_playlist(session, ctx, owner=account.address, playlist_id=playlist_id))


@router.get("/{owner}/{playlist_id}", response_model=PlaylistResponse)
async def get_one(
    owner: str,
    playlist_id: int = Path(ge=0, le=MAX_BIGINT),
    account: Account | None = Depends(get_optional_account),
    session: AsyncSession = Depends(get_session),
) -> PlaylistResponse:
    viewer = account.address if account is not None else ""
    ctx = CallContext(sender=viewer, height=await tip_height(session))
    return playlist_response(await get_playlist(session, ctx, owner=owner, playlist_id=playlist_id))
