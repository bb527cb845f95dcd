from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.content.services import fetch_content
from streaming_platform.platform.db.models import Playlist, PlaylistItem
from streaming_platform.platform.errors import ContractError, ErrorCode
from streaming_platform.platform.services.chain import CallContext


@dataclass(frozen=True)
class PlaylistView:
    owner: str
    playlist_id: int
    name: str
    is_public: bool
    items: list[int]


async def _fetch_playlist(session: AsyncSession, owner: str, playlist_id: int) -> Playlist:
    row = await session.get(Playlist, (owner, playlist_id))
    if row is None:
        raise ContractError(ErrorCode.PLAYLIST_NOT_FOUND)
    return row


async def _items(session: AsyncSession, owner: str, playlist_id: int) -> list[int]:
    result = await session.execute(
        select(PlaylistItem.content_id)
        .where(PlaylistItem.owner == owner, PlaylistItem.playlist_id == playlist_id)
        .order_by(PlaylistItem.position)
    )
    return [int(content_id) for content_id in result.scalars().all()]


async def create_playlist(
    session: AsyncSession,
    ctx: CallContext,
    *,
    playlist_id: int,
    name: str,
    is_public: bool,
) -> bool:
    if await session.get(Playlist, (ctx.sender, playlist_id)) is not None:
        raise ContractError(ErrorCode.PLAYLIST_EXISTS)

    session.add(
        Playlist(
            owner=ctx.sender,
            playlist_id=playlist_id,
            name=name,
            is_public=is_public,
            created_at_height=ctx.height,
        )
    )
    await session.flush()
    return True


async def add_to_playlist(session: AsyncSession, ctx: CallContext, *, playlist_id: int, content_id: int) -> bool:
    await _fetch_playlist(session, ctx.sender, playlist_id)
    await fetch_content(session, content_id)

    if content_id in await _items(session, ctx.sender, playlist_id):
        raise ContractError(ErrorCode.ALREADY_IN_PLAYLIST)

    result = await session.execute(
        select(func.coalesce(func.max(PlaylistItem.position), -1)).where(
            PlaylistItem.owner == ctx.sender,
            PlaylistItem.playlist_id == playlist_id,
        )
    )
    position = int(result.scalar_one()) + 1

    session.add(PlaylistItem(owner=ctx.sender, playlist_id=playlist_id, position=position, content_id=content_id))
    await session.flush()
    return True


async def get_playlist(session: AsyncSession, ctx: CallContext, *, owner: str, playlist_id: int) -> PlaylistView:
    row = await _fetch_playlist(session, owner, playlist_id)
    if not row.is_public and ctx.sender != owner:
        raise ContractError(ErrorCode.NOT_AUTHORIZED)

    return PlaylistView(
        owner=row.owner,
        playlist_id=int(row.playlist_id),
        name=row.name,
        is_public=bool(row.is_public),
        items=await _items(session, owner, playlist_id),
    )


async def list_playlists(session: AsyncSession, *, owner: str) -> list[PlaylistView]:
    result = await session.execute(select(Playlist).where(Playlist.owner == owner).order_by(Playlist.playlist_id))
    return [
        PlaylistView(
            owner=row.owner,
            playlist_id=int(row.playlist_id),
            name=row.name,
            is_public=bool(row.is_public),
            items=await _items(session, owner, int(row.playlist_id)),
        )
        for row in result.scalars().all()
    ]
