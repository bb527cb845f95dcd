from pydantic import BaseModel, Field

from streaming_platform.features.auth.schemas import UIntField
from streaming_platform.platform.db.models import PLAYLIST_NAME_LENGTH


class PlaylistCreateRequest(BaseModel):
    playlist_id: UIntField
    name: str = Field(max_length=PLAYLIST_NAME_LENGTH)
    is_public: bool = True


class PlaylistAddRequest(BaseModel):
    content_id: UIntField


class PlaylistResponse(BaseModel):
    owner: str
    playlist_id: int
    name: str
    is_public: bool
    items: list[int]
