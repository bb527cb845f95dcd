from __future__ import annotations

from pydantic import BaseModel


class UserLibraryResponse(BaseModel):
    address: str
    published_count: int
    purchase_count: int
    active_subscription_count: int
    playlist_count: int
