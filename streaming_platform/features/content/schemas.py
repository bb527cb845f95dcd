from pydantic import BaseModel, Field

from streaming_platform.features.auth.schemas import UIntField
from streaming_platform.platform.db.models import CATEGORY_LENGTH, TITLE_LENGTH


class ContentCreateRequest(BaseModel):
    id: UIntField
    title: str = Field(max_length=TITLE_LENGTH)
    description: str
    price: UIntField
    is_nft: bool = False
    category: str = Field(max_length=CATEGORY_LENGTH)
    is_premium: bool = False


class ContentResponse(BaseModel):
    id: int
    creator: str
    title: str
    description: str
    price: int
    is_nft: bool
    category: str
    is_premium: bool
    rating_count: int
    average_rating: float
    published_at_height: int


class ContentListItem(BaseModel):
    id: int
    creator: str
    title: str
    price: int
    category: str
    is_premium: bool
    average_rating: float


class PurchaseResponse(BaseModel):
    content_id: int
    buyer: str
    price_paid: int
    platform_cut: int
    creator_cut: int
    purchased_at_height: int
