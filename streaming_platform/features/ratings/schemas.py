from pydantic import BaseModel

from streaming_platform.features.auth.schemas import UIntField


class RateRequest(BaseModel):
    content_id: UIntField
    rating: UIntField


class RatingResponse(BaseModel):
    content_id: int
    rater: str
    rating: int | None
    rating_count: int
    average_rating: float
