from pydantic import BaseModel, Field

from streaming_platform.features.auth.schemas import PrincipalStr, UIntField
from streaming_platform.platform.db.models import SUBSCRIPTION_TYPE_LENGTH


class SubscribeRequest(BaseModel):
    creator: PrincipalStr
    duration: UIntField
    subscription_type: str = Field(default="basic", max_length=SUBSCRIPTION_TYPE_LENGTH)


class SubscriptionStatusResponse(BaseModel):
    subscriber: str
    creator: str
    is_active: bool
    subscription_type: str
    duration: int
    started_at_height: int
    expires_at_height: int


class SubscribeResponse(SubscriptionStatusResponse):
    height: int
