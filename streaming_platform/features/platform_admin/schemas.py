from pydantic import BaseModel

from streaming_platform.features.auth.schemas import PrincipalStr, UIntField


class PlatformResponse(BaseModel):
    platform_fee: int
    platform_owner: str


class SetFeeRequest(BaseModel):
    fee: UIntField


class SetOwnerRequest(BaseModel):
    new_owner: PrincipalStr


class CallResultResponse(BaseModel):
    height: int
    result: str
