from datetime import datetime

from pydantic import BaseModel, Field

from streaming_platform.features.auth.schemas import PrincipalStr


class ContractCallRequest(BaseModel):
    function: str
    args: list[str] = Field(default_factory=list)


class MineBlockRequest(BaseModel):
    calls: list[ContractCallRequest] = Field(min_length=1, max_length=64)


class ReadOnlyCallRequest(ContractCallRequest):
    sender: PrincipalStr | None = None


class ReceiptResponse(BaseModel):
    tx_index: int
    sender: str
    function: str
    args: list[str]
    result: str
    ok: bool


class BlockResponse(BaseModel):
    height: int
    sender: str
    receipts: list[ReceiptResponse]


class BlockDetailResponse(BlockResponse):
    mined_at: datetime


class TipResponse(BaseModel):
    height: int


class ReadOnlyResponse(BaseModel):
    height: int
    result: str
    ok: bool
