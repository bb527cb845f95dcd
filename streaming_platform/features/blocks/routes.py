import logging

from fastapi import APIRouter, Depends, Header, HTTPException, Path
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.blocks.schemas import (
    BlockDetailResponse,
    BlockResponse,
    MineBlockRequest,
    ReadOnlyCallRequest,
    ReadOnlyResponse,
    ReceiptResponse,
    TipResponse,
)
from streaming_platform.platform.config import settings
from streaming_platform.platform.db.models import MAX_BIGINT, Account, Receipt
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.redis import get_redis
from streaming_platform.platform.security import get_current_account, get_optional_account
from streaming_platform.platform.services import chain, contract

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/blocks")


def _receipt_response(row: Receipt) -> ReceiptResponse:
    return ReceiptResponse(
        tx_index=row.tx_index,
        sender=row.sender,
        function=row.function,
        args=list(row.args),
        result=row.result,
        ok=row.ok,
    )


def _submission_key(sender: str, idempotency_key: str) -> str:
    return f"block-submission:{sender}:{idempotency_key}"


async def _try_acquire_submission(sender: str, idempotency_key: str) -> bool:
    key = _submission_key(sender, idempotency_key)

    try:
        redis = get_redis()
        return bool(await redis.set(key, "1", ex=settings.idempotency_ttl_seconds, nx=True))
    except Exception as exc:
        logger.warning("Idempotency check skipped, redis unavailable: %s", exc)
        return True


async def _release_submission(sender: str, idempotency_key: str) -> None:
    try:
        await get_redis().delete(_submission_key(sender, idempotency_key))
    except Exception as exc:
        logger.warning("Could not release idempotency key %s: %s", idempotency_key, exc)


@router.post("", response_model=BlockResponse)
async def mine_block(
    body: MineBlockRequest,
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> BlockResponse:
    calls = [contract.prepare_call(call.function, call.args) for call in body.calls]

    if idempotency_key:
        if not await _try_acquire_submission(account.address, idempotency_key):
            raise HTTPException(status_code=409, detail="Duplicate block submission")

    try:
        block, receipts = await contract.mine(session, sender=account.address, calls=calls)
    except Exception:
        # block was not committed; free the key for a retry
        if idempotency_key:
            await _release_submission(account.address, idempotency_key)
        raise

    return BlockResponse(
        height=block.height,
        sender=block.sender,
        receipts=[_receipt_response(row) for row in receipts],
    )


@router.get("/tip", response_model=TipResponse)
async def tip(session: AsyncSession = Depends(get_session)) -> TipResponse:
    return TipResponse(height=await chain.tip_height(session))


@router.post("/read-only", response_model=ReadOnlyResponse)
async def call_read_only(
    body: ReadOnlyCallRequest,
    account: Account | None = Depends(get_optional_account),
    session: AsyncSession = Depends(get_session),
) -> ReadOnlyResponse:
    call = contract.prepare_call(body.function, body.args)
    sender = body.sender or (account.address if account is not None else "")

    outcome = await contract.read_only(session, sender=sender, call=call)
    return ReadOnlyResponse(height=await chain.tip_height(session), result=outcome.result, ok=outcome.ok)


@router.get("/{height}", response_model=BlockDetailResponse)
async def get_block(
    height: int = Path(ge=0, le=MAX_BIGINT),
    session: AsyncSession = Depends(get_session),
) -> BlockDetailResponse:
    found = await chain.get_block(session, height)
    if found is None:
        raise HTTPException(status_code=404, detail="Not found")

    block, receipts = found
    return BlockDetailResponse(
        height=block.height,
        sender=block.sender,
        mined_at=block.mined_at,
        receipts=[_receipt_response(row) for row in receipts],
    )
