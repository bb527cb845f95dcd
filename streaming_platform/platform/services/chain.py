from __future__ import annotations

import logging
from dataclasses import dataclass

from fastapi import HTTPException
from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.platform.db.models import Block, Receipt

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CallContext:
    sender: str
    height: int


async def tip_height(session: AsyncSession) -> int:
    result = await session.execute(select(func.max(Block.height)))
    return int(result.scalar_one_or_none() or 0)


async def open_block(session: AsyncSession, *, sender: str) -> Block:
    height = await tip_height(session) + 1
    block = Block(height=height, sender=sender)
    session.add(block)
    try:
        await session.flush()
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(status_code=409, detail="Block height conflict") from exc
    return block


def record_receipt(
    session: AsyncSession,
    *,
    block: Block,
    tx_index: int,
    function: str,
    args: list[str],
    result: str,
    ok: bool,
) -> Receipt:
    receipt = Receipt(
        block_height=block.height,
        tx_index=tx_index,
        sender=block.sender,
        function=function,
        args=list(args),
        result=result,
        ok=ok,
    )
    session.add(receipt)
    return receipt


async def commit_block(session: AsyncSession, block: Block, *, receipts: int) -> None:
    try:
        await session.commit()
    except IntegrityError as exc:
        await session.rollback()
        raise HTTPException(status_code=409, detail="Block height conflict") from exc
    logger.info("Mined block height=%d sender=%s txs=%d", block.height, block.sender, receipts)


async def get_block(session: AsyncSession, height: int) -> tuple[Block, list[Receipt]] | None:
    block = await session.get(Block, height)
    if block is None:
        return None

    result = await session.execute(
        select(Receipt).where(Receipt.block_height == height).order_by(Receipt.tx_index)
    )
    return block, list(result.scalars().all())
