"""Function table for the ``streaming_platform`` contract.

Maps contract function names to the feature services that implement them, with
the typed parameter list used to decode call arguments and a presenter that
turns the service result into a clarity value for the receipt.
"""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable, Sequence
from dataclasses import dataclass, field
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.content import services as content_services
from streaming_platform.features.platform_admin import services as admin_services
from streaming_platform.features.playlists import services as playlist_services
from streaming_platform.features.ratings import services as rating_services
from streaming_platform.features.subscriptions import services as subscription_services
from streaming_platform.platform.db.models import (
    CATEGORY_LENGTH,
    MAX_BIGINT,
    PLAYLIST_NAME_LENGTH,
    SUBSCRIPTION_TYPE_LENGTH,
    TITLE_LENGTH,
    Block,
    Receipt,
)
from streaming_platform.platform.errors import CallError, ContractError
from streaming_platform.platform.services import chain
from streaming_platform.platform.services.clarity import (
    Err,
    Ok,
    Principal,
    Some,
    UInt,
    expect,
    parse_literal,
    render,
)

logger = logging.getLogger(__name__)

Handler = Callable[..., Awaitable[Any]]


@dataclass(frozen=True)
class Param:
    name: str
    kind: str
    max_length: int | None = None

    def check(self, function: str, value: Any) -> Any:
        # values are stored in BigInteger / bounded String columns
        if self.kind == "uint" and value > MAX_BIGINT:
            raise CallError(f"{function}: {self.name} must be at most u{MAX_BIGINT}")
        if self.max_length is not None and len(value) > self.max_length:
            raise CallError(f"{function}: {self.name} must be at most {self.max_length} characters")
        return value


@dataclass(frozen=True)
class ContractFunction:
    name: str
    params: tuple[Param, ...]
    handler: Handler
    read_only: bool = False
    present: Callable[[Any], Any] = field(default=lambda value: value)


@dataclass(frozen=True)
class PreparedCall:
    function: ContractFunction
    literals: tuple[str, ...]
    kwargs: dict[str, Any]


@dataclass(frozen=True)
class CallOutcome:
    value: Any
    result: str
    ok: bool


def _content_tuple(row) -> dict:
    return {
        "id": int(row.id),
        "creator": Principal(row.creator),
        "title": row.title,
        "description": row.description,
        "price": int(row.price),
        "is-nft": bool(row.is_nft),
        "category": row.category,
        "is-premium": bool(row.is_premium),
        "rating-count": int(row.rating_count),
        "average-rating": content_services.average_rating(row),
        "published-at": int(row.published_at_height),
    }


def _subscription_tuple(status: subscription_services.SubscriptionStatus) -> dict:
    return {
        "is-active": status.is_active,
        "subscription-type": status.subscription_type,
        "duration": status.duration,
        "started-at": status.started_at,
        "expires-at": status.expires_at,
    }


def _playlist_tuple(view: playlist_services.PlaylistView) -> dict:
    return {"name": view.name, "is-public": view.is_public, "items": list(view.items)}


def _earnings_tuple(earnings: content_services.CreatorEarnings) -> dict:
    return {"total-sales": earnings.total_sales, "total-earned": earnings.total_earned}


def _optional_uint(value: int | None) -> Any:
    return None if value is None else Some(UInt(value))


async def _get_platform_fee(session: AsyncSession, ctx: chain.CallContext) -> int:
    config = await admin_services.get_config(session)
    return int(config.platform_fee)


async def _get_platform_owner(session: AsyncSession, ctx: chain.CallContext) -> Principal:
    config = await admin_services.get_config(session)
    return Principal(config.platform_owner)


FUNCTIONS: dict[str, ContractFunction] = {
    fn.name: fn
    for fn in (
        ContractFunction(
            "set-platform-fee",
            (Param("fee", "uint"),),
            admin_services.set_platform_fee,
        ),
        ContractFunction(
            "set-platform-owner",
            (Param("new_owner", "principal"),),
            admin_services.set_platform_owner,
        ),
        ContractFunction(
            "publish-content",
            (
                Param("content_id", "uint"),
                Param("title", "string", TITLE_LENGTH),
                Param("description", "string"),
                Param("price", "uint"),
                Param("is_nft", "bool"),
                Param("category", "string", CATEGORY_LENGTH),
                Param("is_premium", "bool"),
            ),
            content_services.publish_content,
        ),
        ContractFunction(
            "purchase-content",
            (Param("content_id", "uint"),),
            content_services.purchase_content,
        ),
        ContractFunction(
            "subscribe-to-creator",
            (
                Param("creator", "principal"),
                Param("duration", "uint"),
                Param("subscription_type", "string", SUBSCRIPTION_TYPE_LENGTH),
            ),
            subscription_services.subscribe_to_creator,
        ),
        ContractFunction(
            "rate-content",
            (Param("content_id", "uint"), Param("rating", "uint")),
            rating_services.rate_content,
        ),
        ContractFunction(
            "create-playlist",
            (Param("playlist_id", "uint"), Param("name", "string", PLAYLIST_NAME_LENGTH), Param("is_public", "bool")),
            playlist_services.create_playlist,
        ),
        ContractFunction(
            "add-to-playlist",
            (Param("playlist_id", "uint"), Param("content_id", "uint")),
            playlist_services.add_to_playlist,
        ),
        ContractFunction("get-platform-fee", (), _get_platform_fee, read_only=True),
        ContractFunction("get-platform-owner", (), _get_platform_owner, read_only=True),
        ContractFunction(
            "get-content",
            (Param("content_id", "uint"),),
            content_services.get_content,
            read_only=True,
            present=_content_tuple,
        ),
        ContractFunction(
            "get-subscription-status",
            (Param("subscriber", "principal"), Param("creator", "principal")),
            subscription_services.get_subscription_status,
            read_only=True,
            present=_subscription_tuple,
        ),
        ContractFunction(
            "get-content-rating",
            (Param("content_id", "uint"), Param("rater", "principal")),
            rating_services.get_content_rating,
            read_only=True,
            present=_optional_uint,
        ),
        ContractFunction(
            "get-playlist",
            (Param("owner", "principal"), Param("playlist_id", "uint")),
            playlist_services.get_playlist,
            read_only=True,
            present=_playlist_tuple,
        ),
        ContractFunction(
            "get-creator-earnings",
            (Param("creator", "principal"),),
            content_services.get_creator_earnings,
            read_only=True,
            present=_earnings_tuple,
        ),
    )
}


def lookup(name: str) -> ContractFunction:
    try:
        return FUNCTIONS[name]
    except KeyError:
        raise CallError(f"unknown function {name!r}") from None


def prepare_call(name: str, literals: Sequence[str]) -> PreparedCall:
    function = lookup(name)
    if len(literals) != len(function.params):
        raise CallError(f"{name} expects {len(function.params)} arguments, got {len(literals)}")

    kwargs = {
        param.name: param.check(name, expect(parse_literal(literal), param.kind))
        for param, literal in zip(function.params, literals)
    }
    return PreparedCall(function=function, literals=tuple(literals), kwargs=kwargs)


def to_literal(kind: str, value: Any) -> str:
    if kind == "uint":
        return render(UInt(int(value)))
    if kind == "principal":
        return render(Principal(value))
    return render(value)


def prepare_native(name: str, /, **kwargs: Any) -> PreparedCall:
    """Build a call from Python arguments, as the REST routes do.

    ``name`` is positional-only: contract parameters may share it (``create-playlist``).
    """
    function = lookup(name)
    for param in function.params:
        param.check(name, kwargs[param.name])
    literals = tuple(to_literal(param.kind, kwargs[param.name]) for param in function.params)
    return PreparedCall(function=function, literals=literals, kwargs=kwargs)


async def invoke(session: AsyncSession, ctx: chain.CallContext, call: PreparedCall) -> CallOutcome:
    try:
        value = await call.function.handler(session, ctx, **call.kwargs)
    except ContractError as exc:
        logger.debug("Call %s by %s failed: %s", call.function.name, ctx.sender, exc)
        return CallOutcome(value=exc, result=render(Err(UInt(int(exc.code)))), ok=False)

    return CallOutcome(value=value, result=render(Ok(call.function.present(value))), ok=True)


async def mine(
    session: AsyncSession,
    *,
    sender: str,
    calls: Sequence[PreparedCall],
) -> tuple[Block, list[Receipt]]:
    """Run public calls in order inside one new block and commit it."""
    for call in calls:
        if call.function.read_only:
            raise CallError(f"{call.function.name} is read-only and cannot be mined")

    block = await chain.open_block(session, sender=sender)
    ctx = chain.CallContext(sender=sender, height=block.height)

    receipts: list[Receipt] = []
    for tx_index, call in enumerate(calls):
        outcome = await invoke(session, ctx, call)
        receipts.append(
            chain.record_receipt(
                session,
                block=block,
                tx_index=tx_index,
                function=call.function.name,
                args=list(call.literals),
                result=outcome.result,
                ok=outcome.ok,
            )
        )

    await chain.commit_block(session, block, receipts=len(receipts))
    return block, receipts


async def mine_single(session: AsyncSession, *, sender: str, call: PreparedCall) -> tuple[int, Any]:
    """Mine a one-call block for a REST mutation; a failed call rolls the block back."""
    if call.function.read_only:
        raise CallError(f"{call.function.name} is read-only and cannot be mined")

    block = await chain.open_block(session, sender=sender)
    ctx = chain.CallContext(sender=sender, height=block.height)

    outcome = await invoke(session, ctx, call)
    if not outcome.ok:
        await session.rollback()
        raise outcome.value

    chain.record_receipt(
        session,
        block=block,
        tx_index=0,
        function=call.function.name,
        args=list(call.literals),
        result=outcome.result,
        ok=True,
    )
    await chain.commit_block(session, block, receipts=1)
    return block.height, outcome.value


async def read_only(session: AsyncSession, *, sender: str, call: PreparedCall) -> CallOutcome:
    if not call.function.read_only:
        raise CallError(f"{call.function.name} is not read-only")

    ctx = chain.CallContext(sender=sender, height=await chain.tip_height(session))
    return await invoke(session, ctx, call)
