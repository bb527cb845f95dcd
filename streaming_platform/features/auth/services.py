import logging
import secrets

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.auth.schemas import TokenResponse
from streaming_platform.features.platform_admin.services import ensure_config
from streaming_platform.platform.db.models import Account
from streaming_platform.platform.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)

_C32_ALPHABET = "0123456789ABCDEFGHJKMNPQRSTVWXYZ"


def _bad_request(detail: str) -> HTTPException:
    return HTTPException(status_code=400, detail=detail)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=401, detail="Invalid credentials")


def generate_principal() -> str:
    """Random testnet-style standard principal (``ST`` + 39 c32 characters)."""
    return "ST" + "".join(secrets.choice(_C32_ALPHABET) for _ in range(39))


async def register_account(
    session: AsyncSession,
    email: str,
    password: str,
    address: str | None,
) -> TokenResponse:
    existing = await session.execute(select(Account).where(Account.email == email))
    if existing.scalar_one_or_none() is not None:
        raise _bad_request("Email already registered")

    if address is not None:
        taken = await session.execute(select(Account).where(Account.address == address))
        if taken.scalar_one_or_none() is not None:
            raise _bad_request("Address already registered")
    else:
        address = generate_principal()

    account = Account(
        email=email,
        hashed_password=hash_password(password),
        address=address,
    )

    session.add(account)
    await session.flush()
    await ensure_config(session, deployer=account.address)
    await session.commit()

    logger.info("Registered account address=%s", account.address)
    token = create_access_token(account.id, account.address)
    return TokenResponse(access_token=token, address=account.address)


async def login_account(session: AsyncSession, email: str, password: str) -> TokenResponse:
    result = await session.execute(select(Account).where(Account.email == email))
    account = result.scalar_one_or_none()
    if account is None:
        raise _unauthorized()

    if not verify_password(password, account.hashed_password):
        raise _unauthorized()

    token = create_access_token(account.id, account.address)
    return TokenResponse(access_token=token, address=account.address)
