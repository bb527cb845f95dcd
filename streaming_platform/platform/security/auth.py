from fastapi import Depends, HTTPException
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.platform.config import settings
from streaming_platform.platform.db.models import Account
from streaming_platform.platform.db.session import get_session

_bearer = HTTPBearer(auto_error=False)


def _unauthorized() -> HTTPException:
    return HTTPException(status_code=401, detail="Unauthorized")


async def get_current_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    session: AsyncSession = Depends(get_session),
) -> Account:
    if credentials is None:
        raise _unauthorized()

    token = credentials.credentials

    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JWTError as exc:
        raise _unauthorized() from exc

    subject = payload.get("sub")
    if not isinstance(subject, str) or not subject:
        raise _unauthorized()

    result = await session.execute(select(Account).where(Account.id == subject))
    account = result.scalar_one_or_none()
    if account is None:
        raise _unauthorized()

    return account


async def get_optional_account(
    credentials: HTTPAuthorizationCredentials | None = Depends(_bearer),
    session: AsyncSession = Depends(get_session),
) -> Account | None:
    if credentials is None:
        return None
    return await get_current_account(credentials=credentials, session=session)
