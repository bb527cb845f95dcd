from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from streaming_platform.features.auth.schemas import LoginRequest, MeResponse, RegisterRequest, TokenResponse
from streaming_platform.features.auth.services import login_account, register_account
from streaming_platform.features.platform_admin.services import get_config
from streaming_platform.platform.db.models import Account
from streaming_platform.platform.db.session import get_session
from streaming_platform.platform.security import get_current_account

router = APIRouter(prefix="/auth")


async def build_me_response(session: AsyncSession, account: Account) -> MeResponse:
    config = await get_config(session)
    return MeResponse(
        id=account.id,
        email=account.email,
        address=account.address,
        is_platform_owner=config.platform_owner == account.address,
    )


@router.post("/register", response_model=TokenResponse)
async def register(body: RegisterRequest, session: AsyncSession = Depends(get_session)) -> TokenResponse:
    return await register_account(
        session=session,
        email=str(body.email),
        password=body.password,
        address=body.address,
    )


@router.post("/login", response_model=TokenResponse)
async def login(body: LoginRequest, session: AsyncSession = Depends(get_session)) -> TokenResponse:
    return await login_account(session=session, email=str(body.email), password=body.password)


@router.get("/me", response_model=MeResponse)
async def me(
    account: Account = Depends(get_current_account),
    session: AsyncSession = Depends(get_session),
) -> MeResponse:
    return await build_me_response(session, account)
