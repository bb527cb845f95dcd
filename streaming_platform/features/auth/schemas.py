from typing import Annotated

from pydantic import AfterValidator, BaseModel, EmailStr, Field

from streaming_platform.platform.db.models import MAX_BIGINT
from streaming_platform.platform.services.clarity import require_principal

PrincipalStr = Annotated[str, AfterValidator(require_principal)]
UIntField = Annotated[int, Field(ge=0, le=MAX_BIGINT)]


class RegisterRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=8)
    address: PrincipalStr | None = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    address: str


class MeResponse(BaseModel):
    id: str
    email: str
    address: str
    is_platform_owner: bool
