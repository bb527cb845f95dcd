from datetime import datetime, timedelta, timezone

from jose import jwt

from streaming_platform.platform.config import settings


def create_access_token(subject: str, principal: str) -> str:
    issued_at = datetime.now(timezone.utc)
    expires_at = issued_at + timedelta(minutes=settings.jwt_expiration_minutes)

    claims = {
        "sub": subject,
        "principal": principal,
        "iat": int(issued_at.timestamp()),
        "exp": int(expires_at.timestamp()),
    }

    return jwt.encode(claims, settings.jwt_secret, algorithm=settings.jwt_algorithm)
