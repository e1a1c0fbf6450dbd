from datetime import datetime, timedelta, timezone

import jwt

from app.core.config import settings

ALGORITHM = "HS256"


def create_access_token(
    username: str,
    secret_key: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    expires_delta = expires_delta or timedelta(
        minutes=settings.access_token_lifetime_minutes
    )
    now = datetime.now(timezone.utc)
    claims = {"sub": username, "iat": now, "exp": now + expires_delta}
    return jwt.encode(claims, secret_key or settings.secret_key, algorithm=ALGORITHM)


def verify_access_token(token: str, secret_key: str | None = None) -> str | None:
    """Return the token's username, or None for a bad, expired or incomplete token."""
    try:
        claims = jwt.decode(
            token,
            secret_key or settings.secret_key,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
    except jwt.PyJWTError:
        return None
    return claims["sub"]
