"""Bearer token helpers for the notification inbox API."""

from datetime import datetime, timedelta

from jose import JWTError, jwt

from fleet_notifier.config import Settings

ALGORITHM = "HS256"


def create_access_token(
    data: dict, settings: Settings, expires_delta: timedelta | None = None
) -> str:
    if not settings.secret_key:
        raise ValueError("SECRET_KEY is not configured")
    expire = datetime.utcnow() + (
        expires_delta or timedelta(minutes=settings.access_token_expire_minutes)
    )
    return jwt.encode({**data, "exp": expire}, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str, settings: Settings) -> dict:
    if not settings.secret_key:
        raise ValueError("SECRET_KEY is not configured")
    try:
        return jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as exc:
        raise ValueError("Could not validate credentials") from exc
