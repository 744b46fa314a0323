"""FastAPI dependency utilities."""

from collections.abc import Generator

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from fleet_notifier.application.use_cases.notifications import NotificationEngine
from fleet_notifier.domain.entities import User
from fleet_notifier.infrastructure.database import iter_session
from fleet_notifier.infrastructure.repositories import UserRepository
from fleet_notifier.infrastructure.security import decode_access_token

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="auth/token", auto_error=False)


def _credentials_error(detail: str = "Invalid credentials") -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_engine(request: Request) -> NotificationEngine:
    """Return the engine built by the application lifespan."""

    return request.app.state.notification_engine


def get_db(engine: NotificationEngine = Depends(get_engine)) -> Generator[Session, None, None]:
    """Yield a database session and close it afterwards."""

    yield from iter_session(engine.session_factory)


def get_current_user(
    token: str | None = Depends(oauth2_scheme),
    db: Session = Depends(get_db),
    engine: NotificationEngine = Depends(get_engine),
) -> User:
    """Return the user identified by the bearer token ``sub`` claim."""

    if not token:
        raise _credentials_error()
    try:
        payload = decode_access_token(token, engine.settings)
    except ValueError as exc:
        raise _credentials_error() from exc

    try:
        user_id = int(payload.get("sub"))
    except (TypeError, ValueError) as exc:
        raise _credentials_error() from exc

    user = UserRepository(db).get(user_id)
    if user is None:
        raise _credentials_error("User not found")
    return user


def get_current_active_user(current_user: User = Depends(get_current_user)) -> User:
    """Ensure the authenticated user is active."""

    if not current_user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user",
        )
    return current_user


def require_admin(current_user: User = Depends(get_current_active_user)) -> User:
    """Ensure the authenticated user has administrator privileges."""

    if not current_user.is_admin():
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Not authorized",
        )
    return current_user
