"""
API dependencies for dependency injection
"""

import logging
import uuid
from typing import Generator, Optional

import jwt
from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from app.config import settings
from app.exceptions import ForbiddenError, UnauthorizedError
from domain.models import AppUser, get_db_session
from repositories import UserRepository

logger = logging.getLogger("canteen.api.auth")

bearer_scheme = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    """
    Database session dependency for FastAPI routes.

    Usage:
        @router.get("/example")
        def example(db: Session = Depends(get_db)):
            # Use db session here
            pass
    """
    yield from get_db_session()


def decode_user_id(token: str) -> uuid.UUID:
    """Verify a bearer token and return the account id it names.

    Tokens are issued by the authentication service; the account id is read
    from the ``userId`` claim, falling back to ``sub``.
    """
    try:
        payload = jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.PyJWTError as e:
        logger.info("Rejected bearer token: %s", e)
        raise UnauthorizedError("Token is not valid")

    raw = payload.get("userId") or payload.get("sub")
    try:
        return uuid.UUID(str(raw))
    except (TypeError, ValueError):
        raise UnauthorizedError("Token is not valid")


def get_current_user_id(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> uuid.UUID:
    """Authenticated account id; 401 when the credential is missing or invalid"""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("No token, authorization denied")
    return decode_user_id(credentials.credentials)


def require_admin(
    user_id: uuid.UUID = Depends(get_current_user_id),
    db: Session = Depends(get_db),
) -> AppUser:
    """
    Admin gate.

    The role is re-read from the account record on every request instead of
    trusting a claim in the token, so a revoked admin loses access at once.
    """
    user = UserRepository(db).get_by_id(user_id)
    if not user or not user.is_admin:
        raise ForbiddenError("Access denied. Admin only.")
    return user
