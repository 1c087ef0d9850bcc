"""Shared API dependencies for sessions and optional authentication."""

from typing import Annotated

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from jose import JWTError, jwt
from sqlalchemy.orm import Session

from forum_votes.core.settings import settings
from forum_votes.db.session import get_db
from forum_votes.models import User

# Voting is open to anonymous clients, so a missing token is not an error.
bearer_scheme = HTTPBearer(auto_error=False)

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_optional_user_id(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> int | None:
    """Return the authenticated user's id, or ``None`` for anonymous requests.

    Args:
        credentials: HTTP Bearer token credentials, if supplied
        db: Database session

    Returns:
        The user id carried in the token's ``sub`` claim

    Raises:
        HTTPException: If a token is supplied but invalid or names an unknown user
    """
    if credentials is None:
        return None
    try:
        payload = jwt.decode(
            credentials.credentials,
            settings.secret_key,
            algorithms=[settings.jwt_algorithm],
        )
        subject = payload.get("sub")
        if subject is None:
            raise HTTPException(
                status_code=status.HTTP_401_UNAUTHORIZED,
                detail="Could not validate credentials",
            )
        user_id = int(subject)
    except (JWTError, ValueError) as err:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Could not validate credentials",
        ) from err

    if db.get(User, user_id) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="User not found",
        )
    return user_id


def create_access_token(user_id: int, extra_claims: dict[str, str] | None = None) -> str:
    """Create a session token for a user.

    Issuing tokens belongs to the login flow; this helper exists for
    tooling and tests that need a signed session.
    """
    to_encode: dict[str, object] = {"sub": str(user_id)}
    if extra_claims:
        to_encode.update(extra_claims)
    encoded_jwt: str = jwt.encode(to_encode, settings.secret_key, algorithm=settings.jwt_algorithm)
    return encoded_jwt


# Type alias for optional current user dependency
OptionalUserIdDep = Annotated[int | None, Depends(get_optional_user_id)]
