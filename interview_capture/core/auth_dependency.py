import logging
from dataclasses import dataclass
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from jose import JWTError

from interview_capture.core.security import decode_access_token
from interview_capture.db.models.user import ADMIN
from interview_capture.db.session import SessionLocal

logger = logging.getLogger(__name__)

# auto_error=False so a missing header gets the same 401 body as a bad token
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/auth/login", auto_error=False)


@dataclass(frozen=True)
class CurrentUser:
    """Identity decoded from a verified access token."""
    id: int
    email: str
    role: str
    company_id: Optional[int]

    @property
    def is_admin(self) -> bool:
        return self.role == ADMIN


def get_db():
    """Database session dependency."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(token: Optional[str] = Depends(oauth2_scheme)) -> CurrentUser:
    """Get the caller's identity from the bearer token. No database round trip."""
    if not token:
        raise _unauthorized("Authentication required")

    try:
        payload = decode_access_token(token)
    except JWTError as e:
        logger.debug(f"Rejected token: {e}")
        raise _unauthorized("Invalid token")

    user_id = payload.get("id")
    email = payload.get("email") or payload.get("sub")
    role = payload.get("role")
    if user_id is None or email is None or role is None:
        raise _unauthorized("Invalid token")

    return CurrentUser(
        id=user_id,
        email=email,
        role=role,
        company_id=payload.get("company_id"),
    )


def require_admin(user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Like get_current_user, but only ADMIN identities get through."""
    if not user.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Admin access required"
        )
    return user
