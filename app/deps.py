from typing import Generator, Optional

from fastapi import Depends, HTTPException, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlmodel import Session

from .auth import parse_token
from .config import settings
from .db import get_session

security = HTTPBearer(auto_error=False)


def get_db() -> Generator[Session, None, None]:
    yield from get_session()


def get_current_session_id(
    request: Request,
    creds: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> str:
    """
    Session token lookup order:
    - Authorization: Bearer <token>
    - session cookie
    No token -> 401; sessions are issued explicitly via POST /api/v1/session.
    """
    token = creds.credentials if creds else request.cookies.get(settings.SESSION_COOKIE_NAME)
    if not token:
        raise HTTPException(status_code=401, detail="Session required")
    return parse_token(token)
