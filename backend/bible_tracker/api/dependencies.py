from fastapi import Depends, Request
from sqlalchemy.orm import Session

from bible_tracker.core.database import get_db
from bible_tracker.core.errors import AuthenticationError
from bible_tracker.core.security import TokenPayload, TokenService
from bible_tracker.core.session_cookie import SessionCookieManager
from bible_tracker.models.user import User


def get_token_service(request: Request) -> TokenService:
    return request.app.state.token_service


def get_session_cookies(request: Request) -> SessionCookieManager:
    return request.app.state.session_cookies


async def get_current_identity(
    request: Request,
    token_service: TokenService = Depends(get_token_service),
    session_cookies: SessionCookieManager = Depends(get_session_cookies),
) -> TokenPayload:
    """
    Re-derive the caller's identity from the session cookie.

    API routes are not covered by the navigation guard, so every API handler
    depends on this directly. A missing cookie and an invalid token are both
    401s.
    """
    token = session_cookies.read(request)
    if token is None:
        raise AuthenticationError("Not authenticated")

    payload = token_service.verify(token)
    if payload is None:
        raise AuthenticationError("Invalid token")

    return payload


async def get_current_user(
    identity: TokenPayload = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> User:
    """Load the user record behind a verified token"""
    user = db.query(User).filter(User.id == identity.user_id).first()
    if user is None:
        # Token is valid but the account behind it is gone
        raise AuthenticationError("Invalid token")
    return user
