"""
Navigation guard.

Runs before any page handler and decides, from the request path and the
session cookie alone, whether to let the request through or redirect it.
API routes and static assets are excluded and authenticate per endpoint.
"""

import enum
import logging
from dataclasses import dataclass
from typing import Optional, Sequence
from urllib.parse import quote

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.responses import RedirectResponse

from bible_tracker.core.security import TokenService

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"
HOME_PATH = "/"

AUTH_ONLY_PREFIXES = ("/login", "/register")
PROTECTED_PREFIXES = ("/profile",)
EXCLUDED_PREFIXES = (
    "/auth",
    "/readings",
    "/health",
    "/static",
    "/docs",
    "/redoc",
    "/openapi.json",
    "/favicon.ico",
)


class GuardAction(str, enum.Enum):
    ALLOW = "allow"
    REDIRECT_TO_LOGIN = "redirect_to_login"
    REDIRECT_TO_HOME = "redirect_to_home"


@dataclass(frozen=True)
class GuardDecision:
    action: GuardAction
    location: Optional[str] = None


def _matches(path: str, prefixes: Sequence[str]) -> bool:
    return any(path == prefix or path.startswith(prefix.rstrip("/") + "/") for prefix in prefixes)


class RouteGuard:
    """Maps (path, authenticated) to allow / redirect."""

    def __init__(
        self,
        token_service: TokenService,
        cookie_name: str,
        auth_only_prefixes: Sequence[str] = AUTH_ONLY_PREFIXES,
        protected_prefixes: Sequence[str] = PROTECTED_PREFIXES,
        excluded_prefixes: Sequence[str] = EXCLUDED_PREFIXES,
    ) -> None:
        self.token_service = token_service
        self.cookie_name = cookie_name
        self.auth_only_prefixes = tuple(auth_only_prefixes)
        self.protected_prefixes = tuple(protected_prefixes)
        self.excluded_prefixes = tuple(excluded_prefixes)

    def is_excluded(self, path: str) -> bool:
        return _matches(path, self.excluded_prefixes)

    def is_auth_only(self, path: str) -> bool:
        return _matches(path, self.auth_only_prefixes)

    def is_protected(self, path: str) -> bool:
        if self.is_auth_only(path):
            return False
        return path == HOME_PATH or _matches(path, self.protected_prefixes)

    def decide(self, path: str, authenticated: bool) -> GuardDecision:
        if self.is_excluded(path):
            return GuardDecision(GuardAction.ALLOW)

        if self.is_protected(path) and not authenticated:
            location = f"{LOGIN_PATH}?redirect={quote(path, safe='')}"
            return GuardDecision(GuardAction.REDIRECT_TO_LOGIN, location)

        if self.is_auth_only(path) and authenticated:
            return GuardDecision(GuardAction.REDIRECT_TO_HOME, HOME_PATH)

        return GuardDecision(GuardAction.ALLOW)


class RouteGuardMiddleware(BaseHTTPMiddleware):
    def __init__(self, app, guard: RouteGuard) -> None:
        super().__init__(app)
        self.guard = guard

    async def dispatch(self, request: Request, call_next):
        path = request.url.path
        if self.guard.is_excluded(path):
            # API routes check the cookie themselves
            return await call_next(request)

        # Missing cookie and failed verification are the same thing here
        identity = self.guard.token_service.verify(request.cookies.get(self.guard.cookie_name))
        request.state.identity = identity

        decision = self.guard.decide(path, authenticated=identity is not None)
        if decision.action is GuardAction.ALLOW:
            return await call_next(request)

        logger.debug(f"Route guard {decision.action.value}: {path} -> {decision.location}")
        return RedirectResponse(url=decision.location, status_code=307)
