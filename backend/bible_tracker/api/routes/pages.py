"""
Navigational pages.

These are deliberately bare: the calendar itself is rendered client-side.
They exist so the route guard has real targets to protect and redirect to.
"""

from html import escape
from typing import Optional

from fastapi import APIRouter, Request
from fastapi.responses import HTMLResponse

from bible_tracker.core.security import TokenPayload

router = APIRouter(tags=["pages"], include_in_schema=False)


def _page(title: str, body: str) -> HTMLResponse:
    return HTMLResponse(
        f"<!doctype html><html><head><meta charset=\"utf-8\"><title>{escape(title)}</title></head>"
        f"<body>{body}</body></html>"
    )


def _identity(request: Request) -> Optional[TokenPayload]:
    # Set by RouteGuardMiddleware
    return getattr(request.state, "identity", None)


@router.get("/", response_class=HTMLResponse)
async def home(request: Request):
    identity = _identity(request)
    email = escape(identity.email) if identity else ""
    return _page("Bible Tracker", f"<h1>Reading calendar</h1><p>Signed in as {email}</p>")


@router.get("/profile", response_class=HTMLResponse)
async def profile(request: Request):
    identity = _identity(request)
    email = escape(identity.email) if identity else ""
    return _page(
        "Profile",
        f"<h1>Profile</h1><p>{email}</p>"
        "<form method=\"post\" action=\"/auth/logout\"><button>Sign out</button></form>",
    )


@router.get("/login", response_class=HTMLResponse)
async def login_page(redirect: str = "/"):
    return _page(
        "Sign in",
        f"<h1>Sign in</h1><div id=\"login\" data-redirect=\"{escape(redirect)}\"></div>",
    )


@router.get("/register", response_class=HTMLResponse)
async def register_page():
    return _page("Create account", "<h1>Create account</h1><div id=\"register\"></div>")
