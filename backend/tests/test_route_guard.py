import pytest

from bible_tracker.api.guard import GuardAction, RouteGuard
from bible_tracker.core.security import TokenService


@pytest.fixture
def guard():
    return RouteGuard(TokenService("secret"), "auth-token")


@pytest.mark.parametrize("path, authenticated, action, location", [
    ("/", False, GuardAction.REDIRECT_TO_LOGIN, "/login?redirect=%2F"),
    ("/profile", False, GuardAction.REDIRECT_TO_LOGIN, "/login?redirect=%2Fprofile"),
    ("/profile/edit", False, GuardAction.REDIRECT_TO_LOGIN, "/login?redirect=%2Fprofile%2Fedit"),
    ("/", True, GuardAction.ALLOW, None),
    ("/profile", True, GuardAction.ALLOW, None),
    ("/login", True, GuardAction.REDIRECT_TO_HOME, "/"),
    ("/register", True, GuardAction.REDIRECT_TO_HOME, "/"),
    ("/login", False, GuardAction.ALLOW, None),
    ("/register", False, GuardAction.ALLOW, None),
    ("/about", False, GuardAction.ALLOW, None),
    ("/readings", False, GuardAction.ALLOW, None),
    ("/auth/login", True, GuardAction.ALLOW, None),
    ("/static/app.js", False, GuardAction.ALLOW, None),
])
def test_decide(guard, path, authenticated, action, location):
    decision = guard.decide(path, authenticated)

    assert decision.action is action
    assert decision.location == location


def test_profile_prefix_does_not_match_lookalike_paths(guard):
    assert not guard.is_protected("/profiles-public")


def test_unauthenticated_home_redirects_to_login(client):
    response = client.get("/", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/login?redirect=%2F"


def test_invalid_cookie_is_treated_as_unauthenticated(client):
    client.cookies.set("auth-token", "garbage")

    response = client.get("/profile", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/login?redirect=%2Fprofile"


def test_authenticated_login_page_redirects_home(auth_client):
    response = auth_client.get("/login", follow_redirects=False)

    assert response.status_code == 307
    assert response.headers["location"] == "/"


def test_authenticated_home_is_served(auth_client):
    response = auth_client.get("/", follow_redirects=False)

    assert response.status_code == 200
    assert "reader@example.com" in response.text


def test_unauthenticated_login_page_is_served(client):
    response = client.get("/login", follow_redirects=False)

    assert response.status_code == 200


def test_api_routes_are_not_redirected(client):
    response = client.get("/readings", follow_redirects=False)

    # The handler answers for itself
    assert response.status_code == 401
    assert "location" not in response.headers
