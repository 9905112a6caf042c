from typing import Optional

from fastapi import Request, Response


class SessionCookieManager:
    """Attaches the session token to responses as an HTTP-only cookie."""

    def __init__(
        self,
        cookie_name: str,
        secure: bool,
        max_age: int,
        remember_me_max_age: int,
    ) -> None:
        self.cookie_name = cookie_name
        self.secure = secure
        self.max_age = max_age
        self.remember_me_max_age = remember_me_max_age

    def max_age_for(self, remember_me: bool = False) -> int:
        return self.remember_me_max_age if remember_me else self.max_age

    def set(self, response: Response, token: str, remember_me: bool = False) -> None:
        response.set_cookie(
            key=self.cookie_name,
            value=token,
            # 1 day, or 30 days when the user asked to be remembered
            max_age=self.max_age_for(remember_me),
            path="/",
            # Secure only in production so local http development still works
            secure=self.secure,
            # Not readable from page scripts
            httponly=True,
            samesite="lax",
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            key=self.cookie_name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite="lax",
        )

    def read(self, request: Request) -> Optional[str]:
        return request.cookies.get(self.cookie_name) or None
