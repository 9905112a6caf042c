from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

# bcrypt with a fixed work factor of 10; passlib generates and embeds the salt
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=10)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # Malformed or unrecognised hash
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    return pwd_context.hash(password)


def dummy_verify_password() -> None:
    """Spend the same time as a real verification when there is no user to check."""
    pwd_context.dummy_verify()


@dataclass(frozen=True)
class TokenPayload:
    """Identity carried by a verified session token."""

    user_id: str
    email: str


class TokenService:
    """
    Issues and verifies signed, expiring session tokens (JWT).

    The signing secret is handed in by the application factory; every
    instance built from the same secret accepts the same tokens. Tokens are
    never stored server-side, so there is no revocation before expiry.
    """

    def __init__(
        self,
        secret_key: str,
        algorithm: str = "HS256",
        default_expires: timedelta = timedelta(days=1),
    ) -> None:
        if not secret_key:
            raise ValueError("A signing secret is required")
        self._secret_key = secret_key
        self._algorithm = algorithm
        self._default_expires = default_expires

    def issue(self, user_id: str, email: str, expires_delta: Optional[timedelta] = None) -> str:
        """Create a token for a user, expiring after expires_delta (or the default window)"""
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or self._default_expires)
        to_encode = {
            "sub": str(user_id),
            "email": email,
            "iat": now,
            "exp": expire,
        }
        return jwt.encode(to_encode, self._secret_key, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> Optional[TokenPayload]:
        """
        Decode and verify a token.

        Returns None for a missing, malformed, tampered or expired token.
        Never raises: callers treat None as unauthenticated.
        """
        if not token:
            return None
        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self._algorithm])
        except JWTError:
            return None

        user_id = payload.get("sub")
        email = payload.get("email")
        if not user_id or not isinstance(email, str):
            return None
        return TokenPayload(user_id=str(user_id), email=email)
