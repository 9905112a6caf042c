import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional

from fastapi import APIRouter, Depends, Response, status
from pydantic import EmailStr, Field, field_validator
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from bible_tracker.api.dependencies import get_current_user, get_session_cookies, get_token_service
from bible_tracker.api.schemas import CamelModel, MessageResponse, UserResponse
from bible_tracker.core.database import get_db
from bible_tracker.core.errors import AuthenticationError, ConflictError, UnexpectedError
from bible_tracker.core.security import (
    TokenService,
    dummy_verify_password,
    get_password_hash,
    verify_password,
)
from bible_tracker.core.session_cookie import SessionCookieManager
from bible_tracker.models.user import Gender, User, UserStatus

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])

# Same message for unknown email and wrong password
INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
DUPLICATE_EMAIL_MESSAGE = "User with this email already exists"


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(min_length=1)
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    gender: Gender
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None

    @field_validator(
        "phone_number", "date_of_birth", "country", "city", "address", "postal_code",
        mode="before",
    )
    @classmethod
    def blank_to_none(cls, value):
        # Forms submit empty strings for untouched optional inputs
        if isinstance(value, str) and not value.strip():
            return None
        return value


class LoginRequest(CamelModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)
    remember_me: bool = False


class RegisterResponse(CamelModel):
    message: str
    user: UserResponse


class LoginResponse(CamelModel):
    message: str
    user: UserResponse
    token: str


class CurrentUserResponse(CamelModel):
    user: UserResponse


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(user_data: UserCreate, db: Session = Depends(get_db)):
    """
    Register a new user.

    Plain def: bcrypt and the synchronous session would otherwise block the
    event loop, so FastAPI runs this in its threadpool.
    """
    email = user_data.email.lower()
    try:
        # Explicit check gives a clean 409; the unique constraint covers races
        existing_user = db.query(User.id).filter(User.email == email).first()
        if existing_user:
            raise ConflictError(DUPLICATE_EMAIL_MESSAGE)

        db_user = User(
            email=email,
            # Hash before storing; plaintext never reaches the database
            password=get_password_hash(user_data.password),
            first_name=user_data.first_name,
            last_name=user_data.last_name,
            gender=user_data.gender,
            phone_number=user_data.phone_number,
            date_of_birth=user_data.date_of_birth,
            country=user_data.country,
            city=user_data.city,
            address=user_data.address,
            postal_code=user_data.postal_code,
            email_verified=False,
            phone_verified=False,
            status=UserStatus.PENDING_VERIFICATION,
        )
        db.add(db_user)
        db.commit()
        db.refresh(db_user)
    except IntegrityError:
        db.rollback()
        raise ConflictError(DUPLICATE_EMAIL_MESSAGE)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Registration failed")
        raise UnexpectedError("An error occurred during registration")

    logger.info(f"Registered user {db_user.id}")
    return {"message": "User registered successfully", "user": db_user}


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: LoginRequest,
    response: Response,
    db: Session = Depends(get_db),
    token_service: TokenService = Depends(get_token_service),
    session_cookies: SessionCookieManager = Depends(get_session_cookies),
):
    """
    Login, returning the token in the body and as a session cookie.

    Body delivery serves non-browser clients; the cookie serves the browser.
    Runs in the threadpool for the same reason as register.
    """
    email = credentials.email.strip().lower()
    try:
        user = db.query(User).filter(User.email == email).first()

        if user is None:
            dummy_verify_password()
            logger.info("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        if not verify_password(credentials.password, user.password):
            logger.info("Failed login attempt")
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        # Only a successful login moves last_login_at
        user.last_login_at = datetime.now(timezone.utc)
        db.commit()
        db.refresh(user)
    except SQLAlchemyError:
        db.rollback()
        logger.exception("Login failed")
        raise UnexpectedError("An error occurred during login")

    # Token lives exactly as long as the cookie carrying it
    max_age = session_cookies.max_age_for(credentials.remember_me)
    token = token_service.issue(user.id, user.email, expires_delta=timedelta(seconds=max_age))
    session_cookies.set(response, token, remember_me=credentials.remember_me)

    logger.info(f"User {user.id} logged in")
    return {"message": "Login successful", "user": user, "token": token}


@router.post("/logout", response_model=MessageResponse)
async def logout(
    response: Response,
    session_cookies: SessionCookieManager = Depends(get_session_cookies),
):
    """Clear the session cookie. The token itself stays valid until it expires."""
    session_cookies.clear(response)
    return {"message": "Logged out successfully"}


@router.get("/me", response_model=CurrentUserResponse)
async def get_current_user_info(current_user: User = Depends(get_current_user)):
    """Get current user information"""
    return {"user": current_user}
