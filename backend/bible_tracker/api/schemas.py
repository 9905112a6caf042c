from datetime import date, datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from bible_tracker.models.user import Gender, UserStatus


class CamelModel(BaseModel):
    """JSON uses camelCase keys; Python code uses snake_case attributes."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UserResponse(CamelModel):
    # No password or reset-token fields: they never leave the server
    id: str
    email: str
    first_name: str
    last_name: str
    gender: Gender
    phone_number: Optional[str] = None
    date_of_birth: Optional[date] = None
    country: Optional[str] = None
    city: Optional[str] = None
    address: Optional[str] = None
    postal_code: Optional[str] = None
    profile_picture: Optional[str] = None
    email_verified: bool
    phone_verified: bool
    status: UserStatus
    last_login_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    # Read straight from ORM rows; camelCase aliases come from CamelModel
    model_config = ConfigDict(from_attributes=True)


class MessageResponse(BaseModel):
    message: str
