"""
Pydantic schemas for users and authentication.
"""

from pydantic import AfterValidator, EmailStr, Field
from typing import Annotated, List

from jobly.schemas.base import CamelModel, RequestModel


def _check_email_length(v: str) -> str:
    if not 6 <= len(v) <= 60:
        raise ValueError('Email must be 6-60 characters')
    return v


Email = Annotated[EmailStr, AfterValidator(_check_email_length)]


class UserRegisterRequest(RequestModel):
    """Request schema for self-registration (never creates an admin)."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=5, max_length=20)
    first_name: str = Field(..., min_length=1, max_length=30)
    last_name: str = Field(..., min_length=1, max_length=30)
    email: Email


class UserNewRequest(UserRegisterRequest):
    """Request schema for admins creating a user, optionally another admin."""
    is_admin: bool = False


class UserUpdateRequest(RequestModel):
    """Request schema for a partial user update."""
    first_name: str = Field(None, min_length=1, max_length=30)
    last_name: str = Field(None, min_length=1, max_length=30)
    password: str = Field(None, min_length=5, max_length=20)
    email: Email = None


class UserLoginRequest(RequestModel):
    """Request schema for getting a token."""
    username: str = Field(..., min_length=1, max_length=25)
    password: str = Field(..., min_length=1, max_length=20)


class TokenResponse(CamelModel):
    """JWT token response."""
    token: str


class UserResponse(CamelModel):
    """User profile response (no password)."""
    username: str
    first_name: str
    last_name: str
    email: str
    is_admin: bool


class UserDetailResponse(UserResponse):
    """User profile with the ids of jobs applied to."""
    jobs: List[int] = []


class UserEnvelope(CamelModel):
    user: UserResponse


class UserDetailEnvelope(CamelModel):
    user: UserDetailResponse


class UserListEnvelope(CamelModel):
    users: List[UserDetailResponse]


class UserCreatedEnvelope(CamelModel):
    user: UserResponse
    token: str


class CurrentUser(CamelModel):
    """Identity carried in a verified token."""
    username: str
    is_admin: bool = False
