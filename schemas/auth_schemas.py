from enum import Enum
from typing import Optional
from pydantic import BaseModel, ConfigDict, EmailStr, field_validator
import re


class User(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    email: EmailStr
    display_name: Optional[str] = None
    avatar: Optional[str] = None


class AuthState(BaseModel):
    """One snapshot of the auth session as delivered to subscribers."""
    user: Optional[User] = None
    is_loading: bool = True


class AuthPhase(str, Enum):
    INITIALIZING = "initializing"
    AUTHENTICATED = "authenticated"
    ANONYMOUS = "anonymous"


class Token(BaseModel):
    access_token: str
    token_type: str


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class CreateUserRequest(BaseModel):
    email: EmailStr
    password: str
    display_name: Optional[str] = None

    @field_validator('password')
    @classmethod
    def validate_password(cls, value):
        """
        Password must be at least 8 characters and contain:
        - At least one letter
        - At least one digit
        """
        if len(value) < 8:
            raise ValueError('Password must be at least 8 characters')

        if not re.search(r'[A-Za-z]', value):
            raise ValueError('Password must contain at least one letter')

        if not re.search(r'\d', value):
            raise ValueError('Password must contain at least one digit')

        return value


class AuthStateResponse(BaseModel):
    phase: AuthPhase
    user: Optional[User] = None
    has_token: bool
