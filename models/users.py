# models/users.py - User profile and favorites models
from pydantic import BaseModel, ConfigDict, HttpUrl, field_validator
from enum import Enum
from typing import List, Optional


class UserRole(str, Enum):
    LOOKER = "Looker"
    PROVIDER = "Provider"
    ADMIN = "Admin"


class CreateUserRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    email: str
    displayName: Optional[str] = None
    photoURL: Optional[HttpUrl] = None
    role: UserRole = UserRole.LOOKER

    @field_validator('email')
    @classmethod
    def validate_email(cls, v):
        if '@' not in v:
            raise ValueError('Invalid email address')
        return v

    @field_validator('role')
    @classmethod
    def validate_role(cls, v):
        if v == UserRole.ADMIN:
            raise ValueError('Admin role cannot be self-assigned')
        return v


class UpdateUserRequest(BaseModel):
    """All fields optional; only the ones sent are written"""
    model_config = ConfigDict(extra='forbid')

    name: Optional[str] = None
    avatarUrl: Optional[str] = None
    phoneNumber: Optional[str] = None
    address: Optional[str] = None
    bio: Optional[str] = None
    skills: Optional[List[str]] = None

    @field_validator('avatarUrl')
    @classmethod
    def validate_avatar_url(cls, v):
        if v is None or v.startswith('data:image/'):
            return v
        if not v.startswith(('http://', 'https://')):
            raise ValueError('avatarUrl must be an http(s) URL or a data:image payload')
        return v

    @field_validator('bio')
    @classmethod
    def validate_bio(cls, v):
        if v and len(v) > 1000:
            raise ValueError('Bio cannot exceed 1000 characters')
        return v


class FavoriteProviderRequest(BaseModel):
    providerId: str
