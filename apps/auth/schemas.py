"""
Auth schemas for API.
"""

from ninja import Schema
from pydantic import EmailStr, Field

from apps.users.schemas import UserProfileOut


class LoginIn(Schema):
    email: str
    password: str


class RegisterIn(Schema):
    email: EmailStr
    password: str = Field(min_length=8, max_length=72)
    name: str = Field(min_length=2, max_length=255)


class AuthOut(Schema):
    user: UserProfileOut
    token: str
