"""Schema for accounts module."""

import datetime
import typing as t
from decimal import Decimal
from uuid import uuid4

from django.conf import settings
from ninja import ModelSchema, Schema
from pydantic import UUID4, EmailStr, Field, StringConstraints, field_serializer, model_validator

from common.schema import StrippedString

from .models import User

Username = t.Annotated[
    str, StringConstraints(min_length=3, max_length=150, strip_whitespace=True, pattern=r"^[\w.@+-]+$")
]


class PublicUserSchema(ModelSchema):
    """What anyone may see about a user."""

    id: UUID4
    display_name: str
    followers_count: int
    following_count: int

    class Meta:
        model = User
        fields = ["id", "username", "display_name", "bio", "avatar", "location", "date_joined"]


class MinimalUserSchema(ModelSchema):
    id: UUID4

    class Meta:
        model = User
        fields = ["id", "username", "display_name", "avatar"]


class UserSchema(ModelSchema):
    """The authenticated user's own view of their account."""

    id: UUID4
    is_platform_admin: bool
    platform_balance: Decimal
    followers_count: int
    following_count: int

    class Meta:
        model = User
        fields = [
            "id",
            "username",
            "email",
            "email_verified",
            "display_name",
            "bio",
            "avatar",
            "location",
            "gender",
            "date_of_birth",
            "preferences",
            "is_admin",
            "is_banned",
            "platform_balance",
            "date_joined",
        ]


class UserProfileSchema(PublicUserSchema):
    events_count: int = 0


class UserSearchResultSchema(UserProfileSchema):
    is_following: bool = False


class PasswordMixin(Schema):
    password: str = Field(..., description="Password", min_length=8, max_length=150)
    password2: str = Field(..., description="Password confirmation", min_length=8, max_length=150)

    @model_validator(mode="after")
    def password_match(self) -> t.Self:
        """Validate that the passwords match."""
        if self.password != self.password2:
            raise ValueError("Passwords do not match")
        return self


class SignupSchema(Schema):
    username: Username
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=150)
    display_name: StrippedString = ""


class LoginSchema(Schema):
    username: StrippedString
    password: str


class RefreshSchema(Schema):
    refresh: str


class TokenPairSchema(Schema):
    access: str
    refresh: str


class AuthResponseSchema(TokenPairSchema):
    user: UserSchema


class VerifyEmailSchema(Schema):
    token: str


class EmailSchema(Schema):
    email: EmailStr


class _BaseEmailJWTPayloadSchema(Schema):
    user_id: UUID4
    email: EmailStr
    exp: datetime.datetime
    jti: str = Field(default_factory=lambda: str(uuid4()))
    aud: str = Field(default_factory=lambda: settings.JWT_AUDIENCE)

    @field_serializer("exp")
    def serialize_exp(self, value: datetime.datetime) -> int:
        return int(value.timestamp())


class VerifyEmailJWTPayloadSchema(_BaseEmailJWTPayloadSchema):
    type: t.Literal["verify_email"] = "verify_email"


class PasswordResetJWTPayloadSchema(_BaseEmailJWTPayloadSchema):
    type: t.Literal["password_reset"] = "password_reset"


class PasswordResetSchema(PasswordMixin):
    token: str


class ProfileUpdateSchema(Schema):
    """Partial profile update: only the fields that are sent are changed."""

    display_name: StrippedString | None = Field(None, max_length=255)
    bio: str | None = None
    avatar: str | None = Field(None, max_length=1024)
    location: StrippedString | None = Field(None, max_length=255)
    gender: User.Gender | None = None
    date_of_birth: datetime.date | None = None
    email: EmailStr | None = None
    preferences: dict[str, t.Any] | None = None

    @model_validator(mode="after")
    def validate_date_of_birth(self) -> t.Self:
        """A birth date in the future is a typo."""
        if self.date_of_birth and self.date_of_birth > datetime.date.today():
            raise ValueError("Date of birth cannot be in the future")
        return self


class AdminUserUpdateSchema(Schema):
    display_name: StrippedString | None = Field(None, max_length=255)
    email: EmailStr | None = None
    is_admin: bool | None = None
    bio: str | None = None
    location: StrippedString | None = Field(None, max_length=255)


class BanStatusSchema(Schema):
    id: UUID4
    username: str
    is_banned: bool


class FollowStatusSchema(Schema):
    is_following: bool


class FriendshipSchema(Schema):
    are_friends: bool


class UserSearchFilterSchema(Schema):
    query: StrippedString = ""
    location: StrippedString = ""
