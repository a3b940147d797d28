"""User schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field


class UserCreate(BaseModel):
    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=8)
    display_name: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None
    can_manage_users: bool = False


class UserUpdate(BaseModel):
    display_name: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None
    ntfy_topic: str | None = Field(default=None, max_length=200)
    password: str | None = Field(default=None, min_length=8)
    can_manage_users: bool | None = None
    shares_library: bool | None = None

    model_config = ConfigDict(extra="forbid")


class UserSettingsUpdate(BaseModel):
    display_name: str | None = Field(default=None, max_length=200)
    email: EmailStr | None = None
    ntfy_topic: str | None = Field(default=None, max_length=200)

    model_config = ConfigDict(extra="forbid")


class SharingFlagUpdate(BaseModel):
    shares_library: bool


class UserRead(BaseModel):
    id: int
    username: str
    display_name: str
    email: str | None
    ntfy_topic: str | None
    can_manage_users: bool
    origin: str
    shares_library: bool
    created_at: datetime | None

    model_config = ConfigDict(from_attributes=True)


class UserSummaryRead(BaseModel):
    username: str
    display_name: str
    origin: str

    model_config = ConfigDict(from_attributes=True)
