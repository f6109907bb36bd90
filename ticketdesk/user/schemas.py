# ticketdesk/user/schemas.py
from datetime import datetime

from pydantic import BaseModel, EmailStr, Field, field_validator

from ticketdesk.core.enums import Role
from ticketdesk.core.pagination import Pagination
from ticketdesk.core.schemas import RequiredStr, TrimmedStr


class EmailNormalized(BaseModel):
    """Emails are stored and compared trimmed and lowercased."""

    @field_validator("email", mode="before", check_fields=False)
    @classmethod
    def normalize_email(cls, value):
        return value.strip().lower() if isinstance(value, str) else value


class UserBase(EmailNormalized):
    name: RequiredStr
    email: EmailStr
    department: TrimmedStr | None = None
    phone: TrimmedStr | None = None


class UserRegister(UserBase):
    password: str = Field(..., min_length=6)


class UserCreate(UserRegister):
    role: Role = Role.USER


class UserLogin(EmailNormalized):
    email: EmailStr
    password: str = Field(..., min_length=1)


class ProfileUpdate(EmailNormalized):
    name: RequiredStr | None = None
    email: EmailStr | None = None
    department: TrimmedStr | None = None
    phone: TrimmedStr | None = None
    password: str | None = Field(default=None, min_length=6)


class UserUpdate(ProfileUpdate):
    role: Role | None = None


class UserOut(BaseModel):
    id: int
    name: str
    email: str
    role: Role
    department: str | None = None
    phone: str | None = None
    created_at: datetime

    model_config = {"from_attributes": True}


class UserBrief(BaseModel):
    id: int
    name: str
    email: str

    model_config = {"from_attributes": True}


class AuthOut(BaseModel):
    token: str
    user: UserOut


class UserList(BaseModel):
    count: int
    pagination: Pagination
    users: list[UserOut]
