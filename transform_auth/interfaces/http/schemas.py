from datetime import datetime

from pydantic import BaseModel, EmailStr, Field
from pydantic.alias_generators import to_camel

from ...domain.entities import Role


class SignupReq(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=1, max_length=1024)

    class Config:
        extra = "forbid"


class LoginReq(BaseModel):
    email: EmailStr
    password: str = Field(min_length=1, max_length=1024)

    class Config:
        extra = "forbid"


class UserResp(BaseModel):
    """Safe projection of a user; never carries the password hash."""
    id: str
    name: str
    email: str
    role: Role
    created_at: datetime | None = None
    last_login: datetime | None = None

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class LoginResp(BaseModel):
    user: UserResp
    token: str
    token_type: str = "bearer"

    class Config:
        alias_generator = to_camel
        populate_by_name = True
