# teamdash/schemas/user.py
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from datetime import datetime

from teamdash.core.enums import Role


class UserRef(BaseModel):
    id: int
    name: str
    email: str

    class Config:
        from_attributes = True


class User(UserRef):
    role: Role
    created_at: Optional[datetime] = None


class UserCreate(BaseModel):
    name: str = Field(min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(min_length=6)
    # Unknown roles fall back to EMPLOYEE
    role: Optional[str] = None


class LoginRequest(BaseModel):
    email: EmailStr
    password: str


class PasswordUpdate(BaseModel):
    current_password: str
    new_password: str = Field(min_length=6)


class Token(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user_id: int
    name: str
    role: Role


class TokenData(BaseModel):
    email: Optional[str] = None
