"""Pydantic models for authentication."""
from pydantic import BaseModel, EmailStr, Field


class UserLogin(BaseModel):
    """User login request."""

    email: str = Field(..., min_length=1)
    password: str = Field(..., min_length=1)


class UserRegister(BaseModel):
    """User registration request."""

    name: str = Field(..., min_length=1, max_length=100)
    email: EmailStr
    password: str = Field(..., min_length=6, max_length=100)


class UserInfo(BaseModel):
    """User as returned by the backend."""

    id: str = Field(..., alias="_id")
    name: str = ""
    email: str = ""
    role: str = "student"

    class Config:
        populate_by_name = True

    @property
    def is_admin(self) -> bool:
        return self.role == "admin"


class AuthResponse(BaseModel):
    """Token issued on login or registration."""

    token: str
    user: UserInfo


class StudentSummary(BaseModel):
    """Student row in admin listings."""

    id: str = Field(..., alias="_id")
    name: str = ""
    email: str = ""
    createdAt: str | None = None

    class Config:
        populate_by_name = True
