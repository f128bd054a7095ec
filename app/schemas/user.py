# ============================================================================
# FILE: app/schemas/user.py
# ============================================================================
from pydantic import BaseModel, EmailStr, Field
from typing import Optional
from app.core.permissions import Role

class UserCreate(BaseModel):
    """Schema for user registration"""
    email: EmailStr
    password: str = Field(..., min_length=1)
    username: str = Field(..., min_length=1)

class UserLogin(BaseModel):
    """Schema for user login"""
    email: EmailStr
    password: str = Field(..., min_length=1)

class UserUpdate(BaseModel):
    """Fields an admin may change on any account"""
    email: Optional[EmailStr] = None
    username: Optional[str] = None
    role: Optional[Role] = None

class ProfileUpdate(BaseModel):
    """Fields a user may change on their own account"""
    email: Optional[EmailStr] = None
    username: Optional[str] = None

class PasswordUpdate(BaseModel):
    password: str = Field(..., min_length=1)
