# visual_learning/schemas/users.py
"""User and token schemas"""

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from typing import Any, Dict, Optional
from enum import Enum

from visual_learning.utils.validators import normalize_email


class Role(str, Enum):
    """Authorization level stored on a user"""
    STUDENT = "student"
    INSTRUCTOR = "instructor"
    ADMIN = "admin"


# ==================== REQUEST SCHEMAS ====================

class UserCreate(BaseModel):
    """Registration body; unknown fields are stored as sent.

    The role is not part of it: every user starts as a student and only the
    promotion routes change that.
    """
    model_config = ConfigDict(extra="allow")

    email: EmailStr = Field(..., description="User email, unique per user")
    name: Optional[str] = Field(None, description="Display name")
    photo: Optional[str] = Field(None, description="Avatar URL")

    @field_validator('email')
    @classmethod
    def validate_email(cls, value: str) -> str:
        return normalize_email(value)

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(exclude_none=True)
        document["role"] = Role.STUDENT.value
        return document


# ==================== RESPONSE SCHEMAS ====================

class TokenResponse(BaseModel):
    """Signed bearer token"""
    token: str = Field(..., description="JWT access token")


class InstructorCheckResponse(BaseModel):
    instructor: bool


class AdminCheckResponse(BaseModel):
    admin: bool


class MessageResponse(BaseModel):
    """Plain informational reply"""
    message: str
