# visual_learning/schemas/classes.py
"""Class listing schemas"""

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Dict, Optional
from enum import Enum


class ClassStatus(str, Enum):
    """Moderation state of a class"""
    PENDING = "pending"
    APPROVED = "approved"
    DENIED = "denied"


class ClassCreate(BaseModel):
    """New class submitted by an instructor.

    Every class enters moderation as pending without feedback, whatever the
    body says.
    """
    model_config = ConfigDict(extra="allow")

    name: Optional[str] = Field(None, description="Class title")
    image: Optional[str] = Field(None, description="Cover image URL")
    instructor_name: Optional[str] = Field(None, description="Owner display name")
    instructor_email: Optional[str] = Field(None, description="Owner email")
    price: Optional[float] = Field(None, ge=0, description="Seat price")
    available_seats: Optional[int] = Field(None, ge=0, description="Seats still open")
    enrolled: int = Field(0, ge=0, description="Students enrolled so far")

    def to_document(self) -> Dict[str, Any]:
        document = self.model_dump(exclude_none=True)
        document.pop("feedback", None)
        document["status"] = ClassStatus.PENDING.value
        return document


class ClassUpdate(BaseModel):
    """Partial class edit; only the fields sent are written"""
    model_config = ConfigDict(extra="allow", use_enum_values=True)

    name: Optional[str] = None
    image: Optional[str] = None
    instructor_name: Optional[str] = None
    instructor_email: Optional[str] = None
    price: Optional[float] = Field(None, ge=0)
    available_seats: Optional[int] = Field(None, ge=0)
    enrolled: Optional[int] = Field(None, ge=0)
    status: Optional[ClassStatus] = None
    feedback: Optional[str] = None


class FeedbackRequest(BaseModel):
    feedback: str = Field(..., description="Admin feedback for the instructor")
