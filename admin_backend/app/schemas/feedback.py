# app/schemas/feedback.py
from typing import Literal, Optional
from pydantic import BaseModel, Field

FeedbackStatus = Literal["new", "read", "resolved"]


class FeedbackIn(BaseModel):
    userId: Optional[str] = None
    message: Optional[str] = None
    userName: Optional[str] = Field(None, description="Defaults to 'Anonymous'")
    userEmail: Optional[str] = None


class FeedbackStatusIn(BaseModel):
    # Free-form so that "resolved" gets a pointed 400 instead of a schema error
    status: Optional[str] = None


class FeedbackActionOut(BaseModel):
    success: bool = True
    feedbackId: str
    status: Optional[FeedbackStatus] = None
    message: Optional[str] = None
