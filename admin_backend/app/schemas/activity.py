# app/schemas/activity.py
from typing import Optional
from pydantic import BaseModel


class ActivityIn(BaseModel):
    # Required fields are checked in the route so a missing one is a 400, not a 422
    userId: Optional[str] = None
    type: Optional[str] = None
    details: Optional[str] = None
