"""
app/schemas/principal.py
Verified caller attached to a request.
"""
from typing import Optional
from pydantic import BaseModel, Field


class Principal(BaseModel):
    uid: str = Field(..., description="Firebase UID")
    email: Optional[str] = Field(None, description="E-mail (if any)")
    display_name: Optional[str] = Field(None, description="Display name (if any)")
    claims: dict = Field(default_factory=dict, description="Decoded ID token claims")
