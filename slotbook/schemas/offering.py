# slotbook/schemas/offering.py

from pydantic import BaseModel, Field
from typing import Optional


# Shared fields
class OfferingBase(BaseModel):
    name: str
    description: Optional[str] = None
    duration_minutes: int = Field(..., description="session length, 15..240")
    break_minutes: int = Field(0, description="buffer after each session, 0..60")
    price: float = 0.0
    is_active: Optional[bool] = True


# Provider creates offering
class OfferingCreate(OfferingBase):
    pass


# What API returns
class OfferingResponse(OfferingBase):
    id: int
    provider_id: int

    class Config:
        from_attributes = True
