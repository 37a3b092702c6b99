# slotbook/schemas/slot.py
from enum import Enum
from pydantic import BaseModel
from typing import List, Optional


class SlotStatus(str, Enum):
    AVAILABLE = "available"
    BLOCKED = "blocked"
    BOOKED = "booked"
    # whole-day marker for a future date with no weekly window
    UNAVAILABLE = "unavailable"


class Slot(BaseModel):
    """Derived candidate window: session followed by its break. Never persisted."""

    date: str
    start_time: str
    end_time: str
    session_start: str
    session_end: str
    break_start: str
    break_end: str
    status: SlotStatus = SlotStatus.AVAILABLE
    booking_id: Optional[int] = None
    # provider view only
    patient_name: Optional[str] = None
    patient_email: Optional[str] = None


class SlotsResponse(BaseModel):
    provider_id: int
    start_date: str
    end_date: str
    session_minutes: int
    break_minutes: int
    slots: List[Slot]
