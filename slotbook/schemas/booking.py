from pydantic import BaseModel, EmailStr, Field
from datetime import datetime
from enum import Enum
from typing import Optional, Union


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    NO_SHOW = "no_show"


# --- RECORD (what the engine consumes and produces) ---
class Booking(BaseModel):
    id: Optional[int] = None
    # storage may hand back the provider id as int or as its string form
    provider_id: Union[int, str]
    patient_name: str
    patient_email: str
    patient_phone: Optional[str] = None
    date: str
    start_time: str
    end_time: str
    status: BookingStatus = BookingStatus.CONFIRMED
    cancellation_token: str
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True


# --- CREATE ---
class BookingCreate(BaseModel):
    provider_id: int
    patient_name: str = Field(..., min_length=1)
    patient_email: EmailStr
    patient_phone: Optional[str] = None
    date: str = Field(..., description="YYYY-MM-DD")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    reason: Optional[str] = None


# --- RESCHEDULE ---
class BookingReschedule(BaseModel):
    date: str = Field(..., description="YYYY-MM-DD")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")


# --- UPDATE (provider) ---
class BookingUpdate(BaseModel):
    notes: Optional[str] = None
    status: Optional[BookingStatus] = Field(
        default=None,
        description="Allowed values: completed, no_show"
    )


# --- RESPONSE ---
class BookingResponse(BaseModel):
    id: int
    provider_id: int
    patient_name: str
    patient_email: str
    patient_phone: Optional[str] = None
    date: str
    start_time: str
    end_time: str
    status: BookingStatus
    cancellation_token: str
    reason: Optional[str] = None
    notes: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    class Config:
        from_attributes = True
