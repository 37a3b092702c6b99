# slotbook/schemas/availability.py
from pydantic import BaseModel, Field, conint, model_validator
from typing import List, Optional


class WeeklyAvailabilityEntry(BaseModel):
    day_of_week: conint(ge=0, le=6) = Field(..., description="0=Sun, 1=Mon, …, 6=Sat")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")

    class Config:
        from_attributes = True


class BlockedRange(BaseModel):
    """
    Span during which the provider takes no bookings.
    (from_date, start_time) .. (to_date, end_time) is one continuous block;
    the legacy single-day payload {"date": ...} is accepted as well.
    """
    from_date: str = Field(..., description="YYYY-MM-DD")
    to_date: str = Field(..., description="YYYY-MM-DD")
    start_time: str = Field(..., description="HH:MM")
    end_time: str = Field(..., description="HH:MM")
    reason: Optional[str] = None

    @model_validator(mode="before")
    @classmethod
    def _legacy_single_day(cls, data):
        if isinstance(data, dict) and data.get("date"):
            data = dict(data)
            data.setdefault("from_date", data["date"])
            data.setdefault("to_date", data["date"])
            data.pop("date")
        return data

    class Config:
        from_attributes = True


# Wholesale replacement: a missing list is left untouched, a present one replaces
class AvailabilityUpdate(BaseModel):
    weekly_availability: Optional[List[WeeklyAvailabilityEntry]] = None
    blocked_ranges: Optional[List[BlockedRange]] = None


class AvailabilityResponse(BaseModel):
    provider_id: int
    weekly_availability: List[WeeklyAvailabilityEntry]
    blocked_ranges: List[BlockedRange]
