# slotbook/db/models/availability.py
from sqlalchemy import Column, Integer, ForeignKey, String, CheckConstraint
from sqlalchemy.orm import relationship
from slotbook.db.base import Base


class WeeklyAvailability(Base):
    """
    Recurring weekly availability for a provider.
    day_of_week: 0 (Sunday) .. 6 (Saturday)
    start_time, end_time: wall-clock "HH:MM"
    """
    __tablename__ = "weekly_availabilities"
    __table_args__ = (
        CheckConstraint('day_of_week BETWEEN 0 AND 6'),
    )

    id = Column(Integer, primary_key=True, index=True)
    provider_id = Column(Integer, ForeignKey("providers.id", ondelete="CASCADE"), nullable=False)
    day_of_week = Column(Integer, nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)

    provider = relationship("Provider", back_populates="availabilities")


class BlockedRange(Base):
    """
    One-off block for a provider (vacations, conferences, sick days).
    (from_date, start_time) .. (to_date, end_time) is one continuous span.
    """
    __tablename__ = "blocked_ranges"

    id = Column(Integer, primary_key=True, index=True)
    provider_id = Column(Integer, ForeignKey("providers.id", ondelete="CASCADE"), nullable=False)
    from_date = Column(String(10), nullable=False)
    to_date = Column(String(10), nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)
    reason = Column(String, nullable=True)

    provider = relationship("Provider", back_populates="blocked_ranges")
