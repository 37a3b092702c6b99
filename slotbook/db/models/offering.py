# slotbook/db/models/offering.py

from sqlalchemy import Column, DateTime, Integer, String, ForeignKey, Boolean, Float, CheckConstraint, func
from sqlalchemy.orm import relationship
from slotbook.db.base import Base


class Offering(Base):
    __tablename__ = "offerings"
    __table_args__ = (
        CheckConstraint("duration_minutes BETWEEN 15 AND 240"),
        CheckConstraint("break_minutes BETWEEN 0 AND 60"),
    )

    id = Column(Integer, primary_key=True, index=True)

    provider_id = Column(Integer, ForeignKey("providers.id", ondelete="CASCADE"), nullable=False)

    # Basic details
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    price = Column(Float, nullable=False, default=0)

    # Slot grid (in minutes)
    duration_minutes = Column(Integer, nullable=False, default=60)
    break_minutes = Column(Integer, nullable=False, default=0)

    # Status
    is_active = Column(Boolean, default=True)

    # Timestamps
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    provider = relationship("Provider", back_populates="offerings")
