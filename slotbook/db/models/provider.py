# slotbook/db/models/provider.py
from sqlalchemy import Column, Integer, String, Boolean
from sqlalchemy.orm import relationship
from slotbook.db.base import Base


class Provider(Base):
    __tablename__ = "providers"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String, unique=True, index=True, nullable=False)
    name = Column(String, nullable=False)
    is_active = Column(Boolean, default=True)

    # Weekly availability and blocked ranges are replaced wholesale on update
    availabilities = relationship(
        "WeeklyAvailability",
        back_populates="provider",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    blocked_ranges = relationship(
        "BlockedRange",
        back_populates="provider",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    offerings = relationship("Offering", back_populates="provider", lazy="selectin")
