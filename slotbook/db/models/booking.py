from sqlalchemy import Column, Integer, String, DateTime, UniqueConstraint, Index
from datetime import datetime
from slotbook.db.base import Base


class Booking(Base):
    __tablename__ = "bookings"
    __table_args__ = (
        # last-line guard for concurrent check-then-insert on the same slot
        UniqueConstraint("provider_id", "date", "start_time", "active_key", name="uq_booking_slot"),
        Index("ix_bookings_provider_date", "provider_id", "date"),
    )

    id = Column(Integer, primary_key=True, index=True)

    # Older rows carry the provider id as text; see SqlBookingStore
    provider_id = Column(String, nullable=False)

    patient_name = Column(String, nullable=False)
    patient_email = Column(String, nullable=False)
    patient_phone = Column(String, nullable=True)

    date = Column(String(10), nullable=False)
    start_time = Column(String(5), nullable=False)
    end_time = Column(String(5), nullable=False)

    status = Column(String, nullable=False, default="confirmed")
    cancellation_token = Column(String, unique=True, index=True, nullable=False)

    # 0 while the booking holds its slot; the row id once cancelled so the
    # slot can be booked again without tripping uq_booking_slot
    active_key = Column(Integer, nullable=False, default=0)

    reason = Column(String, nullable=True)
    notes = Column(String, nullable=True)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
