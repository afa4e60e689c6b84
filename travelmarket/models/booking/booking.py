from sqlalchemy import (
    Column, Integer, String, Float, Boolean, Text, ForeignKey,
    Date, DateTime, JSON, Enum, Index, text
)
from sqlalchemy.orm import relationship
from datetime import datetime
from travelmarket.core.database import Base
import enum


class BookingStatus(str, enum.Enum):
    pending = "pending"
    active = "active"
    rejected = "rejected"
    cancelled = "cancelled"


# Statuses whose days are occupied on the provider calendar.
HOLDING_STATUSES = (BookingStatus.pending, BookingStatus.active)


class BookingKind(str, enum.Enum):
    dates = "dates"
    range = "range"


class Booking(Base):
    __tablename__ = "bookings"

    id = Column(Integer, primary_key=True, index=True)
    provider_id = Column(Integer, ForeignKey("service_providers.id", ondelete="CASCADE"), nullable=False)
    service_id = Column(Integer, ForeignKey("services.id", ondelete="SET NULL"), nullable=True)
    requester_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False)

    kind = Column(Enum(BookingKind), nullable=False, default=BookingKind.dates)
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    status = Column(Enum(BookingStatus), nullable=False, default=BookingStatus.pending)

    note = Column(Text)
    attachments = Column(JSON, nullable=False, default=list)

    provider_price = Column(Float, nullable=True)
    currency = Column(String(3), nullable=True)
    provider_note = Column(Text)

    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    provider = relationship("ServiceProvider", back_populates="bookings")
    service = relationship("Service")
    requester = relationship("User", back_populates="bookings")
    booking_dates = relationship(
        "BookingDate",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingDate.day",
    )

    __table_args__ = (
        Index("ix_booking_provider_status", "provider_id", "status"),
        Index("ix_booking_requester_id", "requester_id"),
    )

    @property
    def dates(self):
        return [bd.day for bd in self.booking_dates]


class BookingDate(Base):
    __tablename__ = "booking_dates"

    id = Column(Integer, primary_key=True)
    booking_id = Column(Integer, ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    provider_id = Column(Integer, ForeignKey("service_providers.id", ondelete="CASCADE"), nullable=False)
    day = Column(Date, nullable=False)
    # True while the booking is pending or active
    held = Column(Boolean, nullable=False, default=True)

    booking = relationship("Booking", back_populates="booking_dates")

    __table_args__ = (
        Index("ix_booking_dates_booking_id", "booking_id"),
        Index("ix_booking_dates_provider_day", "provider_id", "day"),
        Index(
            "uq_booking_dates_provider_day_held",
            "provider_id", "day",
            unique=True,
            postgresql_where=text("held"),
            sqlite_where=text("held = 1"),
        ),
    )
