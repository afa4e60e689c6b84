from sqlalchemy import (
    Column, Integer, String, Float, Boolean, Text, ForeignKey,
    DateTime, Index
)
from sqlalchemy.orm import relationship
from datetime import datetime
from travelmarket.core.database import Base


class ServiceProvider(Base):
    __tablename__ = "service_providers"

    id = Column(Integer, primary_key=True)
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True)
    name = Column(String, nullable=False)
    provider_type = Column(String, nullable=False)  # guide, transport, hotel, ...
    contact_email = Column(String)
    contact_phone = Column(String)
    location = Column(String)
    description = Column(Text)
    created_at = Column(DateTime, default=datetime.utcnow)

    services = relationship("Service", back_populates="provider", cascade="all, delete")
    bookings = relationship("Booking", back_populates="provider", cascade="all, delete")
    blocked_dates = relationship("ProviderBlockedDate", back_populates="provider", cascade="all, delete")
    seasons = relationship("ProviderSeason", back_populates="provider", cascade="all, delete")
    user = relationship("User", back_populates="service_provider")

    __table_args__ = (
        Index("ix_provider_name", "name"),
        Index("ix_provider_type", "provider_type"),
    )


class Service(Base):
    __tablename__ = "services"

    id = Column(Integer, primary_key=True)
    provider_id = Column(Integer, ForeignKey("service_providers.id", ondelete="CASCADE"), nullable=False)
    type = Column(String, nullable=False)  # tour, transfer, room, ...
    title = Column(String, nullable=False)
    description = Column(Text)
    location = Column(String)
    price = Column(Float)
    currency = Column(String(3), default="USD")
    is_available = Column(Boolean, default=True)
    created_at = Column(DateTime, default=datetime.utcnow)

    provider = relationship("ServiceProvider", back_populates="services")

    __table_args__ = (
        Index("ix_service_type", "type"),
        Index("ix_service_provider_id", "provider_id"),
    )

    @property
    def provider_name(self):
        return self.provider.name if self.provider else None
