from sqlalchemy import Column, Integer, String, ForeignKey, Date, DateTime, Index
from sqlalchemy.orm import relationship
from datetime import datetime
from travelmarket.core.database import Base


class ProviderSeason(Base):
    __tablename__ = "provider_seasons"

    id = Column(Integer, primary_key=True)
    provider_id = Column(Integer, ForeignKey("service_providers.id", ondelete="CASCADE"), nullable=False)
    label = Column(String, nullable=False, default="low")  # low, high, ...
    start_date = Column(Date, nullable=False)
    end_date = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)

    provider = relationship("ServiceProvider", back_populates="seasons")

    __table_args__ = (
        Index("ix_season_provider_start", "provider_id", "start_date"),
    )
