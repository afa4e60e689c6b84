from sqlalchemy import Column, Integer, ForeignKey, Date, DateTime, UniqueConstraint
from sqlalchemy.orm import relationship
from datetime import datetime
from travelmarket.core.database import Base


class ProviderBlockedDate(Base):
    __tablename__ = "provider_blocked_dates"

    id = Column(Integer, primary_key=True)
    provider_id = Column(Integer, ForeignKey("service_providers.id", ondelete="CASCADE"), nullable=False)
    day = Column(Date, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow)

    provider = relationship("ServiceProvider", back_populates="blocked_dates")

    __table_args__ = (
        UniqueConstraint("provider_id", "day", name="uq_provider_blocked_day"),
    )
