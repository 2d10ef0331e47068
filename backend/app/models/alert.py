"""Alert model - history of monitor state changes."""
from sqlalchemy import Column, Integer, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from ..database import Base
from ..utils.dates import utcnow


class Alert(Base):
    """System-generated record of a monitor entering or leaving a bad state."""

    __tablename__ = "alerts"

    id = Column(Integer, primary_key=True, autoincrement=True)
    monitor_id = Column(Integer, ForeignKey("monitors.id", ondelete="CASCADE"), nullable=False)
    alert_type = Column(String, nullable=False)  # down, degraded
    alert_status = Column(String, nullable=False, default="TRIGGERED")  # TRIGGERED, RESOLVED
    severity = Column(String, nullable=True)
    payload = Column(String, nullable=True)  # JSON snapshot of the health checks
    created_at = Column(DateTime, default=utcnow, index=True)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)

    # Relationship
    monitor = relationship("Monitor", back_populates="alerts")
