"""Monitor model - items being monitored."""
from sqlalchemy import Column, Integer, String, Text, DateTime
from sqlalchemy.orm import relationship

from ..database import Base
from ..utils.dates import utcnow


class Monitor(Base):
    """A monitored service, addressed externally by its tag."""

    __tablename__ = "monitors"

    id = Column(Integer, primary_key=True, autoincrement=True)
    tag = Column(String, nullable=False, unique=True, index=True)
    name = Column(String, nullable=False)
    description = Column(String, nullable=True)
    monitor_type = Column(String, nullable=False, default="API")  # API, PING, TCP, DNS, ...
    down_trigger = Column(Text, nullable=True)  # JSON: DOWN trigger binding
    degraded_trigger = Column(Text, nullable=True)  # JSON: DEGRADED trigger binding
    created_at = Column(DateTime, default=utcnow)

    # Relationships
    alerts = relationship("Alert", back_populates="monitor", cascade="all, delete-orphan")
