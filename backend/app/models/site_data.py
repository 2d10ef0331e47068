"""SiteData model - key-value store for site-wide collections."""
from sqlalchemy import Column, String, Text, DateTime

from ..database import Base
from ..utils.dates import utcnow


class SiteData(Base):
    """Site-wide data stored as JSON text under a unique key."""

    __tablename__ = "site_data"

    key = Column(String, primary_key=True)
    value = Column(Text, nullable=False)  # JSON
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
