"""Trigger model - notification channels fired by monitor bindings."""
from sqlalchemy import Column, Integer, String, Text, DateTime

from ..database import Base
from ..utils.dates import utcnow


class Trigger(Base):
    """A named notification target (webhook, discord, slack or email)."""

    __tablename__ = "triggers"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String, nullable=False, unique=True)
    trigger_type = Column(String, nullable=False)  # webhook, discord, slack, email
    trigger_desc = Column(String, nullable=False, default="")
    trigger_status = Column(String, nullable=False, default="ACTIVE")  # ACTIVE, INACTIVE
    trigger_meta = Column(Text, nullable=False, default="{}")  # JSON: url, headers, recipients, ...
    created_at = Column(DateTime, default=utcnow)
    updated_at = Column(DateTime, default=utcnow, onupdate=utcnow)
