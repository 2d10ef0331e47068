"""Database models."""
from .site_data import SiteData
from .monitor import Monitor
from .alert import Alert
from .trigger import Trigger
from .user import User, UserSession

__all__ = ["SiteData", "Monitor", "Alert", "Trigger", "User", "UserSession"]
