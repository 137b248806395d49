"""
Collection of all database models for easy import.
"""

from teamkeys.db.base import Base

# Import all models to register them with SQLAlchemy
from teamkeys.models.team import Team
from teamkeys.models.user import User
from teamkeys.models.api_key import ApiKey
from teamkeys.models.event import Event

__all__ = [
    "Base",
    "Team",
    "User",
    "ApiKey",
    "Event",
]
