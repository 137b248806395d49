from sqlalchemy import JSON, Column, DateTime, ForeignKey, String

from teamkeys.db.base import Base
from teamkeys.models.team import generate_uuid, utcnow


class Event(Base):
    """Append-only audit record of a mutating action."""

    __tablename__ = "events"

    id = Column(String, primary_key=True, default=generate_uuid)
    name = Column(String, nullable=False, index=True)
    actor_id = Column(String, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    team_id = Column(String, ForeignKey("teams.id", ondelete="CASCADE"), nullable=False, index=True)
    user_id = Column(String, nullable=True)
    model_id = Column(String, nullable=True, index=True)
    data = Column(JSON, nullable=True)
    auth_type = Column(String, nullable=True)
    ip = Column(String, nullable=True)
    created_at = Column(DateTime(timezone=True), default=utcnow)
